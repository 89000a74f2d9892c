# src/tuido/core/tags.py

from __future__ import annotations

TAG_PREFIX = "#"


def parse_tags(raw: str) -> tuple[str, list[str]]:
    """
    Split free-text input into (title, tags).

    Whitespace-separated tokens starting with '#' become tags (prefix stripped,
    lowercased, first occurrence wins). Everything else is rejoined with single
    spaces as the title. A bare '#' is dropped.

    >>> parse_tags("Buy milk #errand #home")
    ('Buy milk', ['errand', 'home'])
    """
    words: list[str] = []
    tags: list[str] = []

    for token in raw.split():
        if not token.startswith(TAG_PREFIX):
            words.append(token)
            continue
        tag = token[len(TAG_PREFIX):].lower()
        if tag and tag not in tags:
            tags.append(tag)

    return " ".join(words), tags
