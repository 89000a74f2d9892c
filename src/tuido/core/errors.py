# src/tuido/core/errors.py

from __future__ import annotations

"""
Storage error taxonomy.

StorageUnavailable is fatal and only raised while opening the store.
StorageOperationFailed is raised by individual operations afterwards; callers
log it and keep going.
"""


class StorageError(Exception):
    """Base class for persistence-collaborator failures."""


class StorageUnavailable(StorageError):
    """The backing store cannot be opened or prepared."""


class StorageOperationFailed(StorageError):
    """A load/insert/update/delete against an open store failed."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
