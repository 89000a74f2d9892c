# tests/test_logging_setup.py

from __future__ import annotations

import logging
import warnings
from pathlib import Path

import pytest

from tuido.logging_setup import _ConsoleNoiseFilter, setup_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    saved = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def _console_handlers(root: logging.Logger) -> list[logging.Handler]:
    return [
        h
        for h in root.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]


def test_setup_logging_writes_file(tmp_path: Path, restore_root_logging) -> None:
    root = restore_root_logging
    log_file = setup_logging(log_dir=tmp_path / "logs")
    logging.getLogger("tuido.test").info("hello from test")
    for h in root.handlers:
        h.flush()

    assert log_file.exists()
    assert "hello from test" in log_file.read_text("utf-8")
    assert not _console_handlers(root)


def test_console_handler_filters_noise(tmp_path: Path, restore_root_logging) -> None:
    root = restore_root_logging
    log_file = setup_logging(log_dir=tmp_path / "logs", console=True)

    (console,) = _console_handlers(root)
    assert any(isinstance(f, _ConsoleNoiseFilter) for f in console.filters)

    with warnings.catch_warnings():
        warnings.simplefilter("always")
        warnings.warn("deprecated thing", DeprecationWarning)
    for h in root.handlers:
        h.flush()

    # Captured warnings still reach the log file.
    assert "deprecated thing" in log_file.read_text("utf-8")


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("tuido.core.session", logging.DEBUG, True),
        ("tuido", logging.INFO, True),
        ("py.warnings", logging.WARNING, False),
        ("py.warnings", logging.ERROR, True),
        ("textual", logging.WARNING, False),
        ("asyncio", logging.CRITICAL, True),
        ("tuidox", logging.INFO, False),
    ],
)
def test_console_filter_levels(name: str, level: int, shown: bool) -> None:
    record = logging.LogRecord(name, level, __file__, 1, "msg", None, None)
    assert _ConsoleNoiseFilter().filter(record) is shown
