# src/tuido/cli/main.py

"""
CLI entrypoint.

Initializes logging, opens the task store, then runs the Textual app until
the user quits. A store that cannot be opened aborts with exit status 1.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_app
from ..config import get_settings
from ..core.errors import StorageUnavailable
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(
        log_dir=settings.data_dir,
        console=settings.console_logging,
        console_level=console_level,
    )

    logger.info("Starting %s (db=%s, log=%s)...", settings.app_name, settings.db_path, log_file)

    try:
        app = create_app(settings=settings)
    except StorageUnavailable as e:
        logger.error("Startup failed: %s", e)
        print(f"Error opening database: {e}", file=sys.stderr)
        return 1

    app.run()
    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
