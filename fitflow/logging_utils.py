"""Centralized logging configuration for FitFlow.

Sets up a console handler and an optional file handler with a
consistent format.  Called once from the CLI before anything else runs.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from .settings import APP_SUPPORT_DIR

DEFAULT_LOG_FILENAME = "fitflow.log"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def get_default_log_path() -> Path:
    return APP_SUPPORT_DIR / DEFAULT_LOG_FILENAME


def setup_logging(level: str | int = "INFO", log_file: str | Path | None = None) -> None:
    """Configure the root logger.  Safe to call more than once."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # SQLAlchemy is chatty at INFO
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
