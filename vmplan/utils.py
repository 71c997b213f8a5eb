"""Shared utility functions."""

import json
import logging
import os
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("vmplan")


def setup_logging(level: int | str | None = None) -> None:
    """Set up logging with Rich handler to stderr.

    :param level: Log level name or number (default: VMPLAN_LOG_LEVEL or INFO)
    """
    if level is None:
        level = os.getenv("VMPLAN_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[
            RichHandler(console=Console(stderr=True), show_path=False, markup=True)
        ],
        force=True,
    )
    logging.getLogger("botocore").setLevel(logging.WARNING)


def log(msg: str) -> None:
    """Log info message."""
    logger.info(msg)


def warn(msg: str) -> None:
    """Log warning message."""
    logger.warning(msg)


def error(msg: str) -> None:
    """Log error message and exit."""
    logger.error(msg)
    sys.exit(1)


def load_json(path: str | Path) -> dict:
    """Read a JSON file, exiting with a clear message when missing or invalid."""
    path = Path(path)
    if not path.exists():
        error(f"File not found: '{path}'")
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError as e:
        error(f"Invalid JSON in '{path}': {e}")
