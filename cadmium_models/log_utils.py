"""Logging helpers for the train and test commands."""
from __future__ import annotations

import logging
from typing import Optional

from rich.logging import RichHandler


QUIET_LOGGERS = ("matplotlib", "PIL")


def setup_logging(level: str = "INFO") -> None:
    """Route log records through Rich; plotting libraries stay at WARNING."""

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["setup_logging", "get_logger"]
