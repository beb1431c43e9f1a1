"""Shared helper utilities for the CLI entry point."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGING_INITIALIZED = False


def ensure_root_logging(level: str | int) -> None:
    """Configure root logging once while allowing level updates."""
    global _LOGGING_INITIALIZED
    root_logger = logging.getLogger()
    if not _LOGGING_INITIALIZED:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(handler)
        _LOGGING_INITIALIZED = True
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def describe_command(argv_prefix: list[str], command: str) -> str:
    """Render the argv that will run ``command`` for logs and dry-run output."""
    return " ".join([*argv_prefix, repr(command)])


__all__ = ["describe_command", "ensure_root_logging"]
