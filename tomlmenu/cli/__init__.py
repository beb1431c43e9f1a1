"""Core error type shared by the menu pipeline modules."""

from __future__ import annotations


class MenuError(Exception):
    """Base class for failures that abort a menu run before anything is launched."""


__all__ = ["MenuError"]
