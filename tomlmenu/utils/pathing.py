"""Filesystem helpers for locating the per-user configuration directory."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path

from tomlmenu.cli._constants import BASE_CONFIG_FILE, CONFIG_DIR_NAME


def default_config_dir(*, environ: Mapping[str, str] | None = None, platform: str | None = None) -> Path:
    """Return the platform-specific directory searched for the base config.

    Linux and other POSIX systems honour ``$XDG_CONFIG_HOME`` and fall back to
    ``~/.config``. macOS uses ``~/Library/Application Support`` and Windows uses
    ``%APPDATA%``.
    """
    env = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform

    if platform == "win32":
        appdata = env.get("APPDATA")
        root = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    elif platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        xdg = env.get("XDG_CONFIG_HOME")
        # XDG requires an absolute path; relative values are ignored.
        root = Path(xdg) if xdg and Path(xdg).is_absolute() else Path.home() / ".config"
    return root / CONFIG_DIR_NAME


def default_base_config_path(**kwargs) -> Path:
    return default_config_dir(**kwargs) / BASE_CONFIG_FILE


def resolve_user_path(path: Path | str) -> Path:
    """Expand ``~`` and make ``path`` absolute relative to the working directory."""
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    return candidate.resolve()


__all__ = ["default_base_config_path", "default_config_dir", "resolve_user_path"]
