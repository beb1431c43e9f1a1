"""Small shared constants for CLI modules.

Kept separate so the loader, selector and entry point can share defaults
without importing each other.
"""

from __future__ import annotations

COMMAND = "tomlmenu"

CONFIG_DIR_NAME = "tomlmenu"
BASE_CONFIG_FILE = "config.toml"

DEFAULT_SELECTOR = "dmenu"
DEFAULT_SHELL = ("sh", "-c")
DEFAULT_SEPARATOR = "────────"

STDIN_SOURCE = "<stdin>"
