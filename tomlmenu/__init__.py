"""Launch shell commands from TOML-defined dmenu menus."""

__version__ = "0.3.0"

__all__ = ["__version__"]
