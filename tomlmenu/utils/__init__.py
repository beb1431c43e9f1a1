from .pathing import default_base_config_path, default_config_dir, resolve_user_path

__all__ = [
    "default_base_config_path",
    "default_config_dir",
    "resolve_user_path",
]
