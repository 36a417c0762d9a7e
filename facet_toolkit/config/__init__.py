"""Configuration files (YAML) and the helpers that load them.

Packaged defaults live next to this module; users override them with files of
the same name in their config directory (see :func:`get_user_config_dir`).
"""

from .manager import ConfigManager, get_user_config_dir

__all__ = [
    "ConfigManager",
    "get_user_config_dir",
]
