"""
Tool configuration management.
"""

from meshwork.config.loader import CONFIG_FILE, Config, is_config_file, load_config

__all__ = [
    "CONFIG_FILE",
    "Config",
    "is_config_file",
    "load_config",
]
