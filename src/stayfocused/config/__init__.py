"""
Configuration management for the stayfocused package.

Settings come from built-in defaults, an optional TOML file and the command
line, in increasing order of precedence, and are validated into a
MonitorConfig.
"""

from .loader import (
    DEFAULT_SETTINGS,
    load_monitor_settings,
    load_toml_file,
    merge_settings,
)
from .validators import validate_monitor_config

__all__ = [
    "DEFAULT_SETTINGS",
    "load_monitor_settings",
    "load_toml_file",
    "merge_settings",
    "validate_monitor_config",
]
