"""
Configuration file loading.

An optional TOML file can supply the same settings as the command line under a
[monitor] table:

    [monitor]
    module = "uvcvideo"
    device = "/dev/video0"
    check = 1        # minutes
    refocus = 10     # seconds
    v4l2 = true
    # command = ["/usr/local/bin/refocus", "--camera", "0"]
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from ..validation import ConfigurationError

logger = logging.getLogger(__name__)

# Keys accepted in the [monitor] table.
KNOWN_KEYS = frozenset({"process", "module", "device", "check", "refocus", "v4l2", "command"})

DEFAULT_SETTINGS: Dict[str, Any] = {
    "process": "",
    "module": "uvcvideo",
    "device": "/dev/video0",
    "check": 1,
    "refocus": 10,
    "v4l2": False,
    "command": [],
}


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file.

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed
    """
    logger.info(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        raise ConfigurationError(f"{description} not found: {file_path}", field_name="config", value=str(file_path))

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Error parsing {description} {file_path}: {e}", field_name="config", value=str(file_path)) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading {description} {file_path}: {e}", field_name="config", value=str(file_path)) from e


def load_monitor_settings(config_path: Path) -> Dict[str, Any]:
    """
    Load the [monitor] table from a config file.

    Unknown keys are logged and ignored.
    """
    data = load_toml_file(config_path)
    monitor = data.get("monitor", {})
    if not isinstance(monitor, dict):
        raise ConfigurationError("[monitor] must be a table", field_name="monitor", value=monitor)

    unknown = sorted(set(monitor) - KNOWN_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown settings in {config_path}: {', '.join(unknown)}")
    return {k: v for k, v in monitor.items() if k in KNOWN_KEYS}


def merge_settings(
    file_settings: Optional[Dict[str, Any]], cli_settings: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Merge settings with precedence CLI > file > defaults.

    CLI values of None mean "not given on the command line". An empty command
    list from the CLI likewise falls back to the file's command.
    """
    merged = dict(DEFAULT_SETTINGS)
    if file_settings:
        merged.update(file_settings)
    for key, value in cli_settings.items():
        if value is None:
            continue
        if key == "command" and not value:
            continue
        merged[key] = value
    return merged
