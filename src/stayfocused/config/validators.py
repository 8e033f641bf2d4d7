"""
Startup configuration validation.

Turns merged raw settings into an immutable MonitorConfig, failing fast with
ConfigurationError before the daemon enters its loop.
"""

import logging
from typing import Any, Dict

from ..models.config import MonitorConfig, ResourceKind
from ..system.commands import build_v4l2_command
from ..validation import (
    ConfigurationError,
    ValidationError,
    validate_command_argv,
    validate_non_empty_string,
    validate_positive_float,
)

logger = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60.0


def _resolve_resource(settings: Dict[str, Any]) -> tuple:
    process = settings.get("process") or ""
    module = settings.get("module") or ""
    if not isinstance(process, str) or not isinstance(module, str):
        raise ConfigurationError("process and module must be strings", field_name="process")

    # A process name takes priority over the module.
    if process.strip():
        return ResourceKind.PROCESS, process.strip()
    if module.strip():
        return ResourceKind.MODULE, module.strip()
    raise ConfigurationError("Either process or module is required", field_name="process")


def _resolve_command(settings: Dict[str, Any]) -> tuple:
    if settings.get("v4l2"):
        device = validate_non_empty_string(settings.get("device"), field_name="device")
        return tuple(build_v4l2_command(device))

    command = settings.get("command") or []
    if not command:
        raise ConfigurationError(
            "A refocus command is required (pass one after the flags, or use -v4l2)",
            field_name="command",
        )
    return tuple(validate_command_argv(command, field_name="command"))


def validate_monitor_config(settings: Dict[str, Any]) -> MonitorConfig:
    """
    Validate and create a MonitorConfig from merged raw settings.

    Args:
        settings: Raw settings keyed by process, module, device, check
            (minutes), refocus (seconds), v4l2 and command

    Returns:
        Validated MonitorConfig instance

    Raises:
        ConfigurationError: If any setting is missing or contradictory
    """
    try:
        resource_kind, resource_name = _resolve_resource(settings)
        corrective_command = _resolve_command(settings)

        check_minutes = validate_positive_float(
            settings.get("check"), field_name="check", exclusive_min=True
        )
        refocus_seconds = validate_positive_float(
            settings.get("refocus"), field_name="refocus", exclusive_min=True
        )
    except ConfigurationError:
        raise
    except ValidationError as e:
        raise ConfigurationError(str(e), field_name=e.field_name, value=e.value) from e

    check_interval = check_minutes * SECONDS_PER_MINUTE
    refocus_interval = refocus_seconds

    # A session lives for check - refocus seconds, so anything else would
    # never fire the command.
    if refocus_interval >= check_interval:
        raise ConfigurationError(
            f"refocus interval ({refocus_interval:g}s) must be shorter than "
            f"the check interval ({check_interval:g}s)",
            field_name="refocus",
            value=settings.get("refocus"),
        )

    return MonitorConfig(
        resource_kind=resource_kind,
        resource_name=resource_name,
        check_interval=check_interval,
        refocus_interval=refocus_interval,
        corrective_command=corrective_command,
        device=str(settings.get("device") or "").strip(),
    )
