"""
stayfocused: keep a webcam in focus while it is in use.

A small watchdog daemon. It periodically checks whether a process is running
or a kernel module is in use, and while it is, repeatedly runs a corrective
command (by default ``v4l2-ctl ... focus_automatic_continuous=1``).

The package is organized into:
- config: settings loading and startup validation
- models: configuration and runtime data structures
- validation: exception taxonomy and error handling
- system: process lister, module usage reader, command runner
- orchestration: resource monitor, refocus sessions, shutdown handling
- cli: command-line interface

Usage:
    From command line:
        stay-focused -module uvcvideo -v4l2

    Programmatically:
        from stayfocused import ResourceMonitor, RuntimeState, validate_monitor_config
        config = validate_monitor_config({...})
        ResourceMonitor(config, RuntimeState()).run()
"""

from .cli import main_cli
from .config import validate_monitor_config
from .models import CommandResult, DaemonPhase, MonitorConfig, ResourceKind
from .orchestration import RefocusSession, ResourceMonitor, RuntimeState, SignalHandler
from .system import build_v4l2_command, is_module_in_use, list_process_names, run_command
from .validation import (
    ConfigurationError,
    CorrectiveCommandError,
    ModuleTableFormatError,
    ResourceLookupError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    "main_cli",
    "validate_monitor_config",
    # Models
    "CommandResult",
    "DaemonPhase",
    "MonitorConfig",
    "ResourceKind",
    # Orchestration
    "RefocusSession",
    "ResourceMonitor",
    "RuntimeState",
    "SignalHandler",
    # System
    "build_v4l2_command",
    "is_module_in_use",
    "list_process_names",
    "run_command",
    # Errors
    "ConfigurationError",
    "CorrectiveCommandError",
    "ModuleTableFormatError",
    "ResourceLookupError",
    "ValidationError",
]
