"""
Data models for the stayfocused daemon.

Configuration Models:
- MonitorConfig: immutable, validated startup configuration
- ResourceKind: whether a process or a kernel module is watched

Runtime Models:
- DaemonPhase: Initializing -> Running -> Draining -> Terminated
- CommandResult: outcome of one corrective command invocation
"""

from .config import MonitorConfig, ResourceKind
from .runtime import CommandResult, DaemonPhase

__all__ = [
    "MonitorConfig",
    "ResourceKind",
    "CommandResult",
    "DaemonPhase",
]
