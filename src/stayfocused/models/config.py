"""
Configuration data models.

MonitorConfig is built once at startup by config.validators and never
mutated afterwards; every session holds a reference to the same instance.
"""

import shlex
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ResourceKind(Enum):
    """What kind of resource the monitor watches."""
    PROCESS = "process"
    MODULE = "module"


@dataclass(frozen=True)
class MonitorConfig:
    """
    Validated daemon configuration. Intervals are in seconds.
    """

    # Which collaborator answers "is it in use?".
    resource_kind: ResourceKind
    # Process name (or executable path) or kernel module name.
    resource_name: str
    # Outer poll period.
    check_interval: float
    # Inner poll period; strictly shorter than check_interval.
    refocus_interval: float
    # argv of the corrective command, first element is the executable.
    corrective_command: Tuple[str, ...]
    # Camera device, used by the built-in v4l2 command.
    device: str = "/dev/video0"

    @property
    def session_lifetime(self) -> float:
        """How long a session may run before the next check fires."""
        return self.check_interval - self.refocus_interval

    def describe(self) -> str:
        """Multi-line startup banner."""
        lines = [f"Device: {self.device}"] if self.device else []
        if self.resource_kind is ResourceKind.PROCESS:
            lines.append(f"Watching for process: {self.resource_name}")
            lines.append(f"Checking if running every: {_format_seconds(self.check_interval)}")
        else:
            lines.append(f"Watching module for use: {self.resource_name}")
            lines.append(f"Checking if in use every: {_format_seconds(self.check_interval)}")
        lines.append(f"Refocus command: {shlex.join(self.corrective_command)}")
        lines.append(f"Will run refocus command every: {_format_seconds(self.refocus_interval)}")
        return "\n\t".join(lines)


def _format_seconds(seconds: float) -> str:
    minutes, secs = divmod(seconds, 60)
    if minutes and secs:
        return f"{int(minutes)}m{secs:g}s"
    if minutes:
        return f"{int(minutes)}m"
    return f"{secs:g}s"
