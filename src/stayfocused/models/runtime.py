"""
Runtime data models.

This module contains the small value types produced while the daemon runs:
the lifecycle phase and the outcome of a corrective command invocation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class DaemonPhase(Enum):
    """Process lifecycle. Transitions only move forward."""
    INITIALIZING = 1
    RUNNING = 2
    DRAINING = 3
    TERMINATED = 4


@dataclass
class CommandResult:
    """
    Outcome of running one external command.
    """

    argv: Tuple[str, ...]
    # -1 when the command could not be launched at all.
    returncode: int
    stdout: str = ""
    stderr: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and self.error is None
