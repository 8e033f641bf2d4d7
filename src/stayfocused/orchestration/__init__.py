"""
Orchestration of the supervisory loops.

Components:
- ResourceMonitor: outer loop checking whether the resource is in use
- RefocusSession: bounded inner loop issuing the corrective command
- RuntimeState: global shutdown signal and lifecycle phase
- SignalHandler: maps termination signals to a shutdown request
- Clock/SystemClock: time source used by both loops
"""

from .clock import Clock, SystemClock, next_boundary
from .monitor import ResourceMonitor, start_session_thread
from .session import STOP_DEADLINE, STOP_SHUTDOWN, RefocusSession
from .shared_state import RuntimeState
from .signal_handler import TERMINATION_SIGNALS, SignalHandler

__all__ = [
    "Clock",
    "SystemClock",
    "next_boundary",
    "ResourceMonitor",
    "start_session_thread",
    "RefocusSession",
    "STOP_DEADLINE",
    "STOP_SHUTDOWN",
    "RuntimeState",
    "SignalHandler",
    "TERMINATION_SIGNALS",
]
