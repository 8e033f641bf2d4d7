"""
Time source for the supervisory loops.

All waiting in the monitor and in refocus sessions goes through a Clock so
the loops can be driven by a deterministic clock in tests.
"""

import threading
import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Monotonic time plus an interruptible wait."""

    @abstractmethod
    def now(self) -> float:
        """Current monotonic time in seconds."""

    @abstractmethod
    def wait(self, event: threading.Event, timeout: float) -> bool:
        """
        Block until the event is set or the timeout elapses.

        Returns:
            True if the event is set.
        """


class SystemClock(Clock):
    """Wall-clock implementation backed by time.monotonic and Event.wait."""

    def now(self) -> float:
        return time.monotonic()

    def wait(self, event: threading.Event, timeout: float) -> bool:
        return event.wait(max(0.0, timeout))


def next_boundary(scheduled: float, interval: float, now: float) -> float:
    """
    Return the next firing time after `scheduled` has fired.

    Firing times that were missed while the caller was busy are coalesced: at
    most one overdue firing is kept, the rest are dropped.
    """
    following = scheduled + interval
    if now > following:
        missed = int((now - following) // interval)
        following += missed * interval
    return following
