"""
Shared runtime state for the orchestration module.

The only state shared between the monitor and its sessions is the shutdown
event, which is set once and never cleared.
"""

import logging
import threading
from dataclasses import dataclass, field

from ..models.runtime import DaemonPhase

logger = logging.getLogger(__name__)


@dataclass
class RuntimeState:
    """
    Process-wide runtime state.
    """
    shutdown_requested: threading.Event = field(default_factory=threading.Event)
    phase: DaemonPhase = DaemonPhase.INITIALIZING
    # Reentrant because the signal handler can run while the main thread holds it.
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    def transition(self, new_phase: DaemonPhase) -> bool:
        """
        Move to a later lifecycle phase.

        Returns:
            False if new_phase is not after the current phase.
        """
        with self._lock:
            if new_phase.value <= self.phase.value:
                logger.debug(f"Ignoring phase change {self.phase.name} -> {new_phase.name}")
                return False
            logger.info(f"Daemon phase: {self.phase.name} -> {new_phase.name}")
            self.phase = new_phase
            return True

    def request_shutdown(self, reason: str = "") -> bool:
        """
        Fire the global shutdown signal.

        Returns:
            False if shutdown had already been requested.
        """
        with self._lock:
            if self.shutdown_requested.is_set():
                return False
            logger.info(f"Shutdown requested{': ' + reason if reason else ''}")
            self.shutdown_requested.set()
            self.transition(DaemonPhase.DRAINING)
            return True
