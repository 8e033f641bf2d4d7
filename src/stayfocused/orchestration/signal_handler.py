"""
Signal handling for the daemon.

Every termination-intent signal is treated the same way: it fires the global
shutdown signal on the RuntimeState.
"""

import logging
import signal
from typing import Any, Dict, Optional

from .shared_state import RuntimeState

logger = logging.getLogger(__name__)

# SIGHUP and SIGQUIT do not exist on every platform.
TERMINATION_SIGNALS = tuple(
    getattr(signal, name)
    for name in ("SIGINT", "SIGTERM", "SIGHUP", "SIGQUIT")
    if hasattr(signal, name)
)


class SignalHandler:
    """
    Installs and restores handlers that request a daemon shutdown.
    """

    def __init__(self, state: RuntimeState):
        self.state = state
        self._original_handlers: Dict[int, Any] = {}
        self._signal_handlers_set = False
        self.received_signal: Optional[int] = None

    def setup_signal_handlers(self) -> None:
        """Install the shutdown handler for every termination signal."""
        for signum in TERMINATION_SIGNALS:
            try:
                self._original_handlers[signum] = signal.signal(signum, self._handle_signal)
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to set up handler for {signal.Signals(signum).name}: {e}")
        self._signal_handlers_set = True
        logger.debug("Signal handlers set up")

    def cleanup_signal_handlers(self) -> None:
        """Restore original signal handlers."""
        if not self._signal_handlers_set:
            return

        try:
            for signum, handler in self._original_handlers.items():
                if handler is not None:
                    signal.signal(signum, handler)
            logger.debug("Signal handlers restored")
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to restore signal handlers: {e}")
        finally:
            self._original_handlers.clear()
            self._signal_handlers_set = False

    def _handle_signal(self, signum: int, frame: Any) -> None:
        """
        Request shutdown on receipt of any handled signal.

        Args:
            signum: Signal number that was received
            frame: Current stack frame (unused)
        """
        self.received_signal = signum
        logger.warning(f"Received signal: {signal.Signals(signum).name}, will exit now")
        self.state.request_shutdown(f"signal {signal.Signals(signum).name}")
