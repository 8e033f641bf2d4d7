"""
Refocus sessions.

A session is one bounded burst of corrective command invocations. It is
spawned by the ResourceMonitor when the watched resource is in use and ends
before the monitor's next check, or as soon as shutdown is observed.
"""

import logging
import threading
from typing import Callable, Optional, Sequence

from ..models.config import MonitorConfig
from ..models.runtime import CommandResult
from ..system.commands import format_command, run_command
from ..validation import CorrectiveCommandError, ErrorSeverity, handle_error
from .clock import Clock, SystemClock, next_boundary

logger = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str]], CommandResult]

STOP_DEADLINE = "deadline"
STOP_SHUTDOWN = "shutdown"


class RefocusSession:
    """
    Runs the corrective command every refocus_interval until the deadline.

    Firings are scheduled at start + k * refocus_interval for k >= 1, where
    start is the monitor tick that created the session, and happen only while
    the scheduled time is not past the deadline. A thread that starts late
    catches up through the usual tick coalescing. Shutdown is checked at every
    wait boundary; an invocation that is already running is allowed to finish.
    """

    def __init__(
        self,
        config: MonitorConfig,
        deadline: float,
        shutdown_event: threading.Event,
        runner: CommandRunner = run_command,
        clock: Optional[Clock] = None,
        session_id: int = 0,
        start: Optional[float] = None,
    ):
        self.config = config
        self.deadline = deadline
        # Firings are anchored here, not at thread start.
        self.start = start
        self.shutdown_event = shutdown_event
        self.runner = runner
        self.clock = clock or SystemClock()
        self.session_id = session_id

        self.invocations = 0
        self.failures = 0
        self.stop_reason: Optional[str] = None

    @property
    def name(self) -> str:
        return f"RefocusSession-{self.session_id}"

    def run(self) -> None:
        """Session loop. Returns when the deadline passes or on shutdown."""
        interval = self.config.refocus_interval
        start = self.clock.now() if self.start is None else self.start
        scheduled = start + interval
        logger.debug(f"{self.name} started, {self.deadline - start:.3f}s until deadline")

        while True:
            if scheduled > self.deadline:
                self.stop_reason = STOP_DEADLINE
                break
            if self.clock.wait(self.shutdown_event, scheduled - self.clock.now()):
                self.stop_reason = STOP_SHUTDOWN
                break
            self._invoke()
            scheduled = next_boundary(scheduled, interval, self.clock.now())

        logger.debug(
            f"{self.name} finished ({self.stop_reason}) after "
            f"{self.invocations} invocation(s), {self.failures} failed"
        )

    def _invoke(self) -> None:
        # Fresh argv for every invocation; the template itself is never touched.
        argv = list(self.config.corrective_command)
        self.invocations += 1
        try:
            result = self.runner(argv)
        except Exception as e:
            result = CommandResult(tuple(argv), -1, error=f"{type(e).__name__}: {e}")

        if result.ok:
            logger.debug(f"{self.name}: refocus command succeeded")
            return

        self.failures += 1
        detail = result.error or f"exit status {result.returncode}"
        if result.stderr:
            detail = f"{detail}: {result.stderr.strip()}"
        handle_error(
            CorrectiveCommandError(
                f"Error running refocus command ({format_command(argv)}): {detail}",
                result=result,
            ),
            context=self.name,
            severity=ErrorSeverity.WARNING,
            reraise=False,
            logger=logger,
        )
