"""
Resource monitor: the outer supervisory loop.

On every check interval the monitor asks whether the watched process or
module is in use, and if so starts a RefocusSession bounded to finish before
the next check. Sessions are fire-and-forget daemon threads; the monitor
never waits for them.
"""

import itertools
import logging
import threading
from typing import Callable, Optional, Set

from ..models.config import MonitorConfig, ResourceKind
from ..models.runtime import DaemonPhase
from ..system.commands import run_command
from ..system.modules import is_module_in_use
from ..system.processes import is_process_running, list_process_names
from ..validation import ErrorSeverity, ResourceLookupError, handle_error
from .clock import Clock, SystemClock, next_boundary
from .session import CommandRunner, RefocusSession
from .shared_state import RuntimeState

logger = logging.getLogger(__name__)

# Collaborators report lookup failures by raising ResourceLookupError (or
# OSError); both count as "not in use" for that tick. Anything else is fatal.
ProcessLister = Callable[[], Set[str]]
ModuleReader = Callable[[str], bool]
SessionSpawner = Callable[[RefocusSession], None]


def start_session_thread(session: RefocusSession) -> None:
    """Run a session on its own daemon thread so process exit never waits for it."""
    thread = threading.Thread(target=session.run, name=session.name, daemon=True)
    thread.start()


class ResourceMonitor:
    """
    Periodically checks the watched resource and spawns refocus sessions.
    """

    def __init__(
        self,
        config: MonitorConfig,
        state: RuntimeState,
        process_lister: ProcessLister = list_process_names,
        module_reader: ModuleReader = is_module_in_use,
        runner: CommandRunner = run_command,
        clock: Optional[Clock] = None,
        spawner: SessionSpawner = start_session_thread,
    ):
        self.config = config
        self.state = state
        self.process_lister = process_lister
        self.module_reader = module_reader
        self.runner = runner
        self.clock = clock or SystemClock()
        self.spawner = spawner

        self._session_ids = itertools.count(1)
        self.ticks = 0
        self.sessions_spawned = 0

    def run(self) -> None:
        """
        Main loop. Returns once the shutdown signal fires.

        The first check happens one check interval after start; the schedule
        is anchored to the start time and missed ticks are coalesced.
        """
        self.state.transition(DaemonPhase.RUNNING)
        shutdown = self.state.shutdown_requested
        interval = self.config.check_interval
        scheduled = self.clock.now() + interval

        while not self.clock.wait(shutdown, scheduled - self.clock.now()):
            self.tick()
            scheduled = next_boundary(scheduled, interval, self.clock.now())

        logger.info(
            f"Monitor stopped after {self.ticks} check(s), "
            f"{self.sessions_spawned} session(s) started"
        )

    def tick(self, tick_time: Optional[float] = None) -> Optional[RefocusSession]:
        """
        Run one check and start a session if the resource is in use.

        Returns:
            The started session, or None.
        """
        if self.state.shutdown_requested.is_set():
            return None
        self.ticks += 1
        if tick_time is None:
            tick_time = self.clock.now()

        if not self.is_resource_active():
            logger.debug(f"{self.config.resource_name} not in use")
            return None

        session = RefocusSession(
            config=self.config,
            deadline=tick_time + self.config.session_lifetime,
            shutdown_event=self.state.shutdown_requested,
            runner=self.runner,
            clock=self.clock,
            session_id=next(self._session_ids),
            start=tick_time,
        )
        self.sessions_spawned += 1
        logger.info(f"{self.config.resource_name} in use, starting {session.name}")
        self.spawner(session)
        return session

    def is_resource_active(self) -> bool:
        """
        Ask the appropriate collaborator whether the resource is in use.

        Lookup failures are logged and reported as inactive.
        """
        name = self.config.resource_name
        try:
            if self.config.resource_kind is ResourceKind.PROCESS:
                return is_process_running(name, lister=self.process_lister)
            return self.module_reader(name)
        except (ResourceLookupError, OSError) as e:
            handle_error(
                e,
                context=f"checking {self.config.resource_kind.value} '{name}'",
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
            return False
