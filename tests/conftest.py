"""
Pytest configuration and shared fixtures for the stay-focused test suite.

All timing in the orchestration tests goes through FakeClock, so the
supervisory loops run deterministically on a single thread.
"""

import sys
import threading
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stayfocused.models import CommandResult, MonitorConfig, ResourceKind  # noqa: E402
from stayfocused.orchestration.clock import Clock  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Test Doubles
# ============================================================================


class FakeClock(Clock):
    """
    Manually driven clock.

    wait() jumps time forward instead of sleeping, firing any callbacks
    scheduled with call_at() on the way. A wait returns early, at the
    callback's time, if a callback sets the awaited event.
    """

    def __init__(self, start: float = 0.0):
        self.time = start
        self._scheduled: List[Tuple[float, Callable[[], None]]] = []

    def now(self) -> float:
        return self.time

    def call_at(self, at: float, callback: Callable[[], None]) -> None:
        self._scheduled.append((at, callback))
        self._scheduled.sort(key=lambda item: item[0])

    def advance(self, seconds: float) -> None:
        self._run_until(self.time + seconds, None)

    def wait(self, event: threading.Event, timeout: float) -> bool:
        if event.is_set():
            return True
        return self._run_until(self.time + max(0.0, timeout), event)

    def _run_until(self, target: float, event: Optional[threading.Event]) -> bool:
        while self._scheduled and self._scheduled[0][0] <= target:
            at, callback = self._scheduled.pop(0)
            self.time = max(self.time, at)
            callback()
            if event is not None and event.is_set():
                return True
        self.time = max(self.time, target)
        return event is not None and event.is_set()


class RecordingRunner:
    """
    Command runner double that records (time, argv) for every call.

    Args:
        clock: Clock used to timestamp calls
        fail_on: 1-based call numbers that should report failure
        duration: How far each call advances the clock
        on_call: Optional hook run during each call, given the call number
    """

    def __init__(
        self,
        clock: FakeClock,
        fail_on: Sequence[int] = (),
        duration: float = 0.0,
        on_call: Optional[Callable[[int], None]] = None,
    ):
        self.clock = clock
        self.fail_on = set(fail_on)
        self.duration = duration
        self.on_call = on_call
        self.calls: List[Tuple[float, List[str]]] = []

    def __call__(self, argv: Sequence[str]) -> CommandResult:
        self.calls.append((self.clock.now(), argv))
        call_number = len(self.calls)
        if self.on_call:
            self.on_call(call_number)
        if self.duration:
            self.clock.advance(self.duration)
        if call_number in self.fail_on:
            return CommandResult(tuple(argv), 1, stderr="refocus failed")
        return CommandResult(tuple(argv), 0)

    @property
    def times(self) -> List[float]:
        return [t for t, _ in self.calls]


def run_inline(session) -> None:
    """Session spawner that runs the session to completion on the caller's thread."""
    session.run()


def make_config(
    check_interval: float = 60.0,
    refocus_interval: float = 10.0,
    resource_kind: ResourceKind = ResourceKind.PROCESS,
    resource_name: str = "watchtest",
    command: Sequence[str] = ("refocus", "--now"),
) -> MonitorConfig:
    return MonitorConfig(
        resource_kind=resource_kind,
        resource_name=resource_name,
        check_interval=check_interval,
        refocus_interval=refocus_interval,
        corrective_command=tuple(command),
    )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def fake_clock():
    """A FakeClock starting at t=0."""
    return FakeClock()


@pytest.fixture
def recording_runner(fake_clock):
    """A RecordingRunner on the fake clock whose calls always succeed."""
    return RecordingRunner(fake_clock)


@pytest.fixture
def sample_settings():
    """Raw settings as merged from defaults, config file and CLI."""
    return {
        "process": "",
        "module": "uvcvideo",
        "device": "/dev/video0",
        "check": 1,
        "refocus": 10,
        "v4l2": False,
        "command": ["/usr/local/bin/refocus", "--camera", "0"],
    }


@pytest.fixture
def proc_modules(tmp_path):
    """Write a module table file and return its path."""
    def _write(content: str) -> Path:
        path = tmp_path / "modules"
        path.write_text(content)
        return path
    return _write
