"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from keys import Key  # noqa: E402


class FakeClock:
    """Monotonic clock the tests advance by hand (seconds)."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedKeys:
    """Key source replaying a script.

    A ``Key`` entry arrives instantly; a ``None`` entry waits out the whole
    timeout. Once the script runs dry every poll returns ``Key.QUIT``.
    """

    def __init__(self, clock: FakeClock, script: list) -> None:
        self.clock = clock
        self.script = list(script)
        self.timeouts: list[float] = []

    def poll(self, timeout_ms: float):
        self.timeouts.append(timeout_ms)
        if not self.script:
            return Key.QUIT
        item = self.script.pop(0)
        if item is None:
            self.clock.advance(timeout_ms / 1000.0)
        return item


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scripted(clock):
    def make(script):
        return ScriptedKeys(clock, script)
    return make
