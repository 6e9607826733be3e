"""
Fixed-tick game loop shared by every game.

Rendering happens on every loop iteration; the simulation advances only
when a full tick interval has elapsed. Between the two, input is polled
with a timeout equal to the time left until the next tick, so an idle
keyboard never delays the simulation and a busy one never speeds it up.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Protocol

from keys import Key
from session_log import LOG_EVERY, StatsLogger


class Game(Protocol):
    """What the scheduler needs from an engine."""

    name: str
    tick_interval_ms: float
    paused: bool

    def handle_key(self, key: Key) -> None: ...

    def tick(self) -> str: ...

    def snapshot(self) -> Any: ...


class KeySource(Protocol):
    def poll(self, timeout_ms: float) -> Key | None:
        """Wait up to ``timeout_ms`` for a key; None if nothing arrived."""
        ...


class TickScheduler:
    """Single-threaded render → poll → apply → tick loop."""

    def __init__(
        self,
        source: KeySource,
        clock: Callable[[], float] = time.monotonic,
        logger: StatsLogger | None = None,
    ) -> None:
        self._source = source
        self._clock = clock
        self._logger = logger

    def _elapsed_ms(self, since: float) -> float:
        return (self._clock() - since) * 1000.0

    def run(self, game: Game, draw: Callable[[Any], None]) -> int:
        """Run ``game`` until the quit key. Returns the number of ticks run."""
        ticks = 0
        self._log(game, ticks, "start")
        last_tick = self._clock()

        while True:
            # ── Render ─────────────────────────────────────────────
            draw(game.snapshot())

            # ── Input (bounded wait) ───────────────────────────────
            # Interval is re-read each pass so speed changes apply live
            interval = game.tick_interval_ms
            timeout = max(0.0, interval - self._elapsed_ms(last_tick))
            key = self._source.poll(timeout)

            if key is Key.QUIT:
                self._log(game, ticks, "quit")
                return ticks
            if key is not None:
                game.handle_key(key)

            # ── Simulate ───────────────────────────────────────────
            if self._elapsed_ms(last_tick) >= game.tick_interval_ms:
                if not game.paused:
                    event = game.tick()
                    ticks += 1
                    if event or ticks % LOG_EVERY == 0:
                        self._log(game, ticks, event)
                last_tick = self._clock()

    def _log(self, game: Game, ticks: int, event: str) -> None:
        if self._logger is not None:
            self._logger.log(game.name, ticks, game.tick_interval_ms, event)
