"""CSV telemetry for play sessions."""

from __future__ import annotations

import time
from pathlib import Path
from typing import IO, ClassVar

LOG_PATH = Path(__file__).resolve().parent / "games_stats.csv"

# Periodic row cadence (ticks) between events
LOG_EVERY: int = 50


class StatsLogger:
    """Writes per-session tick telemetry to CSV for post-hoc tuning."""

    HEADER: ClassVar[str] = "game,time_s,tick,interval_ms,event\n"

    def __init__(self, path: Path) -> None:
        self._path = path
        self._fh: IO[str] | None = None
        self._t0: float = time.monotonic()

    @property
    def enabled(self) -> bool:
        return self._fh is not None

    def open(self) -> None:
        try:
            self._fh = open(self._path, "w")
            self._fh.write(self.HEADER)
            self._fh.flush()
        except OSError:
            self._fh = None

    def log(self, game: str, tick: int, interval_ms: float, event: str = "") -> None:
        if self._fh is None:
            return
        t = time.monotonic() - self._t0
        try:
            self._fh.write(f"{game},{t:.1f},{tick},{interval_ms:.0f},{event}\n")
            # Flush on events or periodically
            if event or tick % LOG_EVERY == 0:
                self._fh.flush()
        except OSError:
            self.close()

    def close(self) -> None:
        if self._fh is not None:
            try:
                self._fh.close()
            except OSError:
                pass
            self._fh = None
