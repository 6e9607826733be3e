"""
  Conway's Game of Life on a bounded grid.

  Cells outside the grid count as permanently dead, so edges are walls
  rather than a torus. The engine keeps the two previous generations'
  live cells around so the renderer can draw a fading two-frame trail.

  Controls:
    q         back to menu       p/SPACE   pause / resume
    s/ENTER   toggle cell        arrows    move cursor
    n         single step        h         history trail
    c         clear              r         random soup
    +/-       speed
"""

from __future__ import annotations

import curses
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import convolve

from keys import Key
from screen import Palette, draw_chrome, put_cell
from viewport import Viewport

HELP = (
    "[s]: 'swap cell', [p]: 'pause/resume', [n]: 'step', [h]: 'history', "
    "[c]: 'clear', [r]: 'random', [+/-]: 'speed', [arrows]: 'move cursor'"
)

# ── Timing ──────────────────────────────────────────────────────────────
TICK_MS: float = 400.0
MIN_TICK_MS: float = 50.0
MAX_TICK_MS: float = 1000.0
TICK_STEP_MS: float = 50.0

# Fraction of cells alive after a random reseed
SOUP_DENSITY: float = 0.2

# ── Convolution kernel (reused every step) ────────────────────────────
NEIGHBOR_KERNEL: NDArray = np.array([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=np.int16)

# ── Pattern library (row, col) offsets ─────────────────────────────────
PATTERNS: dict[str, list[tuple[int, int]]] = {
    "block": [(0, 0), (0, 1), (1, 0), (1, 1)],
    "blinker": [(0, 0), (0, 1), (0, 2)],
    "glider": [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)],
    "beacon": [(0, 0), (0, 1), (1, 0), (1, 1), (2, 2), (2, 3), (3, 2), (3, 3)],
    "r_pentomino": [(0, 1), (0, 2), (1, 0), (1, 1), (2, 1)],
}

Cell = tuple[int, int]


def neighbor_counts(grid: NDArray[np.int8]) -> NDArray[np.int16]:
    """Live Moore neighbours per cell; off-grid cells count as dead."""
    return convolve(grid.astype(np.int16), NEIGHBOR_KERNEL, mode="constant", cval=0)


@dataclass(frozen=True)
class LifeSnapshot:
    """Read-only frame handed to the renderer."""
    rows: int
    cols: int
    alive: frozenset[Cell]
    dying: frozenset[Cell]
    ghost: frozenset[Cell]
    cursor: Cell
    paused: bool
    show_history: bool
    elapsed_ms: float
    generation: int


class LifeEngine:
    """
    Game of Life grid with an editing cursor.

    The grid is an int8 array indexed ``[row, col]``. ``dying`` holds the
    cells alive one generation ago, ``ghost`` those alive two generations
    ago; both are replaced wholesale on each step.
    """

    name = "life"

    def __init__(
        self,
        viewport: Viewport,
        tick_interval_ms: float = TICK_MS,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.rows: int = viewport.rows
        self.cols: int = viewport.cols
        self.grid: NDArray[np.int8] = np.zeros((self.rows, self.cols), dtype=np.int8)
        self.dying: frozenset[Cell] = frozenset()
        self.ghost: frozenset[Cell] = frozenset()

        self.cursor: Cell = (self.rows // 2, self.cols // 2)
        self.paused: bool = True
        self.show_history: bool = False
        self.generation: int = 0
        self.elapsed_ms: float = 0.0
        self.tick_interval_ms: float = tick_interval_ms

        self._rng = rng if rng is not None else np.random.default_rng()

    # ── Queries ─────────────────────────────────────────────────────

    def alive_cells(self) -> frozenset[Cell]:
        rs, cs = np.nonzero(self.grid)
        return frozenset(zip(rs.tolist(), cs.tolist()))

    def population(self) -> int:
        return int(self.grid.sum())

    def snapshot(self) -> LifeSnapshot:
        return LifeSnapshot(
            rows=self.rows,
            cols=self.cols,
            alive=self.alive_cells(),
            dying=self.dying,
            ghost=self.ghost,
            cursor=self.cursor,
            paused=self.paused,
            show_history=self.show_history,
            elapsed_ms=self.elapsed_ms,
            generation=self.generation,
        )

    # ── Simulation ──────────────────────────────────────────────────

    def step(self) -> str:
        """Advance one generation. Returns event string (empty if none)."""
        g = self.grid
        n = neighbor_counts(g)

        alive = g.astype(bool)
        was_populated = bool(alive.any())
        n_is_3 = n == 3
        birth = ~alive & n_is_3
        survive = alive & (n_is_3 | (n == 2))

        self.ghost = self.dying
        self.dying = self.alive_cells()
        self.grid = (birth | survive).astype(np.int8)
        self.generation += 1

        if was_populated and not self.grid.any():
            return "extinct"
        return ""

    def tick(self) -> str:
        """Scheduled advance: one generation plus session time."""
        event = self.step()
        self.elapsed_ms += self.tick_interval_ms
        return event

    def single_step(self) -> None:
        """Frame-by-frame inspection; only while paused."""
        if self.paused:
            self.step()

    # ── Editing ─────────────────────────────────────────────────────

    def move_cursor(self, drow: int, dcol: int) -> None:
        row, col = self.cursor
        self.cursor = (
            max(0, min(row + drow, self.rows - 1)),
            max(0, min(col + dcol, self.cols - 1)),
        )

    def toggle_cursor_cell(self) -> None:
        row, col = self.cursor
        self.grid[row, col] ^= 1

    def place(self, name: str, row: int, col: int) -> None:
        """Stamp a library pattern with its top-left at (row, col), clipped."""
        for dr, dc in PATTERNS[name]:
            r, c = row + dr, col + dc
            if 0 <= r < self.rows and 0 <= c < self.cols:
                self.grid[r, c] = 1

    def seed(self, density: float = SOUP_DENSITY) -> None:
        """Replace the grid with random soup."""
        self.grid = (self._rng.random((self.rows, self.cols)) < density).astype(np.int8)
        self.dying = frozenset()
        self.ghost = frozenset()
        self.generation = 0
        self.elapsed_ms = 0.0

    def clear(self) -> None:
        self.grid[:] = 0
        self.dying = frozenset()
        self.ghost = frozenset()
        self.paused = True
        self.generation = 0
        self.elapsed_ms = 0.0

    # ── Controls ────────────────────────────────────────────────────

    def toggle_pause(self) -> None:
        self.paused = not self.paused

    def toggle_history(self) -> None:
        self.show_history = not self.show_history

    def speed_up(self) -> None:
        self.tick_interval_ms = max(MIN_TICK_MS, self.tick_interval_ms - TICK_STEP_MS)

    def slow_down(self) -> None:
        self.tick_interval_ms = min(MAX_TICK_MS, self.tick_interval_ms + TICK_STEP_MS)

    def handle_key(self, key: Key) -> None:
        if key is Key.PAUSE_TOGGLE:
            self.toggle_pause()
        elif key is Key.HISTORY_TOGGLE:
            self.toggle_history()
        elif key is Key.SINGLE_STEP:
            self.single_step()
        elif key is Key.CLEAR:
            self.clear()
        elif key is Key.RESET:
            self.seed()
        elif key in (Key.TOGGLE_CELL, Key.SELECT):
            self.toggle_cursor_cell()
        elif key is Key.LEFT:
            self.move_cursor(0, -1)
        elif key is Key.RIGHT:
            self.move_cursor(0, 1)
        elif key is Key.UP:
            self.move_cursor(-1, 0)
        elif key is Key.DOWN:
            self.move_cursor(1, 0)
        elif key is Key.SPEED_UP:
            self.speed_up()
        elif key is Key.SPEED_DOWN:
            self.slow_down()


# ═══════════════════════════════════════════════════════════════════════
#  Rendering
# ═══════════════════════════════════════════════════════════════════════

def render(stdscr: curses.window, snap: LifeSnapshot, palette: Palette) -> None:
    """Grid with optional history trail, cursor on top."""
    state = ("paused", palette.attr("paused")) if snap.paused else (
        "playing", palette.attr("playing"))
    title = [
        ("[Game of Life: ", 0),
        state,
        (f" | Timer: {int(snap.elapsed_ms // 1000)} | Gen: {snap.generation}]", 0),
    ]
    draw_chrome(stdscr, HELP, title)

    if snap.show_history:
        ghost_attr = palette.attr("ghost") | curses.A_DIM
        for row, col in snap.ghost:
            put_cell(stdscr, row, col, ghost_attr)
        dying_attr = palette.attr("dying")
        for row, col in snap.dying:
            put_cell(stdscr, row, col, dying_attr)

    alive_attr = palette.attr("alive") | curses.A_BOLD
    for row, col in snap.alive:
        put_cell(stdscr, row, col, alive_attr)

    put_cell(stdscr, snap.cursor[0], snap.cursor[1], palette.attr("cursor"))
