"""
Snake: steer the body around the field, eat food, avoid walls and yourself.

The body is a deque of (x, y) cells with the tail on the left and the head
on the right. Screen rows grow downward, so UP moves towards y - 1.
"""

from __future__ import annotations

import curses
import enum
import random
from collections import deque
from dataclasses import dataclass

from keys import Key
from screen import Palette, draw_chrome, put_cell
from viewport import InvalidViewport, Viewport

HELP = "[r]: 'reset game', [+/-]: 'speed', [arrows]: 'change direction'"

# ── Timing ──────────────────────────────────────────────────────────────
TICK_MS: float = 100.0
MIN_TICK_MS: float = 40.0
MAX_TICK_MS: float = 400.0
TICK_STEP_MS: float = 20.0

Point = tuple[int, int]


class Direction(enum.Enum):
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP = (0, -1)
    DOWN = (0, 1)
    IDLE = (0, 0)

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))


KEY_DIRECTIONS: dict[Key, Direction] = {
    Key.LEFT: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
    Key.UP: Direction.UP,
    Key.DOWN: Direction.DOWN,
}


@dataclass(frozen=True)
class SnakeSnapshot:
    """Read-only frame handed to the renderer."""
    cols: int
    rows: int
    body: tuple[Point, ...]
    food: Point
    dead: bool
    length: int
    direction: Direction


class SnakeEngine:
    """Single snake on a walled grid with one piece of food."""

    name = "snake"
    paused = False

    def __init__(
        self,
        viewport: Viewport,
        tick_interval_ms: float = TICK_MS,
        rng: random.Random | None = None,
    ) -> None:
        if viewport.cells < 2:
            raise InvalidViewport("snake needs room for a body and a piece of food")
        self.cols: int = viewport.cols
        self.rows: int = viewport.rows
        self.tick_interval_ms: float = tick_interval_ms
        self._rng = rng if rng is not None else random.Random()

        self.body: deque[Point] = deque()
        self.direction: Direction = Direction.IDLE
        self.dead: bool = False
        self.food: Point = (0, 0)
        self.reset()

    @property
    def head(self) -> Point:
        return self.body[-1]

    def reset(self) -> None:
        self.body = deque([(self.cols // 2, self.rows // 2)])
        self.direction = Direction.IDLE
        self.dead = False
        self.food = self._summon_food()

    def _summon_food(self) -> Point:
        # Rejection sampling; the grid is assumed larger than the body
        while True:
            spot = (self._rng.randrange(self.cols), self._rng.randrange(self.rows))
            if spot not in self.body:
                return spot

    def in_bounds(self, point: Point) -> bool:
        x, y = point
        return 0 <= x < self.cols and 0 <= y < self.rows

    def set_direction(self, direction: Direction) -> None:
        """Steer, ignoring an exact reversal of the current direction."""
        if direction is Direction.IDLE:
            return
        if self.direction is not Direction.IDLE and direction is self.direction.opposite:
            return
        self.direction = direction

    def step(self) -> str:
        """Move one cell. Returns event string (empty if none)."""
        if self.dead or self.direction is Direction.IDLE:
            return ""

        dx, dy = self.direction.value
        x, y = self.head
        candidate = (x + dx, y + dy)

        if not self.in_bounds(candidate):
            self.dead = True
            return "dead:wall"
        if candidate in self.body:
            self.dead = True
            return "dead:self"

        if candidate == self.food:
            self.body.append(candidate)
            self.food = self._summon_food()
            return "eat"

        self.body.popleft()
        self.body.append(candidate)
        return ""

    def tick(self) -> str:
        return self.step()

    def speed_up(self) -> None:
        self.tick_interval_ms = max(MIN_TICK_MS, self.tick_interval_ms - TICK_STEP_MS)

    def slow_down(self) -> None:
        self.tick_interval_ms = min(MAX_TICK_MS, self.tick_interval_ms + TICK_STEP_MS)

    def handle_key(self, key: Key) -> None:
        if key in KEY_DIRECTIONS:
            self.set_direction(KEY_DIRECTIONS[key])
        elif key is Key.RESET:
            self.reset()
        elif key is Key.SPEED_UP:
            self.speed_up()
        elif key is Key.SPEED_DOWN:
            self.slow_down()

    def snapshot(self) -> SnakeSnapshot:
        return SnakeSnapshot(
            cols=self.cols,
            rows=self.rows,
            body=tuple(self.body),
            food=self.food,
            dead=self.dead,
            length=len(self.body),
            direction=self.direction,
        )


# ═══════════════════════════════════════════════════════════════════════
#  Rendering
# ═══════════════════════════════════════════════════════════════════════

def render(stdscr: curses.window, snap: SnakeSnapshot, palette: Palette) -> None:
    title = f"[Snake: size={snap.length}{' | dead, press r' if snap.dead else ''}]"
    draw_chrome(stdscr, HELP, title)

    fx, fy = snap.food
    put_cell(stdscr, fy, fx, palette.attr("food") | curses.A_BOLD)

    body_attr = palette.attr("snake_dead" if snap.dead else "snake")
    for x, y in snap.body:
        put_cell(stdscr, y, x, body_attr)
