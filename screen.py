"""
Curses collaborators: colours, panel chrome, a braille line canvas and
the keyboard source the tick scheduler polls.
"""

from __future__ import annotations

import curses
from dataclasses import dataclass, field
from typing import Sequence, Union

from keys import Key, decode
from viewport import BORDER, HELP_ROWS

# ── Layout ──────────────────────────────────────────────────────────────
CANVAS_TOP: int = HELP_ROWS + BORDER
CANVAS_LEFT: int = BORDER

BLOCK = "█"  # █

# ── Palette ─────────────────────────────────────────────────────────────
# role → (256-colour index, 8-colour fallback)
ROLES: dict[str, tuple[int, int]] = {
    "alive": (51, curses.COLOR_CYAN),
    "dying": (30, curses.COLOR_BLUE),
    "ghost": (23, curses.COLOR_BLUE),
    "cursor": (231, curses.COLOR_WHITE),
    "snake": (123, curses.COLOR_CYAN),
    "snake_dead": (196, curses.COLOR_RED),
    "food": (196, curses.COLOR_RED),
    "cube": (51, curses.COLOR_CYAN),
    "paused": (196, curses.COLOR_RED),
    "playing": (46, curses.COLOR_GREEN),
    "highlight": (51, curses.COLOR_CYAN),
}

# Title/help text: plain string or (text, attr) segments
Title = Union[str, Sequence[tuple[str, int]]]


@dataclass
class Palette:
    """Manages curses colour pairs, one per drawing role."""

    _pairs: dict[str, int] = field(default_factory=dict)

    def setup(self) -> None:
        curses.start_color()
        curses.use_default_colors()
        rich = curses.COLORS >= 256
        for pair_id, (role, (c256, c8)) in enumerate(ROLES.items(), start=1):
            if pair_id > curses.COLOR_PAIRS - 1:
                break
            curses.init_pair(pair_id, c256 if rich else c8, -1)
            self._pairs[role] = pair_id

    def attr(self, role: str) -> int:
        pair = self._pairs.get(role, 0)
        return curses.color_pair(pair) if pair else curses.A_NORMAL


# ── Drawing primitives ──────────────────────────────────────────────────

def put(stdscr: curses.window, y: int, x: int, text: str, attr: int = 0) -> None:
    """addstr that tolerates writes at the screen edge."""
    try:
        stdscr.addstr(y, x, text, attr)
    except curses.error:
        pass


def put_cell(stdscr: curses.window, row: int, col: int, attr: int = 0) -> None:
    """Draw one play-field cell given in canvas coordinates."""
    put(stdscr, CANVAS_TOP + row, CANVAS_LEFT + col, BLOCK, attr)


def draw_box(
    stdscr: curses.window, y: int, x: int, h: int, w: int, title: Title = ""
) -> None:
    if h < 2 or w < 2:
        return
    put(stdscr, y, x, "┌" + "─" * (w - 2) + "┐")
    for row in range(y + 1, y + h - 1):
        put(stdscr, row, x, "│")
        put(stdscr, row, x + w - 1, "│")
    put(stdscr, y + h - 1, x, "└" + "─" * (w - 2) + "┘")

    segments = [(title, 0)] if isinstance(title, str) else list(title)
    col = x + 1
    for text, attr in segments:
        room = x + w - 1 - col
        if room <= 0:
            break
        put(stdscr, y, col, text[:room], attr)
        col += len(text[:room])


def draw_chrome(stdscr: curses.window, help_text: str, title: Title) -> None:
    """Help panel on top, bordered canvas below (see viewport.from_terminal)."""
    max_y, max_x = stdscr.getmaxyx()
    draw_box(stdscr, 0, 0, HELP_ROWS, max_x, "[Help]")
    put(stdscr, 1, 1, help_text[: max(0, max_x - 2)])
    draw_box(stdscr, HELP_ROWS, 0, max_y - HELP_ROWS, max_x, title)


# ── Braille canvas ──────────────────────────────────────────────────────
# Each character cell holds a 2×4 dot matrix.
_DOT_BITS: tuple[tuple[int, int], ...] = (
    (0x01, 0x08),
    (0x02, 0x10),
    (0x04, 0x20),
    (0x40, 0x80),
)


class BrailleCanvas:
    """Sub-character line canvas, 2 dots wide and 4 dots tall per cell."""

    def __init__(self, cols: int, rows: int) -> None:
        self.cols = cols
        self.rows = rows
        self.width = cols * 2
        self.height = rows * 4
        self._cells: dict[tuple[int, int], int] = {}

    def set(self, x: float, y: float) -> None:
        px, py = int(round(x)), int(round(y))
        if 0 <= px < self.width and 0 <= py < self.height:
            key = (py // 4, px // 2)
            self._cells[key] = self._cells.get(key, 0) | _DOT_BITS[py % 4][px % 2]

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        steps = int(max(abs(x2 - x1), abs(y2 - y1))) + 1
        for i in range(steps + 1):
            t = i / steps
            self.set(x1 + (x2 - x1) * t, y1 + (y2 - y1) * t)

    def lines(self) -> list[str]:
        """One string per character row; blank cells are spaces."""
        out: list[str] = []
        for row in range(self.rows):
            chars = [
                chr(0x2800 + self._cells[(row, col)]) if (row, col) in self._cells else " "
                for col in range(self.cols)
            ]
            out.append("".join(chars))
        return out


# ── Input ───────────────────────────────────────────────────────────────

class CursesKeySource:
    """Bounded-wait keyboard poll for the tick scheduler."""

    def __init__(self, stdscr: curses.window) -> None:
        self._stdscr = stdscr

    def poll(self, timeout_ms: float) -> Key | None:
        self._stdscr.timeout(max(0, int(timeout_ms)))
        try:
            code = self._stdscr.getch()
        except curses.error:
            code = -1
        return decode(code)

    def wait(self) -> Key | None:
        """Block until a key arrives (menu navigation)."""
        self._stdscr.timeout(-1)
        return decode(self._stdscr.getch())
