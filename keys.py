"""
Abstract key symbols shared by the menu and the three games.

The games never see raw curses key codes; the screen layer decodes them
into ``Key`` members through ``KEYMAP`` and everything downstream matches
on the symbol.
"""

from __future__ import annotations

import curses
import enum


class Key(enum.Enum):
    QUIT = "quit"
    RESET = "reset"
    PAUSE_TOGGLE = "pause_toggle"
    HISTORY_TOGGLE = "history_toggle"
    SINGLE_STEP = "single_step"
    CLEAR = "clear"
    TOGGLE_CELL = "toggle_cell"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    SPEED_UP = "speed_up"
    SPEED_DOWN = "speed_down"
    SELECT = "select"


# ── Default bindings ────────────────────────────────────────────────────
KEYMAP: dict[int, Key] = {
    ord("q"): Key.QUIT,
    ord("Q"): Key.QUIT,
    27: Key.QUIT,  # Esc
    ord("r"): Key.RESET,
    ord("R"): Key.RESET,
    ord("p"): Key.PAUSE_TOGGLE,
    ord(" "): Key.PAUSE_TOGGLE,
    ord("h"): Key.HISTORY_TOGGLE,
    ord("n"): Key.SINGLE_STEP,
    ord("c"): Key.CLEAR,
    ord("s"): Key.TOGGLE_CELL,
    ord("\n"): Key.SELECT,
    ord("\r"): Key.SELECT,
    curses.KEY_ENTER: Key.SELECT,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    ord("+"): Key.SPEED_UP,
    ord("="): Key.SPEED_UP,
    ord("-"): Key.SPEED_DOWN,
    ord("_"): Key.SPEED_DOWN,
}


def decode(code: int) -> Key | None:
    """Map a curses key code to a symbol (None for unbound keys or no key)."""
    if code < 0:
        return None
    return KEYMAP.get(code)
