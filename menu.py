#!/usr/bin/env python3
"""
  Terminal games: a menu of small simulations.

    Game of Life   Conway's cellular automaton with cursor editing
    Snake          eat food, don't hit the walls or yourself
    Cube           spin a 3D wireframe cube

  Menu controls: arrows select, ENTER starts, q quits.
  Each game lists its own controls in the help panel; q returns here.

  Session telemetry is logged to games_stats.csv beside this script.
"""

from __future__ import annotations

import argparse
import curses
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import numpy as np

import cube
import life
import snake
from keys import Key
from screen import CursesKeySource, Palette, draw_box, put
from session_log import LOG_PATH, StatsLogger
from tick import Game, TickScheduler
from viewport import InvalidViewport, Viewport

MENU_WIDTH: int = 25

GAMES: list[str] = ["Game of Life", "Snake", "Cube"]

DESCRIPTION: list[str] = [
    "Conway's Game of Life:\n"
    "-Underpopulation: Any live cell with fewer than two live neighbours dies.\n"
    "-Stable population: Any live cell with two or three live neighbours "
    "lives on to the next generation.\n"
    "-Overpopulation: Any live cell with more than three live neighbours dies.\n"
    "-Reproduction: Any dead cell with exactly three live neighbours becomes "
    "a live cell.",
    "Snake:\n"
    "Control a snake, eat apples but not yourself and don't crash into walls!",
    "Cube:\n"
    "Rotate a 3D rendered cube.",
]


@dataclass(frozen=True)
class Settings:
    life_ms: float = life.TICK_MS
    snake_ms: float = snake.TICK_MS
    seed: int | None = None
    stats_path: Path | None = LOG_PATH


def build_game(index: int, viewport: Viewport, settings: Settings) -> tuple[Game, Callable[..., None]]:
    """Engine plus its renderer for menu entry ``index``."""
    if index == 0:
        rng = np.random.default_rng(settings.seed)
        return life.LifeEngine(viewport, settings.life_ms, rng=rng), life.render
    if index == 1:
        return (
            snake.SnakeEngine(viewport, settings.snake_ms, rng=random.Random(settings.seed)),
            snake.render,
        )
    if index == 2:
        return cube.RotationEngine(viewport), cube.render
    raise IndexError(f"no game at menu index {index}")


def _wrap(text: str, width: int) -> list[str]:
    out: list[str] = []
    for para in text.split("\n"):
        line = ""
        for word in para.split():
            if line and len(line) + 1 + len(word) > width:
                out.append(line)
                line = word
            else:
                line = f"{line} {word}" if line else word
        out.append(line)
    return out


def draw_menu(stdscr: curses.window, selected: int, palette: Palette, notice: str = "") -> None:
    max_y, max_x = stdscr.getmaxyx()
    stdscr.erase()

    list_w = min(MENU_WIDTH, max_x)
    draw_box(stdscr, 0, 0, max_y, list_w, "[Games]")
    for i, name in enumerate(GAMES):
        if i == selected:
            put(stdscr, 1 + i, 1, f">{name}"[: list_w - 2], palette.attr("highlight"))
        else:
            put(stdscr, 1 + i, 1, f" {name}"[: list_w - 2])

    desc_w = max_x - list_w
    draw_box(stdscr, 0, list_w, max_y, desc_w, "[Description]")
    text = DESCRIPTION[selected] + (f"\n\n{notice}" if notice else "")
    for row, line in enumerate(_wrap(text, max(1, desc_w - 2))[: max(0, max_y - 2)]):
        put(stdscr, 1 + row, list_w + 1, line)
    stdscr.refresh()


def play(
    stdscr: curses.window,
    index: int,
    settings: Settings,
    palette: Palette,
    logger: StatsLogger | None,
) -> None:
    """Run one game session; InvalidViewport propagates to the caller."""
    max_y, max_x = stdscr.getmaxyx()
    viewport = Viewport.from_terminal(max_y, max_x)
    game, render = build_game(index, viewport, settings)

    def draw(snap: Any) -> None:
        stdscr.erase()
        render(stdscr, snap, palette)
        stdscr.refresh()

    TickScheduler(CursesKeySource(stdscr), logger=logger).run(game, draw)


def main(stdscr: curses.window, settings: Settings | None = None) -> None:
    settings = settings or Settings()
    curses.curs_set(0)

    palette = Palette()
    palette.setup()

    logger: StatsLogger | None = None
    if settings.stats_path is not None:
        logger = StatsLogger(settings.stats_path)
        logger.open()

    keys = CursesKeySource(stdscr)
    selected = 0
    notice = ""

    try:
        while True:
            draw_menu(stdscr, selected, palette, notice)
            key = keys.wait()

            if key is Key.QUIT:
                break
            elif key is Key.UP:
                selected = max(0, selected - 1)
            elif key is Key.DOWN:
                selected = min(len(GAMES) - 1, selected + 1)
            elif key is Key.SELECT:
                notice = ""
                try:
                    play(stdscr, selected, settings, palette, logger)
                except InvalidViewport as e:
                    notice = f"Terminal too small: {e}"
    finally:
        if logger is not None:
            logger.close()


def parse_args(argv: list[str] | None = None) -> Settings:
    parser = argparse.ArgumentParser(description="Terminal games: Life, Snake and a spinning cube")
    parser.add_argument(
        "--life-ms", type=float, default=life.TICK_MS,
        help=f"Game of Life generation interval in ms (default: {life.TICK_MS:g})",
    )
    parser.add_argument(
        "--snake-ms", type=float, default=snake.TICK_MS,
        help=f"Snake move interval in ms (default: {snake.TICK_MS:g})",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for food placement and random soup",
    )
    parser.add_argument(
        "--stats-path", type=Path, default=LOG_PATH,
        help=f"CSV telemetry file (default: {LOG_PATH.name} beside this script)",
    )
    parser.add_argument(
        "--no-stats", action="store_true",
        help="Disable telemetry logging",
    )
    args = parser.parse_args(argv)
    return Settings(
        life_ms=args.life_ms,
        snake_ms=args.snake_ms,
        seed=args.seed,
        stats_path=None if args.no_stats else args.stats_path,
    )


def run() -> None:
    settings = parse_args()
    try:
        curses.wrapper(main, settings)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
