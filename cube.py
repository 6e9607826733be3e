"""
Rotating wireframe cube.

Two angles accumulate their angular velocities once per tick; every frame
the fixed model-space vertices are rotated about x by ``theta`` and then
about y by ``sigma`` and flattened onto the screen plane.
"""

from __future__ import annotations

import curses
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from keys import Key
from screen import CANVAS_LEFT, CANVAS_TOP, BrailleCanvas, Palette, draw_chrome, put
from viewport import Viewport

HELP = "[r]: 'reset cube', [arrows]: 'spin cube'"

TICK_MS: float = 50.0
HALF_EXTENT: float = 30.0
# Angular velocity change per key press (degrees per tick)
SPIN_STEP: float = 0.25

_S = HALF_EXTENT
VERTICES: NDArray[np.float64] = np.array(
    [
        (-_S, -_S, -_S),
        (_S, -_S, -_S),
        (_S, _S, -_S),
        (-_S, _S, -_S),
        (-_S, -_S, _S),
        (_S, -_S, _S),
        (_S, _S, _S),
        (-_S, _S, _S),
    ],
    dtype=np.float64,
)
VERTICES.setflags(write=False)

EDGES: tuple[tuple[int, int], ...] = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)

Segment = tuple[tuple[float, float], tuple[float, float]]


def rotation_x(degrees: float) -> NDArray[np.float64]:
    """Rotation of the (y, z) pair."""
    a = math.radians(degrees)
    c, s = math.cos(a), math.sin(a)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


def rotation_y(degrees: float) -> NDArray[np.float64]:
    """Rotation of the (x, z) pair."""
    a = math.radians(degrees)
    c, s = math.cos(a), math.sin(a)
    return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])


@dataclass(frozen=True)
class CubeSnapshot:
    segments: tuple[Segment, ...]
    theta: float
    sigma: float


class RotationEngine:
    name = "cube"
    paused = False

    def __init__(self, viewport: Viewport, tick_interval_ms: float = TICK_MS) -> None:
        self.tick_interval_ms: float = tick_interval_ms
        # Projection origin: centre of the braille canvas (2×4 dots per cell)
        self.origin: tuple[float, float] = (viewport.cols, viewport.rows * 2.0)
        self.theta: float = 0.0
        self.sigma: float = 0.0
        self.theta_speed: float = 0.0
        self.sigma_speed: float = 0.0

    def accelerate(self, axis: str, delta: float) -> None:
        if axis == "theta":
            self.theta_speed += delta
        elif axis == "sigma":
            self.sigma_speed += delta
        else:
            raise ValueError(f"unknown axis {axis!r}")

    def step(self) -> str:
        self.theta += self.theta_speed
        self.sigma += self.sigma_speed
        return ""

    def tick(self) -> str:
        return self.step()

    def reset(self) -> None:
        self.theta = 0.0
        self.sigma = 0.0
        self.theta_speed = 0.0
        self.sigma_speed = 0.0

    def rotated(self) -> NDArray[np.float64]:
        """Vertices after both rotations, shape (8, 3)."""
        m = rotation_y(self.sigma) @ rotation_x(self.theta)
        return VERTICES @ m.T

    def project(self, origin_x: float, origin_y: float) -> list[Segment]:
        """One 2D segment per edge; z is dropped after rotation."""
        pts = self.rotated()[:, :2] + (origin_x, origin_y)
        xy = pts.tolist()
        return [((xy[a][0], xy[a][1]), (xy[b][0], xy[b][1])) for a, b in EDGES]

    def handle_key(self, key: Key) -> None:
        if key is Key.RESET:
            self.reset()
        elif key is Key.LEFT:
            self.accelerate("sigma", SPIN_STEP)
        elif key is Key.RIGHT:
            self.accelerate("sigma", -SPIN_STEP)
        elif key is Key.UP:
            self.accelerate("theta", SPIN_STEP)
        elif key is Key.DOWN:
            self.accelerate("theta", -SPIN_STEP)

    def snapshot(self) -> CubeSnapshot:
        return CubeSnapshot(
            segments=tuple(self.project(*self.origin)),
            theta=self.theta,
            sigma=self.sigma,
        )


# ═══════════════════════════════════════════════════════════════════════
#  Rendering
# ═══════════════════════════════════════════════════════════════════════

def render(stdscr: curses.window, snap: CubeSnapshot, palette: Palette) -> None:
    draw_chrome(stdscr, HELP, f"[Cube: sigma={snap.sigma:g}, theta={snap.theta:g}]")

    max_y, max_x = stdscr.getmaxyx()
    canvas = BrailleCanvas(max_x - 2 * CANVAS_LEFT, max_y - CANVAS_TOP - 1)
    for (x1, y1), (x2, y2) in snap.segments:
        canvas.line(x1, y1, x2, y2)

    attr = palette.attr("cube")
    for i, text in enumerate(canvas.lines()):
        put(stdscr, CANVAS_TOP + i, CANVAS_LEFT, text, attr)
