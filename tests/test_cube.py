import math

import pytest

from cube import EDGES, HALF_EXTENT, VERTICES, RotationEngine
from keys import Key
from viewport import Viewport


def make_engine() -> RotationEngine:
    return RotationEngine(Viewport(78, 19))


def edge_length(segment_3d) -> float:
    (a, b) = segment_3d
    return math.dist(a, b)


def test_project_is_pure():
    engine = make_engine()
    engine.accelerate("theta", 3.25)
    engine.accelerate("sigma", -1.5)
    engine.step()
    assert engine.project(10.0, 20.0) == engine.project(10.0, 20.0)


def test_zero_speed_steps_change_nothing():
    engine = make_engine()
    engine.theta, engine.sigma = 12.5, -40.0
    first = engine.project(0.0, 0.0)
    for _ in range(10):
        engine.step()
    assert (engine.theta, engine.sigma) == (12.5, -40.0)
    assert engine.project(0.0, 0.0) == first


def test_reset_restores_model_space_vertices():
    engine = make_engine()
    engine.accelerate("theta", 2.5)
    engine.accelerate("sigma", 0.75)
    for _ in range(7):
        engine.step()

    engine.reset()
    assert (engine.theta, engine.sigma, engine.theta_speed, engine.sigma_speed) == (0, 0, 0, 0)

    segments = engine.project(0.0, 0.0)
    assert len(segments) == len(EDGES) == 12
    for (p1, p2), (a, b) in zip(segments, EDGES):
        assert p1 == (VERTICES[a][0], VERTICES[a][1])
        assert p2 == (VERTICES[b][0], VERTICES[b][1])


def test_step_accumulates_speed_each_tick():
    engine = make_engine()
    engine.accelerate("theta", 0.25)
    engine.accelerate("theta", 0.25)
    engine.accelerate("sigma", -0.25)
    for _ in range(3):
        engine.step()
    assert engine.theta == 1.5
    assert engine.sigma == -0.75


def test_speed_is_unbounded():
    engine = make_engine()
    for _ in range(1000):
        engine.accelerate("sigma", 0.25)
    assert engine.sigma_speed == 250.0


def test_unknown_axis_rejected():
    with pytest.raises(ValueError):
        make_engine().accelerate("phi", 1.0)


def test_quarter_turn_about_x_swaps_y_and_z():
    engine = make_engine()
    engine.theta = 90.0
    pts = engine.rotated()
    # (x, y, z) → (x, -z, y)
    for (x, y, z), (rx, ry, rz) in zip(VERTICES, pts):
        assert rx == pytest.approx(x)
        assert ry == pytest.approx(-z)
        assert rz == pytest.approx(y)


def test_quarter_turn_about_y_swaps_x_and_z():
    engine = make_engine()
    engine.sigma = 90.0
    pts = engine.rotated()
    # (x, y, z) → (z, y, -x)
    for (x, y, z), (rx, ry, rz) in zip(VERTICES, pts):
        assert rx == pytest.approx(z)
        assert ry == pytest.approx(y)
        assert rz == pytest.approx(-x)


def test_rotation_preserves_edge_lengths():
    engine = make_engine()
    engine.theta, engine.sigma = 33.0, 251.0
    pts = engine.rotated().tolist()
    for a, b in EDGES:
        assert edge_length((pts[a], pts[b])) == pytest.approx(2 * HALF_EXTENT)


def test_origin_translates_segments():
    engine = make_engine()
    base = engine.project(0.0, 0.0)
    moved = engine.project(5.0, -2.0)
    for ((x1, y1), (x2, y2)), ((mx1, my1), (mx2, my2)) in zip(base, moved):
        assert (mx1, my1, mx2, my2) == (x1 + 5.0, y1 - 2.0, x2 + 5.0, y2 - 2.0)


def test_geometry_is_read_only():
    with pytest.raises(ValueError):
        VERTICES[0, 0] = 1.0


def test_handle_key_spins_axes():
    engine = make_engine()
    engine.handle_key(Key.LEFT)
    engine.handle_key(Key.UP)
    engine.handle_key(Key.UP)
    assert engine.sigma_speed == 0.25
    assert engine.theta_speed == 0.5
    engine.handle_key(Key.RIGHT)
    engine.handle_key(Key.DOWN)
    assert engine.sigma_speed == 0.0
    assert engine.theta_speed == 0.25
    engine.handle_key(Key.RESET)
    assert engine.theta_speed == 0.0


def test_snapshot_is_centered_on_canvas():
    engine = make_engine()
    snap = engine.snapshot()
    assert snap.theta == 0.0 and snap.sigma == 0.0
    # Braille canvas is 156x76 dots; origin at its centre
    (x1, y1), _ = snap.segments[0]
    assert (x1, y1) == (78.0 - HALF_EXTENT, 38.0 - HALF_EXTENT)
