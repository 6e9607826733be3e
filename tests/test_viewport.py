import pytest

from viewport import InvalidViewport, Viewport


def test_from_terminal_subtracts_chrome():
    vp = Viewport.from_terminal(24, 80)
    assert (vp.cols, vp.rows) == (78, 19)
    assert vp.cells == 78 * 19


@pytest.mark.parametrize("term_rows, term_cols", [(5, 80), (24, 2), (3, 3), (0, 0)])
def test_too_small_terminal_is_rejected(term_rows, term_cols):
    with pytest.raises(InvalidViewport):
        Viewport.from_terminal(term_rows, term_cols)


def test_smallest_usable_terminal():
    vp = Viewport.from_terminal(6, 3)
    assert (vp.cols, vp.rows) == (1, 1)


def test_invalid_viewport_is_a_value_error():
    with pytest.raises(ValueError):
        Viewport(-1, 10)
