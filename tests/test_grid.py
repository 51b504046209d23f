"""
Grid Snapping Tests
===================
"""

import pytest

from easyfront.canvas.grid import GRID_SIZES, snap_position, snap_scalar, snap_size


@pytest.mark.parametrize("value,grid,expected", [
    (0, 20, 0),
    (105, 20, 100),
    (110, 20, 120),
    (10, 20, 20),
    (9.99, 20, 0),
    (-10, 20, -20),
    (-30, 20, -40),
    (-9, 20, 0),
    (44, 30, 30),
    (45, 30, 60),
    (137, 10, 140),
])
def test_snap_scalar_rounds_half_away_from_zero(value, grid, expected):
    assert snap_scalar(value, grid) == expected


@pytest.mark.parametrize("grid", GRID_SIZES)
def test_snap_scalar_is_always_a_grid_multiple(grid):
    for value in range(-503, 503, 7):
        assert snap_scalar(value, grid) % grid == 0
        assert snap_scalar(value + 0.37, grid) % grid == 0


def test_snap_scalar_returns_int():
    assert isinstance(snap_scalar(33.3, 10), int)


def test_snap_position_is_componentwise():
    assert snap_position({"x": 105, "y": 187}, 20) == {"x": 100, "y": 180}


@pytest.mark.parametrize("grid", GRID_SIZES)
def test_snap_size_never_below_one_grid_unit(grid):
    for width in (-100, -1, 0, 1, grid // 2 - 1, grid, grid * 3 + 1):
        snapped = snap_size({"width": width, "height": width}, grid)
        assert snapped["width"] >= grid
        assert snapped["height"] >= grid
        assert snapped["width"] % grid == 0


def test_snap_size_keeps_larger_sizes():
    assert snap_size({"width": 133, "height": 5}, 20) == {"width": 140, "height": 20}
