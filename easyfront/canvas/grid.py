"""
Grid Snapping
=============

Pure helpers mapping canvas coordinates and sizes onto the grid.
"""

import math
from typing import Dict, Union

Number = Union[int, float]

# Grid sizes offered by the editor toolbar
GRID_SIZES = (10, 20, 30, 50)
DEFAULT_GRID_SIZE = 20


def snap_scalar(value: Number, grid_size: int) -> int:
    """Round value to the nearest multiple of grid_size (halves away from zero)."""
    ratio = value / grid_size
    steps = math.floor(abs(ratio) + 0.5)
    if ratio < 0:
        steps = -steps
    return int(steps * grid_size)


def snap_position(position: Dict[str, Number], grid_size: int) -> Dict[str, int]:
    """Snap an {x, y} position to the grid."""
    return {
        "x": snap_scalar(position["x"], grid_size),
        "y": snap_scalar(position["y"], grid_size),
    }


def snap_size(size: Dict[str, Number], grid_size: int) -> Dict[str, int]:
    """Snap a {width, height} size to the grid, never below one grid unit."""
    return {
        "width": max(grid_size, snap_scalar(size["width"], grid_size)),
        "height": max(grid_size, snap_scalar(size["height"], grid_size)),
    }
