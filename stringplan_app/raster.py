# stringplan_app/raster.py

from typing import List, Tuple

import numpy as np


def bresenham(a: Tuple[float, float], b: Tuple[float, float]) -> List[Tuple[int, int]]:
    """
    Integer grid-walk from `a` to `b` (both truncated to ints).
    Returns every visited (x, y) cell in walk order, endpoints included.
    """
    x0, y0 = map(int, a); x1, y1 = map(int, b)
    dx, dy = abs(x1 - x0), abs(y1 - y0)
    sx, sy = (1 if x0 < x1 else -1), (1 if y0 < y1 else -1)
    err = dx - dy
    pts = []
    while True:
        pts.append((x0, y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy; x0 += sx
        if e2 < dx:
            err += dx; y0 += sy
    return pts


def segment_indices(
    a: Tuple[float, float],
    b: Tuple[float, float],
    width: int,
    height: int,
) -> np.ndarray:
    """
    Walk the segment a→b and keep only the cells inside a width×height grid.
    Returns row-major flat indices (int32) for indexing a raveled (H, W) array.
    """
    idx = [y * width + x for x, y in bresenham(a, b) if 0 <= x < width and 0 <= y < height]
    return np.array(idx, dtype=np.int32)
