"""
Small numpy helpers for 3D points and directions.
"""

from typing import Sequence

import numpy as np

Vector3 = np.ndarray


def as_point(value: Sequence[float] | np.ndarray) -> Vector3:
    """Return a read-only float64 copy of a 3-component vector."""
    arr = np.array(value, dtype=np.float64).reshape(3)
    arr.setflags(write=False)
    return arr


def newell_normal(points: Sequence[Vector3]) -> Vector3:
    """
    Unnormalised polygon normal by Newell's method.

    Robust when the first three points are collinear; its length is twice
    the polygon area.
    """
    pts = np.asarray(points, dtype=np.float64)
    nxt = np.roll(pts, -1, axis=0)
    return np.array(
        [
            np.sum((pts[:, 1] - nxt[:, 1]) * (pts[:, 2] + nxt[:, 2])),
            np.sum((pts[:, 2] - nxt[:, 2]) * (pts[:, 0] + nxt[:, 0])),
            np.sum((pts[:, 0] - nxt[:, 0]) * (pts[:, 1] + nxt[:, 1])),
        ]
    )
