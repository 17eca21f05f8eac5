"""
Shape generators that feed the boolean engine.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from polycsg.csg.line import Line
from polycsg.csg.solid import Solid


@dataclass(frozen=True)
class Cube:
    """
    Axis-aligned cube.

    Attributes:
        center: Cube centre (x, y, z)
        size: Edge length
    """

    center: tuple[float, float, float] = (0.0, 0.0, 0.0)
    size: float = 1.0

    @classmethod
    def at(cls, center: Sequence[float], size: float = 1.0) -> "Cube":
        x, y, z = (float(c) for c in center)
        return cls(center=(x, y, z), size=float(size))

    def vertices(self) -> list[np.ndarray]:
        """Eight corners: bottom ring (-z) then top ring (+z)."""
        c = np.asarray(self.center, dtype=np.float64)
        h = self.size / 2.0
        offsets = [
            (-h, -h, -h),
            (h, -h, -h),
            (h, h, -h),
            (-h, h, -h),
            (-h, -h, h),
            (h, -h, h),
            (h, h, h),
            (-h, h, h),
        ]
        return [c + np.asarray(o) for o in offsets]

    def volume(self) -> float:
        return self.size**3

    def surface_area(self) -> float:
        return 6.0 * self.size**2

    def contains(self, point: Sequence[float]) -> bool:
        h = self.size / 2.0
        return all(abs(p - c) <= h for p, c in zip(point, self.center))

    def wall_outlines(self) -> list[Line]:
        """The twelve cube edges."""
        v = self.vertices()
        loops = [(0, 1), (1, 2), (2, 3), (3, 0), (4, 5), (5, 6), (6, 7), (7, 4)]
        verticals = [(0, 4), (1, 5), (2, 6), (3, 7)]
        return [Line(v[i], v[j]) for i, j in loops + verticals]

    def to_solid(self) -> Solid:
        return Solid.from_cube(self)
