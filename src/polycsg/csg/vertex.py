"""
Polygon vertices with tolerance-based equality.
"""

from typing import Sequence

import numpy as np

from polycsg.csg.plane import EPSILON
from polycsg.csg.vectors import Vector3, as_point


class Vertex:
    """
    A position in 3D space.

    Two vertices compare equal when they are closer than ``EPSILON``; because
    that relation is not transitive, vertices are unhashable.
    """

    __slots__ = ("position",)

    def __init__(self, position: Sequence[float] | np.ndarray) -> None:
        self.position: Vector3 = as_point(position)

    def interpolate(self, other: "Vertex", t: float) -> "Vertex":
        """Affine combination ``self + (other - self) * t``."""
        return Vertex(self.position + (other.position - self.position) * t)

    def distance_to(self, other: "Vertex") -> float:
        return float(np.linalg.norm(self.position - other.position))

    def is_close(self, other: "Vertex", epsilon: float = EPSILON) -> bool:
        return self.distance_to(other) < epsilon

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.is_close(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        x, y, z = self.position
        return f"Vertex({x:.6g}, {y:.6g}, {z:.6g})"
