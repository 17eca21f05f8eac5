"""
Line segments handed to edge/wireframe consumers.
"""

from typing import Sequence

import numpy as np

from polycsg.csg.plane import EPSILON
from polycsg.csg.vectors import Vector3, as_point


class Line:
    """A segment between two 3D positions."""

    __slots__ = ("start", "end")

    def __init__(
        self,
        start: Sequence[float] | np.ndarray,
        end: Sequence[float] | np.ndarray,
    ) -> None:
        self.start: Vector3 = as_point(start)
        self.end: Vector3 = as_point(end)

    def length(self) -> float:
        return float(np.linalg.norm(self.end - self.start))

    def midpoint(self) -> Vector3:
        return (self.start + self.end) / 2.0

    def reversed(self) -> "Line":
        return Line(self.end, self.start)

    def as_tuple(self) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
        """Plain ``((x, y, z), (x, y, z))`` form for renderers and JSON."""
        return (
            tuple(float(v) for v in self.start),  # type: ignore[return-value]
            tuple(float(v) for v in self.end),
        )

    def __eq__(self, other: object) -> bool:
        # Directed: a reversed segment is a different line.
        if not isinstance(other, Line):
            return NotImplemented
        return (
            float(np.linalg.norm(self.start - other.start)) < EPSILON
            and float(np.linalg.norm(self.end - other.end)) < EPSILON
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Line(start={self.start.tolist()}, end={self.end.tolist()})"
