"""
Oriented planes and point classification.

``EPSILON`` is the default tolerance for every classification in the CSG
core. Each classifying call takes an ``epsilon`` keyword so a caller (or a
test) can tighten or loosen it without touching module state.
"""

from enum import Enum
from typing import Optional, Sequence

import numpy as np

from polycsg.core.exceptions import GeometryError
from polycsg.csg.vectors import Vector3, as_point

EPSILON = 1e-5


class PointClassification(Enum):
    """Side of a plane a point lies on."""

    COPLANAR = "coplanar"
    FRONT = "front"
    BACK = "back"


class Plane:
    """
    Immutable oriented plane ``dot(normal, p) == offset``.

    The constructor trusts that ``normal`` is already unit length; use
    :meth:`from_normal` or :meth:`from_points` to normalise.

    Attributes:
        normal: Unit normal (read-only numpy array)
        offset: Signed distance of the plane from the origin along ``normal``
    """

    __slots__ = ("normal", "offset")

    def __init__(self, normal: Sequence[float] | np.ndarray, offset: float) -> None:
        object.__setattr__(self, "normal", as_point(normal))
        object.__setattr__(self, "offset", float(offset))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Plane is immutable; cannot set {name!r}")

    @classmethod
    def from_normal(cls, normal: Sequence[float] | np.ndarray, offset: float) -> "Plane":
        """Create a plane, normalising ``normal`` first."""
        n = np.asarray(normal, dtype=np.float64)
        length = np.linalg.norm(n)
        if length == 0.0:
            raise GeometryError("Plane normal must be non-zero")
        return cls(n / length, offset)

    @classmethod
    def from_points(cls, a: Vector3, b: Vector3, c: Vector3) -> "Plane":
        """
        Plane through three points, oriented by the right-hand rule.

        Raises:
            GeometryError: If the points are collinear
        """
        a = np.asarray(a, dtype=np.float64)
        cross = np.cross(np.asarray(b) - a, np.asarray(c) - a)
        length = np.linalg.norm(cross)
        if length == 0.0:
            raise GeometryError(
                "Cannot fit a plane to collinear points",
                details={"points": [list(map(float, p)) for p in (a, b, c)]},
            )
        normal = cross / length
        return cls(normal, float(np.dot(normal, a)))

    def signed_distance(self, point: Vector3) -> float:
        """Signed distance from ``point``; positive in front."""
        return float(np.dot(self.normal, point)) - self.offset

    def classify(self, point: Vector3, epsilon: float = EPSILON) -> PointClassification:
        """Classify a point as front, back or coplanar within ``epsilon``."""
        distance = self.signed_distance(point)
        if distance > epsilon:
            return PointClassification.FRONT
        if distance < -epsilon:
            return PointClassification.BACK
        return PointClassification.COPLANAR

    def side_signs(self, points: np.ndarray, epsilon: float = EPSILON) -> np.ndarray:
        """
        Classify an ``(n, 3)`` array of points at once.

        Returns an int array: ``1`` in front, ``-1`` behind, ``0`` coplanar,
        with the same thresholds as :meth:`classify`.
        """
        distances = points @ self.normal - self.offset
        return (distances > epsilon).astype(np.int8) - (distances < -epsilon).astype(np.int8)

    def flipped(self) -> "Plane":
        """Return the same plane facing the other way."""
        return Plane(-self.normal, -self.offset)

    def intersect(
        self, start: Vector3, end: Vector3, epsilon: float = EPSILON
    ) -> Optional[float]:
        """
        Parameter ``t`` where the segment ``start -> end`` crosses the plane.

        Returns None when the segment is parallel to the plane. ``t`` is not
        clamped; callers check ``0 <= t <= 1`` when they need to.
        """
        direction = np.asarray(end, dtype=np.float64) - np.asarray(start, dtype=np.float64)
        denom = float(np.dot(self.normal, direction))
        if abs(denom) < epsilon:
            return None
        return (self.offset - float(np.dot(self.normal, start))) / denom

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plane):
            return NotImplemented
        return bool(np.array_equal(self.normal, other.normal)) and self.offset == other.offset

    def __hash__(self) -> int:
        return hash((tuple(self.normal.tolist()), self.offset))

    def __repr__(self) -> str:
        n = self.normal
        return f"Plane(normal=({n[0]:.4g}, {n[1]:.4g}, {n[2]:.4g}), offset={self.offset:.4g})"
