"""
Boolean operations on solids bounded by convex polygons.

Each operation builds two fresh BSP trees from the operands' polygon lists,
runs a fixed sequence of clip/invert/build steps and reads the result back
out of the first tree. Trees are never kept between operations. The step
order matters: reordering gives wrong surfaces on non-convex inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Sequence

import numpy as np

from polycsg.csg.bsp import BSPNode
from polycsg.csg.plane import EPSILON
from polycsg.csg.polygon import Polygon
from polycsg.csg.vertex import Vertex

if TYPE_CHECKING:
    from polycsg.geometry.primitives import Cube


class BooleanOperation(Enum):
    """Boolean operation selector."""

    UNION = "union"
    INTERSECTION = "intersection"
    DIFFERENCE = "difference"
    SYMMETRIC_DIFFERENCE = "symmetric_difference"

    @classmethod
    def parse(cls, value: "BooleanOperation | str") -> "BooleanOperation":
        """Accept an enum member or a name such as ``"symmetric-difference"``."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        aliases = {"subtract": "difference", "xor": "symmetric_difference"}
        key = aliases.get(key, key)
        try:
            return cls(key)
        except ValueError:
            valid = [op.value for op in cls]
            raise ValueError(
                f"Unknown boolean operation {value!r}; expected one of {valid}"
            ) from None


# Cube face loops, counter-clockwise seen from outside, indexing Cube.vertices().
_CUBE_FACES = (
    (0, 3, 2, 1),  # -z
    (4, 5, 6, 7),  # +z
    (0, 1, 5, 4),  # -y
    (2, 3, 7, 6),  # +y
    (0, 4, 7, 3),  # -x
    (1, 2, 6, 5),  # +x
)


@dataclass
class Solid:
    """
    A closed solid as a flat list of outward-facing convex polygons.

    Attributes:
        polygons: Boundary polygons, normals pointing out of the solid
    """

    polygons: list[Polygon] = field(default_factory=list)

    @classmethod
    def from_cube(cls, cube: "Cube") -> "Solid":
        """Six quads with outward winding."""
        corners = cube.vertices()
        return cls(
            [Polygon(Vertex(corners[i]) for i in face) for face in _CUBE_FACES]
        )

    @classmethod
    def from_polygons(cls, polygons: Iterable[Polygon]) -> "Solid":
        return cls(list(polygons))

    @property
    def is_empty(self) -> bool:
        return not self.polygons

    def __len__(self) -> int:
        return len(self.polygons)

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self.polygons)

    def bounding_box(self) -> Optional[tuple[np.ndarray, np.ndarray]]:
        """Axis-aligned ``(min, max)`` corners, or None for an empty solid."""
        if not self.polygons:
            return None
        points = np.concatenate([p.positions() for p in self.polygons])
        return points.min(axis=0), points.max(axis=0)

    def transformed(self, matrix: Sequence[Sequence[float]] | np.ndarray) -> "Solid":
        """
        Apply a 4x4 homogeneous transform to every vertex.

        Planes are refitted from the moved vertices.
        """
        m = np.asarray(matrix, dtype=np.float64)
        polygons = []
        for polygon in self.polygons:
            points = polygon.positions()
            homogeneous = np.hstack([points, np.ones((len(points), 1))]) @ m.T
            moved = homogeneous[:, :3] / homogeneous[:, 3:4]
            polygons.append(Polygon.from_points(moved))
        return Solid(polygons)

    def translated(self, offset: Sequence[float]) -> "Solid":
        delta = np.asarray(offset, dtype=np.float64)
        return Solid(
            [
                Polygon((Vertex(v.position + delta) for v in p.vertices))
                for p in self.polygons
            ]
        )

    def inverse(self) -> "Solid":
        """Complement: every polygon flipped."""
        return Solid([p.flipped() for p in self.polygons])

    def union(self, other: "Solid", epsilon: float = EPSILON) -> "Solid":
        """A ∪ B."""
        a = BSPNode(self.polygons, epsilon)
        b = BSPNode(other.polygons, epsilon)

        a.clip_to(b)
        b.clip_to(a)
        b.invert()
        b.clip_to(a)
        b.invert()
        a.build(b.all_polygons())

        return Solid(a.all_polygons())

    def intersection(self, other: "Solid", epsilon: float = EPSILON) -> "Solid":
        """A ∩ B."""
        a = BSPNode(self.polygons, epsilon)
        b = BSPNode(other.polygons, epsilon)

        a.invert()
        b.clip_to(a)
        b.invert()
        a.clip_to(b)
        b.clip_to(a)
        a.build(b.all_polygons())
        a.invert()

        return Solid(a.all_polygons())

    def subtract(self, other: "Solid", epsilon: float = EPSILON) -> "Solid":
        """A − B."""
        a = BSPNode(self.polygons, epsilon)
        b = BSPNode(other.polygons, epsilon)

        a.invert()
        a.clip_to(b)
        b.clip_to(a)
        b.invert()
        b.clip_to(a)
        b.invert()
        a.build(b.all_polygons())
        a.invert()

        return Solid(a.all_polygons())

    difference = subtract

    def symmetric_difference(self, other: "Solid", epsilon: float = EPSILON) -> "Solid":
        """(A − B) ∪ (B − A)."""
        a_minus_b = self.subtract(other, epsilon)
        b_minus_a = other.subtract(self, epsilon)
        return a_minus_b.union(b_minus_a, epsilon)

    def apply(
        self,
        operation: BooleanOperation | str,
        other: "Solid",
        epsilon: float = EPSILON,
    ) -> "Solid":
        """Dispatch on a :class:`BooleanOperation`."""
        op = BooleanOperation.parse(operation)
        if op is BooleanOperation.UNION:
            return self.union(other, epsilon)
        if op is BooleanOperation.INTERSECTION:
            return self.intersection(other, epsilon)
        if op is BooleanOperation.DIFFERENCE:
            return self.subtract(other, epsilon)
        return self.symmetric_difference(other, epsilon)
