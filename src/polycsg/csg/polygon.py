"""
Convex planar polygons: classification against a plane and splitting.
"""

from enum import Enum
from typing import Iterable, Optional, Sequence

import numpy as np

from polycsg.core.exceptions import DegeneratePolygonError, GeometryError
from polycsg.csg.line import Line
from polycsg.csg.plane import EPSILON, Plane
from polycsg.csg.vectors import newell_normal
from polycsg.csg.vertex import Vertex


class PolygonClassification(Enum):
    """Position of a whole polygon relative to a plane."""

    COPLANAR_FRONT = "coplanar_front"
    COPLANAR_BACK = "coplanar_back"
    FRONT = "front"
    BACK = "back"
    SPANNING = "spanning"


def _fit_plane(vertices: Sequence[Vertex]) -> Plane:
    try:
        return Plane.from_points(
            vertices[0].position, vertices[1].position, vertices[2].position
        )
    except GeometryError:
        pass
    # First three vertices are collinear; fall back to the whole loop.
    normal = newell_normal([v.position for v in vertices])
    length = np.linalg.norm(normal)
    if length == 0.0:
        raise DegeneratePolygonError(
            "Polygon has zero area", vertex_count=len(vertices)
        )
    normal = normal / length
    return Plane(normal, float(np.dot(normal, vertices[0].position)))


def _drop_repeated(vertices: list[Vertex], epsilon: float) -> list[Vertex]:
    """Remove consecutive near-duplicates and a closing duplicate of the first."""
    if len(vertices) <= 1:
        return vertices
    result: list[Vertex] = []
    for vertex in vertices:
        if not result or result[-1].distance_to(vertex) > epsilon:
            result.append(vertex)
    if len(result) > 1 and result[0].distance_to(result[-1]) < epsilon:
        result.pop()
    return result


class Polygon:
    """
    An ordered loop of at least three coplanar vertices.

    The vertex order defines the winding, and the plane (fitted to the first
    three vertices unless given) faces the side from which the loop is
    counter-clockwise. Polygons are immutable; every operation returns new
    polygons.

    Raises:
        DegeneratePolygonError: If fewer than three vertices are supplied
    """

    __slots__ = ("vertices", "plane", "_positions")

    def __init__(self, vertices: Iterable[Vertex], plane: Optional[Plane] = None) -> None:
        verts = tuple(vertices)
        if len(verts) < 3:
            raise DegeneratePolygonError(
                f"Polygon needs at least 3 vertices, got {len(verts)}",
                vertex_count=len(verts),
            )
        self.vertices: tuple[Vertex, ...] = verts
        self.plane: Plane = plane if plane is not None else _fit_plane(verts)
        positions = np.array([v.position for v in verts])
        positions.setflags(write=False)
        self._positions = positions

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "Polygon":
        return cls(Vertex(p) for p in points)

    @property
    def normal(self) -> np.ndarray:
        return self.plane.normal

    def positions(self) -> np.ndarray:
        """Vertex positions as a read-only ``(n, 3)`` array."""
        return self._positions

    def flipped(self) -> "Polygon":
        """Reverse the winding and flip the plane."""
        return Polygon(tuple(reversed(self.vertices)), self.plane.flipped())

    def classify(self, plane: Plane, epsilon: float = EPSILON) -> PolygonClassification:
        """Classify this polygon against ``plane``."""
        sides = plane.side_signs(self._positions, epsilon)
        num_front = int(np.count_nonzero(sides > 0))
        num_back = int(np.count_nonzero(sides < 0))

        if num_front > 0 and num_back > 0:
            return PolygonClassification.SPANNING
        if num_front > 0:
            return PolygonClassification.FRONT
        if num_back > 0:
            return PolygonClassification.BACK
        if float(np.dot(self.plane.normal, plane.normal)) > 0:
            return PolygonClassification.COPLANAR_FRONT
        return PolygonClassification.COPLANAR_BACK

    def split(
        self, plane: Plane, epsilon: float = EPSILON
    ) -> tuple[Optional["Polygon"], Optional["Polygon"]]:
        """
        Split by ``plane`` into ``(front, back)`` fragments.

        Either side is None when nothing of the polygon lies there. Coplanar
        polygons go to the side their normal agrees with. Fragments keep this
        polygon's plane rather than refitting one.
        """
        classification = self.classify(plane, epsilon)
        if classification in (PolygonClassification.FRONT, PolygonClassification.COPLANAR_FRONT):
            return self, None
        if classification in (PolygonClassification.BACK, PolygonClassification.COPLANAR_BACK):
            return None, self
        return self._split_spanning(plane, epsilon)

    def _split_spanning(
        self, plane: Plane, epsilon: float
    ) -> tuple[Optional["Polygon"], Optional["Polygon"]]:
        front_vertices: list[Vertex] = []
        back_vertices: list[Vertex] = []
        sides = plane.side_signs(self._positions, epsilon).tolist()
        count = len(self.vertices)

        for i in range(count):
            j = (i + 1) % count
            vi, vj = self.vertices[i], self.vertices[j]
            ti, tj = sides[i], sides[j]

            if ti > 0:
                front_vertices.append(vi)
            elif ti < 0:
                back_vertices.append(vi)
            else:
                front_vertices.append(vi)
                back_vertices.append(vi)

            if ti * tj < 0:
                t = plane.intersect(vi.position, vj.position, epsilon)
                if t is not None:
                    boundary = vi.interpolate(vj, t)
                    front_vertices.append(boundary)
                    back_vertices.append(boundary)

        front_vertices = _drop_repeated(front_vertices, epsilon)
        back_vertices = _drop_repeated(back_vertices, epsilon)

        front = Polygon(front_vertices, self.plane) if len(front_vertices) >= 3 else None
        back = Polygon(back_vertices, self.plane) if len(back_vertices) >= 3 else None
        return front, back

    def edges(self) -> list[Line]:
        """Closed edge loop, last vertex back to the first."""
        count = len(self.vertices)
        return [
            Line(self.vertices[i].position, self.vertices[(i + 1) % count].position)
            for i in range(count)
        ]

    def area(self) -> float:
        """Planar area of the loop."""
        positions = self.positions()
        total = np.cross(positions, np.roll(positions, -1, axis=0)).sum(axis=0)
        return abs(float(np.dot(self.plane.normal, total))) / 2.0

    def centroid(self) -> np.ndarray:
        return self.positions().mean(axis=0)

    def __len__(self) -> int:
        return len(self.vertices)

    def __repr__(self) -> str:
        return f"Polygon({len(self.vertices)} vertices, {self.plane!r})"
