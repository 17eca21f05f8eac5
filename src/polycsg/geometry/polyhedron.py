"""
Welded polygon meshes and their measurements.

A :class:`Polyhedron` is the indexed form of a polygon soup: near-duplicate
vertices are merged into one entry and each face becomes a loop of vertex
indices. Volume, area and convexity are computed from that indexed form.
"""

from typing import Iterable, NamedTuple, Sequence

import numpy as np

from polycsg.core.exceptions import GeometryError
from polycsg.core.logging import get_logger
from polycsg.csg.line import Line
from polycsg.csg.plane import EPSILON
from polycsg.csg.polygon import Polygon
from polycsg.csg.solid import Solid
from polycsg.csg.vectors import newell_normal
from polycsg.csg.vertex import Vertex

_logger = get_logger(__name__)


class EdgeKey(NamedTuple):
    """Undirected edge between two vertex indices, stored as (low, high)."""

    low: int
    high: int

    @classmethod
    def of(cls, i: int, j: int) -> "EdgeKey":
        return cls(min(i, j), max(i, j))


class _VertexWelder:
    """
    Growing list of unique positions with a linear nearest-match search.

    The scan is exhaustive rather than hashed so that two points straddling a
    grid cell boundary still merge.
    """

    def __init__(self, epsilon: float) -> None:
        self.epsilon = epsilon
        self._buffer = np.empty((16, 3), dtype=np.float64)
        self._count = 0

    def index_of(self, position: np.ndarray) -> int:
        if self._count:
            distances = np.linalg.norm(self._buffer[: self._count] - position, axis=1)
            matches = np.flatnonzero(distances < self.epsilon)
            if matches.size:
                return int(matches[0])
        if self._count == len(self._buffer):
            self._buffer = np.concatenate([self._buffer, np.empty_like(self._buffer)])
        self._buffer[self._count] = position
        self._count += 1
        return self._count - 1

    def positions(self) -> np.ndarray:
        return self._buffer[: self._count].copy()


class Polyhedron:
    """
    Indexed polygon mesh.

    Attributes:
        vertices: ``(n, 3)`` array of unique positions
        faces: Tuple of vertex-index loops, each with at least 3 distinct indices

    Raises:
        GeometryError: If a face references a missing vertex or has fewer
            than three distinct indices
    """

    def __init__(
        self,
        vertices: Sequence[Sequence[float]] | np.ndarray,
        faces: Iterable[Sequence[int]],
    ) -> None:
        verts = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
        face_list = tuple(tuple(int(i) for i in face) for face in faces)
        for face in face_list:
            if len(set(face)) < 3:
                raise GeometryError(
                    "Face needs at least 3 distinct vertex indices",
                    details={"face": list(face)},
                )
            if min(face) < 0 or max(face) >= len(verts):
                raise GeometryError(
                    "Face references a vertex index out of range",
                    details={"face": list(face), "vertex_count": len(verts)},
                )
        verts.setflags(write=False)
        self.vertices: np.ndarray = verts
        self.faces: tuple[tuple[int, ...], ...] = face_list

    @classmethod
    def from_polygons(
        cls, polygons: Iterable[Polygon], epsilon: float = EPSILON
    ) -> "Polyhedron":
        """
        Weld a polygon soup into an indexed mesh.

        Vertices closer than ``epsilon`` share an index. Repeated consecutive
        indices are collapsed, and faces left with fewer than three distinct
        indices are dropped.
        """
        welder = _VertexWelder(epsilon)
        faces: list[list[int]] = []
        dropped = 0

        for polygon in polygons:
            indices: list[int] = []
            for vertex in polygon.vertices:
                index = welder.index_of(vertex.position)
                if not indices or indices[-1] != index:
                    indices.append(index)
            if len(indices) > 1 and indices[0] == indices[-1]:
                indices.pop()
            if len(set(indices)) >= 3:
                faces.append(indices)
            else:
                dropped += 1

        mesh = cls(welder.positions(), faces)
        if dropped:
            _logger.debug("degenerate_faces_dropped", dropped=dropped, kept=len(faces))
        return mesh

    @classmethod
    def from_solid(cls, solid: Solid, epsilon: float = EPSILON) -> "Polyhedron":
        return cls.from_polygons(solid.polygons, epsilon)

    @property
    def is_empty(self) -> bool:
        """True when there are no faces or fewer than four vertices."""
        return not self.faces or len(self.vertices) < 4

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        return len(self.faces)

    def to_polygons(self) -> list[Polygon]:
        """Faces as standalone polygons, e.g. to feed back into a boolean."""
        return [Polygon(Vertex(self.vertices[i]) for i in face) for face in self.faces]

    def to_solid(self) -> Solid:
        return Solid(self.to_polygons())

    def _directed_edges(self) -> dict[EdgeKey, tuple[int, int]]:
        """Each undirected edge mapped to the direction its first face walks it."""
        edges: dict[EdgeKey, tuple[int, int]] = {}
        for face in self.faces:
            for i1, i2 in zip(face, face[1:] + face[:1]):
                edges.setdefault(EdgeKey.of(i1, i2), (i1, i2))
        return edges

    def unique_edges(self) -> list[EdgeKey]:
        """Each undirected edge once, in first-seen order."""
        return list(self._directed_edges())

    def edge_lines(self) -> list[Line]:
        """Wireframe segments, one per unique edge, in the winding of the first face using it."""
        return [
            Line(self.vertices[start], self.vertices[end])
            for start, end in self._directed_edges().values()
        ]

    def _fan(self, face: Sequence[int]) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        points = self.vertices[list(face)]
        return points[0], points[1:-1], points[2:]

    def volume(self) -> float:
        """Enclosed volume by the divergence theorem over fan triangles."""
        total = 0.0
        for face in self.faces:
            v0, v1, v2 = self._fan(face)
            total += float(np.sum(np.cross(v1, v2) @ v0)) / 6.0
        return abs(total)

    def surface_area(self) -> float:
        total = 0.0
        for face in self.faces:
            v0, v1, v2 = self._fan(face)
            total += float(np.linalg.norm(np.cross(v1 - v0, v2 - v0), axis=1).sum()) / 2.0
        return total

    def is_convex(self, epsilon: float = EPSILON) -> bool:
        """True when no vertex lies more than ``epsilon`` in front of any face."""
        for face in self.faces:
            points = self.vertices[list(face)]
            normal = np.cross(points[1] - points[0], points[2] - points[0])
            length = np.linalg.norm(normal)
            if length == 0.0:
                normal = newell_normal(points)
                length = np.linalg.norm(normal)
                if length == 0.0:
                    continue
            normal = normal / length
            distances = self.vertices @ normal - float(np.dot(normal, points[0]))
            if np.any(distances > epsilon):
                return False
        return True

    def centroid(self) -> np.ndarray:
        """Average of the vertices; origin for an empty mesh."""
        if not len(self.vertices):
            return np.zeros(3)
        return self.vertices.mean(axis=0)

    def bounding_box(self) -> tuple[np.ndarray, np.ndarray]:
        """Axis-aligned ``(min, max)``; both zero for an empty mesh."""
        if not len(self.vertices):
            return np.zeros(3), np.zeros(3)
        return self.vertices.min(axis=0), self.vertices.max(axis=0)

    def __repr__(self) -> str:
        return f"Polyhedron({self.vertex_count} vertices, {self.face_count} faces)"
