"""
Boolean operation results, split into connected pieces.
"""

from collections import deque
from typing import Iterable, Iterator

from polycsg.core.logging import get_logger
from polycsg.csg.line import Line
from polycsg.csg.plane import EPSILON
from polycsg.csg.solid import Solid
from polycsg.geometry.polyhedron import Polyhedron

_logger = get_logger(__name__)


def separate_components(polyhedron: Polyhedron) -> list[Polyhedron]:
    """
    Split a mesh into connected pieces.

    Two faces belong to the same piece when they share at least one vertex
    index. Each piece gets its own compact vertex numbering, kept in the
    original index order. Empty pieces are left out.
    """
    if not polyhedron.faces:
        return []

    vertex_to_faces: list[list[int]] = [[] for _ in range(polyhedron.vertex_count)]
    for face_index, face in enumerate(polyhedron.faces):
        for vertex_index in face:
            vertex_to_faces[vertex_index].append(face_index)

    visited = [False] * polyhedron.face_count
    components: list[list[int]] = []
    for start in range(polyhedron.face_count):
        if visited[start]:
            continue
        component: list[int] = []
        queue = deque([start])
        visited[start] = True
        while queue:
            current = queue.popleft()
            component.append(current)
            for vertex_index in polyhedron.faces[current]:
                for neighbour in vertex_to_faces[vertex_index]:
                    if not visited[neighbour]:
                        visited[neighbour] = True
                        queue.append(neighbour)
        components.append(component)

    pieces: list[Polyhedron] = []
    for component in components:
        used = sorted({i for face_index in component for i in polyhedron.faces[face_index]})
        remap = {old: new for new, old in enumerate(used)}
        piece = Polyhedron(
            polyhedron.vertices[used],
            [[remap[i] for i in polyhedron.faces[face_index]] for face_index in component],
        )
        if not piece.is_empty:
            pieces.append(piece)
    return pieces


class BooleanResult:
    """
    One or more disjoint solids produced by a boolean operation.

    Attributes:
        solids: Non-empty meshes, one per connected piece
    """

    def __init__(self, solids: Iterable[Polyhedron] = ()) -> None:
        self.solids: list[Polyhedron] = [s for s in solids if not s.is_empty]

    @classmethod
    def from_polyhedron(cls, polyhedron: Polyhedron) -> "BooleanResult":
        """Separate a combined mesh into its connected pieces."""
        return cls(separate_components(polyhedron))

    @classmethod
    def from_solid(cls, solid: Solid, epsilon: float = EPSILON) -> "BooleanResult":
        """Weld a CSG polygon list and separate it into pieces."""
        combined = Polyhedron.from_solid(solid, epsilon)
        result = cls.from_polyhedron(combined)
        _logger.debug(
            "components_separated",
            polygons=len(solid.polygons),
            vertices=combined.vertex_count,
            faces=combined.face_count,
            pieces=result.piece_count,
        )
        return result

    @property
    def is_empty(self) -> bool:
        return not self.solids or all(s.is_empty for s in self.solids)

    @property
    def is_single_solid(self) -> bool:
        return len(self.solids) == 1

    @property
    def piece_count(self) -> int:
        return len(self.solids)

    def all_edge_lines(self) -> list[Line]:
        """Wireframe of every piece."""
        return [line for solid in self.solids for line in solid.edge_lines()]

    def total_volume(self) -> float:
        return sum((s.volume() for s in self.solids), 0.0)

    def total_surface_area(self) -> float:
        return sum((s.surface_area() for s in self.solids), 0.0)

    def __len__(self) -> int:
        return len(self.solids)

    def __iter__(self) -> Iterator[Polyhedron]:
        return iter(self.solids)

    def __repr__(self) -> str:
        return f"BooleanResult(pieces={self.piece_count}, volume={self.total_volume():.6g})"
