"""
polycsg - Constructive solid geometry on polygon meshes via BSP trees.

Exact boolean operations (union, intersection, difference, symmetric
difference) on polyhedral solids, followed by mesh welding and separation
of the result into connected pieces.
"""

__version__ = "0.1.0"
__author__ = "polycsg Contributors"

from polycsg.csg import BooleanOperation, Polygon, Solid, Vertex
from polycsg.geometry import BooleanResult, Cube, Polyhedron, boolean_operation

__all__ = [
    "__version__",
    "BooleanOperation",
    "BooleanResult",
    "Cube",
    "Polygon",
    "Polyhedron",
    "Solid",
    "Vertex",
    "boolean_operation",
]
