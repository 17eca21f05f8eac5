"""
Geometry module - welded meshes, boolean results and the boolean entry point.

Provides boolean operations (union, subtract, intersect, symmetric difference),
connected-component separation, mesh measurements and shape generators.
"""

from polycsg.geometry.boolean_result import BooleanResult, separate_components
from polycsg.geometry.operations import (
    analyze_result,
    boolean_intersect,
    boolean_operation,
    boolean_subtract,
    boolean_symmetric_difference,
    boolean_union,
    bounds_overlap,
)
from polycsg.geometry.polyhedron import EdgeKey, Polyhedron
from polycsg.geometry.primitives import Cube

__all__ = [
    "BooleanResult",
    "Cube",
    "EdgeKey",
    "Polyhedron",
    "analyze_result",
    "boolean_intersect",
    "boolean_operation",
    "boolean_subtract",
    "boolean_symmetric_difference",
    "boolean_union",
    "bounds_overlap",
    "separate_components",
]
