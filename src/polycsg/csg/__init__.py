"""
CSG core - planes, polygons, BSP trees and boolean operations on solids.
"""

from polycsg.csg.bsp import BSPNode
from polycsg.csg.line import Line
from polycsg.csg.plane import EPSILON, Plane, PointClassification
from polycsg.csg.polygon import Polygon, PolygonClassification
from polycsg.csg.solid import BooleanOperation, Solid
from polycsg.csg.vertex import Vertex

__all__ = [
    "EPSILON",
    "BSPNode",
    "BooleanOperation",
    "Line",
    "Plane",
    "PointClassification",
    "Polygon",
    "PolygonClassification",
    "Solid",
    "Vertex",
]
