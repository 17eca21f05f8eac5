"""
Boolean entry point and result analysis.

Provides:
- Boolean union, subtract, intersect and symmetric difference on solids
- A bounding-box shortcut that skips the BSP work for disjoint operands
- A plain-dict report of a result for the CLI and for logs

All operations accept :class:`~polycsg.csg.solid.Solid` objects (or plain
polygon lists) and return a :class:`~polycsg.geometry.boolean_result.BooleanResult`.
"""

from typing import Any, Iterable, Optional, Union

import numpy as np

from polycsg.core.logging import get_logger
from polycsg.csg.plane import EPSILON
from polycsg.csg.polygon import Polygon
from polycsg.csg.solid import BooleanOperation, Solid
from polycsg.geometry.boolean_result import BooleanResult

_logger = get_logger(__name__)

Operand = Union[Solid, Iterable[Polygon]]
BoundingBox = tuple[np.ndarray, np.ndarray]


def _as_solid(operand: Operand) -> Solid:
    if isinstance(operand, Solid):
        return operand
    return Solid(list(operand))


def bounds_overlap(
    box_a: Optional[BoundingBox], box_b: Optional[BoundingBox], tolerance: float = EPSILON
) -> bool:
    """
    True when two axis-aligned boxes overlap or come within ``tolerance``.

    A missing box (empty operand) never overlaps anything.
    """
    if box_a is None or box_b is None:
        return False
    min_a, max_a = box_a
    min_b, max_b = box_b
    return not (np.any(max_a < min_b - tolerance) or np.any(min_a > max_b + tolerance))


# ---------------------------------------------------------------------------
# Boolean operations
# ---------------------------------------------------------------------------

def boolean_union(a: Operand, b: Operand, epsilon: float = EPSILON) -> BooleanResult:
    """
    Boolean union of two solids (A ∪ B).

    Args:
        a: First operand.
        b: Second operand.
        epsilon: Classification tolerance.

    Returns:
        Result pieces.
    """
    return boolean_operation(a, b, BooleanOperation.UNION, epsilon=epsilon)


def boolean_subtract(a: Operand, b: Operand, epsilon: float = EPSILON) -> BooleanResult:
    """
    Boolean subtraction (A − B).

    Args:
        a: Base solid.
        b: Solid to subtract from *a*.
        epsilon: Classification tolerance.
    """
    return boolean_operation(a, b, BooleanOperation.DIFFERENCE, epsilon=epsilon)


def boolean_intersect(a: Operand, b: Operand, epsilon: float = EPSILON) -> BooleanResult:
    """Boolean intersection (A ∩ B)."""
    return boolean_operation(a, b, BooleanOperation.INTERSECTION, epsilon=epsilon)


def boolean_symmetric_difference(
    a: Operand, b: Operand, epsilon: float = EPSILON
) -> BooleanResult:
    """Boolean symmetric difference ((A − B) ∪ (B − A))."""
    return boolean_operation(a, b, BooleanOperation.SYMMETRIC_DIFFERENCE, epsilon=epsilon)


def _disjoint_result(
    a: Solid, b: Solid, operation: BooleanOperation, epsilon: float
) -> BooleanResult:
    if operation is BooleanOperation.INTERSECTION:
        return BooleanResult()
    pieces = list(BooleanResult.from_solid(a, epsilon).solids)
    if operation in (BooleanOperation.UNION, BooleanOperation.SYMMETRIC_DIFFERENCE):
        pieces.extend(BooleanResult.from_solid(b, epsilon).solids)
    return BooleanResult(pieces)


def boolean_operation(
    a: Operand,
    b: Operand,
    operation: BooleanOperation | str,
    *,
    epsilon: float = EPSILON,
    bbox_tolerance: Optional[float] = None,
) -> BooleanResult:
    """
    Combine two solids and split the outcome into connected pieces.

    When the operands' bounding boxes are disjoint no BSP tree is built:
    union and symmetric difference return both operands, intersection is
    empty and difference returns ``a`` untouched.

    Args:
        a: First operand (left side of a difference).
        b: Second operand.
        operation: Operation selector or its name.
        epsilon: Classification and welding tolerance.
        bbox_tolerance: Slack for the bounding-box test; defaults to ``epsilon``.

    Returns:
        Result pieces; ``is_empty`` when nothing is left.
    """
    op = BooleanOperation.parse(operation)
    solid_a = _as_solid(a)
    solid_b = _as_solid(b)
    tolerance = epsilon if bbox_tolerance is None else bbox_tolerance

    _logger.debug(
        "boolean_started",
        operation=op.value,
        polygons_a=len(solid_a.polygons),
        polygons_b=len(solid_b.polygons),
    )

    if not bounds_overlap(solid_a.bounding_box(), solid_b.bounding_box(), tolerance):
        _logger.debug("boolean_bounds_disjoint", operation=op.value)
        result = _disjoint_result(solid_a, solid_b, op, epsilon)
    else:
        combined = solid_a.apply(op, solid_b, epsilon)
        result = BooleanResult.from_solid(combined, epsilon)

    _logger.info(
        "boolean_complete",
        operation=op.value,
        pieces=result.piece_count,
        volume=round(result.total_volume(), 9),
    )
    return result


# ---------------------------------------------------------------------------
# Result analysis
# ---------------------------------------------------------------------------

def analyze_result(result: BooleanResult, epsilon: float = EPSILON) -> dict[str, Any]:
    """
    Summarise a boolean result as plain Python data.

    Returns dict with: piece_count, is_empty, is_single_solid, total_volume,
    total_surface_area, edge_count and a ``pieces`` list with per-piece
    vertex/face counts, volume, surface_area, is_convex, centroid and bounds.
    """
    pieces = []
    for solid in result.solids:
        low, high = solid.bounding_box()
        pieces.append(
            {
                "vertex_count": solid.vertex_count,
                "face_count": solid.face_count,
                "volume": solid.volume(),
                "surface_area": solid.surface_area(),
                "is_convex": solid.is_convex(epsilon),
                "centroid": solid.centroid().tolist(),
                "bounds_min": low.tolist(),
                "bounds_max": high.tolist(),
            }
        )

    return {
        "piece_count": result.piece_count,
        "is_empty": result.is_empty,
        "is_single_solid": result.is_single_solid,
        "total_volume": result.total_volume(),
        "total_surface_area": result.total_surface_area(),
        "edge_count": len(result.all_edge_lines()),
        "pieces": pieces,
    }
