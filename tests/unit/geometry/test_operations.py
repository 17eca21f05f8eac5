"""
Tests for the boolean entry point and result analysis.
"""

import numpy as np
import pytest

from polycsg.csg.solid import BooleanOperation
from polycsg.geometry.operations import (
    analyze_result,
    boolean_intersect,
    boolean_operation,
    boolean_subtract,
    boolean_symmetric_difference,
    boolean_union,
    bounds_overlap,
)
from polycsg.geometry.primitives import Cube


def box(low, high):
    return np.array(low, dtype=float), np.array(high, dtype=float)


class TestBoundsOverlap:
    """Tests for bounds_overlap()."""

    def test_overlapping(self):
        """Test boxes sharing volume overlap."""
        assert bounds_overlap(box([0, 0, 0], [1, 1, 1]), box([0.5, 0.5, 0.5], [2, 2, 2]))

    def test_touching(self):
        """Test boxes sharing a face count as overlapping."""
        assert bounds_overlap(box([0, 0, 0], [1, 1, 1]), box([1, 0, 0], [2, 1, 1]))

    def test_separated(self):
        """Test a gap on one axis is enough to separate."""
        assert not bounds_overlap(box([0, 0, 0], [1, 1, 1]), box([0, 0, 1.5], [1, 1, 2]))

    def test_tolerance(self):
        """Test a small gap is bridged by the tolerance."""
        a = box([0, 0, 0], [1, 1, 1])
        b = box([1.001, 0, 0], [2, 1, 1])
        assert not bounds_overlap(a, b)
        assert bounds_overlap(a, b, tolerance=0.01)

    def test_missing_box(self):
        """Test an empty operand never overlaps."""
        assert not bounds_overlap(None, box([0, 0, 0], [1, 1, 1]))
        assert not bounds_overlap(box([0, 0, 0], [1, 1, 1]), None)


class TestBooleanOperation:
    """Tests for boolean_operation() and the named wrappers."""

    def test_union(self, unit_cube, overlapping_cube):
        """Test overlapping union is one piece."""
        result = boolean_union(unit_cube, overlapping_cube)
        assert result.is_single_solid
        assert result.total_volume() == pytest.approx(1.5)

    def test_intersect(self, unit_cube, overlapping_cube):
        """Test overlapping intersection."""
        result = boolean_intersect(unit_cube, overlapping_cube)
        assert result.is_single_solid
        assert result.total_volume() == pytest.approx(0.5)

    def test_subtract(self, unit_cube, overlapping_cube):
        """Test overlapping difference."""
        result = boolean_subtract(unit_cube, overlapping_cube)
        assert result.is_single_solid
        assert result.total_volume() == pytest.approx(0.5)

    def test_symmetric_difference_splits(self, unit_cube, overlapping_cube):
        """Test the two leftover slabs come back as separate pieces."""
        result = boolean_symmetric_difference(unit_cube, overlapping_cube)
        assert result.piece_count == 2
        assert result.total_volume() == pytest.approx(1.0)
        for piece in result:
            assert piece.volume() == pytest.approx(0.5)

    def test_subtract_notch(self, unit_cube):
        """Test removing a corner block leaves a non-convex solid."""
        corner = Cube.at((0.5, 0.5, 0.5), 1.0).to_solid()
        result = boolean_subtract(unit_cube, corner)
        assert result.total_volume() == pytest.approx(0.875)
        assert not result.solids[0].is_convex()

    def test_subtract_everything(self, unit_cube):
        """Test subtracting a larger enclosing cube leaves nothing."""
        big = Cube.at((0, 0, 0), 3.0).to_solid()
        assert boolean_subtract(unit_cube, big).is_empty

    def test_operation_by_name(self, unit_cube, overlapping_cube):
        """Test string selectors and aliases."""
        result = boolean_operation(unit_cube, overlapping_cube, "subtract")
        assert result.total_volume() == pytest.approx(0.5)

    def test_unknown_operation(self, unit_cube, overlapping_cube):
        """Test an unknown selector is rejected."""
        with pytest.raises(ValueError):
            boolean_operation(unit_cube, overlapping_cube, "merge")

    def test_polygon_list_operands(self, unit_cube, overlapping_cube):
        """Test plain polygon lists are accepted."""
        result = boolean_operation(
            list(unit_cube.polygons), list(overlapping_cube.polygons), BooleanOperation.UNION
        )
        assert result.total_volume() == pytest.approx(1.5)


class TestDisjointShortcut:
    """Tests for operands whose bounding boxes do not meet."""

    def test_union(self, unit_cube, distant_cube):
        """Test both cubes come back as separate pieces."""
        result = boolean_union(unit_cube, distant_cube)
        assert result.piece_count == 2
        assert result.total_volume() == pytest.approx(2.0)

    def test_intersection(self, unit_cube, distant_cube):
        """Test nothing is shared."""
        assert boolean_intersect(unit_cube, distant_cube).is_empty

    def test_difference(self, unit_cube, distant_cube):
        """Test A comes back untouched."""
        result = boolean_subtract(unit_cube, distant_cube)
        assert result.is_single_solid
        assert result.total_volume() == pytest.approx(1.0)
        low, high = result.solids[0].bounding_box()
        assert np.allclose(low, [-0.5, -0.5, -0.5])
        assert np.allclose(high, [0.5, 0.5, 0.5])

    def test_symmetric_difference(self, unit_cube, distant_cube):
        """Test both cubes come back."""
        result = boolean_symmetric_difference(unit_cube, distant_cube)
        assert result.piece_count == 2

    def test_empty_operand(self, unit_cube):
        """Test an empty operand takes the shortcut."""
        assert boolean_union(unit_cube, []).total_volume() == pytest.approx(1.0)
        assert boolean_intersect(unit_cube, []).is_empty

    def test_bbox_tolerance_forces_full_path(self, unit_cube):
        """Test a nearly touching cube goes through the BSP path and still separates."""
        near = Cube.at((1.001, 0, 0), 1.0).to_solid()
        result = boolean_operation(unit_cube, near, "union", bbox_tolerance=0.01)
        assert result.piece_count == 2
        assert result.total_volume() == pytest.approx(2.0)


class TestAnalyzeResult:
    """Tests for analyze_result()."""

    def test_report_keys(self, unit_cube, overlapping_cube):
        """Test the report shape for a single-piece union."""
        report = analyze_result(boolean_union(unit_cube, overlapping_cube))

        assert report["piece_count"] == 1
        assert report["is_empty"] is False
        assert report["is_single_solid"] is True
        assert report["total_volume"] == pytest.approx(1.5)
        assert report["edge_count"] > 0

        piece = report["pieces"][0]
        assert set(piece) == {
            "vertex_count",
            "face_count",
            "volume",
            "surface_area",
            "is_convex",
            "centroid",
            "bounds_min",
            "bounds_max",
        }
        assert piece["is_convex"] is True
        assert piece["bounds_min"] == pytest.approx([-0.5, -0.5, -0.5])
        assert piece["bounds_max"] == pytest.approx([1.0, 0.5, 0.5])

    def test_report_is_plain_data(self, unit_cube, distant_cube):
        """Test the report holds only built-in types."""
        report = analyze_result(boolean_union(unit_cube, distant_cube))
        piece = report["pieces"][0]
        assert isinstance(piece["centroid"], list)
        assert isinstance(piece["bounds_min"][0], float)

    def test_empty_report(self, unit_cube, distant_cube):
        """Test the report for an empty result."""
        report = analyze_result(boolean_intersect(unit_cube, distant_cube))
        assert report["is_empty"] is True
        assert report["piece_count"] == 0
        assert report["pieces"] == []
        assert report["total_volume"] == 0.0


class TestBooleanLaws:
    """Volume identities between the operations."""

    @pytest.fixture
    def shifted_cube(self):
        return Cube.at((0.3, 0.4, -0.2), 1.0).to_solid()

    def test_inclusion_exclusion(self, unit_cube, shifted_cube):
        """Test |A ∪ B| = |A| + |B| - |A ∩ B|."""
        union = boolean_union(unit_cube, shifted_cube).total_volume()
        overlap = boolean_intersect(unit_cube, shifted_cube).total_volume()
        assert union == pytest.approx(2.0 - overlap, abs=1e-4)
        assert overlap == pytest.approx(0.7 * 0.6 * 0.8, abs=1e-4)

    def test_symmetric_difference_identity(self, unit_cube, shifted_cube):
        """Test (A - B) ∪ (B - A) matches the symmetric difference."""
        a_minus_b = unit_cube.subtract(shifted_cube)
        b_minus_a = shifted_cube.subtract(unit_cube)
        combined = boolean_union(a_minus_b, b_minus_a).total_volume()
        direct = boolean_symmetric_difference(unit_cube, shifted_cube).total_volume()
        assert combined == pytest.approx(direct, abs=1e-4)

    def test_self_intersection(self, unit_cube):
        """Test A ∩ A keeps the volume and the piece count."""
        result = boolean_intersect(unit_cube, unit_cube)
        assert result.piece_count == 1
        assert result.total_volume() == pytest.approx(1.0)

    def test_disjoint_pieces_are_convex(self, unit_cube, distant_cube):
        """Test both cubes of a disjoint union stay convex unit pieces."""
        result = boolean_union(unit_cube, distant_cube)
        for piece in result:
            assert piece.volume() == pytest.approx(1.0)
            assert piece.is_convex()


class TestHighFaceCount:
    """Booleans between convex solids with many faces."""

    def test_union_of_thousand_sided_prisms(self, make_prism):
        """Test two overlapping 1000-sided prisms union into one solid."""
        result = boolean_union(make_prism(1000), make_prism(1000, cx=0.5))

        # Two unit discs 0.5 apart: 2 * pi minus the lens they share.
        lens = 2.0 * np.arccos(0.25) - 0.25 * np.sqrt(3.75)
        assert result.is_single_solid
        assert result.total_volume() == pytest.approx(2.0 * np.pi - lens, rel=1e-3)
