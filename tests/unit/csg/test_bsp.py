"""
Tests for BSP tree construction, clipping and inversion.
"""

import numpy as np
import pytest

from polycsg.csg.bsp import BSPNode
from polycsg.csg.polygon import Polygon


def square(x0, x1, y0, y1, z=0.0):
    """Axis-aligned square in a z plane facing +z."""
    return Polygon.from_points([(x0, y0, z), (x1, y0, z), (x1, y1, z), (x0, y1, z)])


class TestBSPBuild:
    """Tests for building trees."""

    def test_empty_tree(self):
        """Test a tree with no polygons has no plane."""
        node = BSPNode()
        assert node.plane is None
        assert node.all_polygons() == []
        assert node.depth() == 0

    def test_build_empty_list_is_noop(self):
        """Test building from an empty list leaves the node unbuilt."""
        node = BSPNode([])
        assert node.plane is None

    def test_single_polygon(self):
        """Test one polygon becomes the root splitter."""
        polygon = square(0, 1, 0, 1)
        node = BSPNode([polygon])

        assert node.plane is polygon.plane
        assert node.polygons == [polygon]
        assert node.front is None
        assert node.back is None
        assert node.depth() == 1

    def test_cube_is_back_chain(self, unit_cube):
        """Test every cube face lies behind the others, so no splits happen."""
        node = BSPNode(unit_cube.polygons)

        assert node.depth() == 6
        assert len(node.all_polygons()) == 6
        assert node.front is None

    def test_coplanar_polygons_share_a_node(self):
        """Test coplanar polygons are stored together at one node."""
        a = square(0, 1, 0, 1)
        b = square(2, 3, 0, 1)
        flipped = square(5, 6, 0, 1).flipped()
        node = BSPNode([a, b, flipped])

        assert len(node.polygons) == 3
        assert node.front is None and node.back is None

    def test_spanning_polygon_is_split(self):
        """Test a polygon crossing the splitter goes to both children."""
        floor = square(0, 1, 0, 1)
        wall = Polygon.from_points([(0.5, 0, -1), (0.5, 1, -1), (0.5, 1, 1), (0.5, 0, 1)])
        node = BSPNode([floor, wall])

        assert node.front is not None and node.back is not None
        assert len(node.all_polygons()) == 3

    def test_existing_plane_is_kept(self):
        """Test building more polygons into a node does not replace its plane."""
        floor = square(0, 1, 0, 1)
        node = BSPNode([floor])
        node.build([square(0, 1, 0, 1, z=2.0)])

        assert node.plane is floor.plane
        assert node.front is not None
        assert len(node.front.polygons) == 1

    def test_children_inherit_epsilon(self, unit_cube):
        """Test child nodes use the tolerance the root was built with."""
        node = BSPNode(unit_cube.polygons, epsilon=1e-3)
        assert node.back.epsilon == 1e-3
        assert node.back.back.epsilon == 1e-3


class TestBSPInvert:
    """Tests for invert()."""

    def test_invert_swaps_children(self, unit_cube):
        """Test front and back subtrees swap."""
        node = BSPNode(unit_cube.polygons)
        original_normal = node.plane.normal.copy()
        node.invert()

        assert node.back is None
        assert node.front is not None
        assert np.allclose(node.plane.normal, -original_normal)

    def test_invert_flips_polygons(self, unit_cube):
        """Test every stored polygon points inward after inversion."""
        node = BSPNode(unit_cube.polygons)
        node.invert()
        for polygon in node.all_polygons():
            # Inward normals point at the cube centre.
            assert np.dot(polygon.normal, polygon.centroid()) < 0

    def test_double_invert_restores(self, unit_cube):
        """Test inverting twice gives back the original orientation."""
        node = BSPNode(unit_cube.polygons)
        node.invert()
        node.invert()

        assert node.front is None
        for polygon in node.all_polygons():
            assert np.dot(polygon.normal, polygon.centroid()) > 0


class TestBSPClip:
    """Tests for clip_polygons() and clip_to()."""

    def test_clip_with_empty_tree_returns_input(self):
        """Test an empty tree clips nothing."""
        polygons = [square(0, 1, 0, 1)]
        assert BSPNode().clip_polygons(polygons) == polygons

    def test_inside_polygon_removed(self, unit_cube):
        """Test a polygon inside the solid is discarded."""
        node = BSPNode(unit_cube.polygons)
        assert node.clip_polygons([square(-0.25, 0.25, -0.25, 0.25)]) == []

    def test_outside_polygon_kept(self, unit_cube):
        """Test a polygon outside the solid survives."""
        outside = square(2, 3, 0, 1)
        node = BSPNode(unit_cube.polygons)
        assert node.clip_polygons([outside]) == [outside]

    def test_spanning_polygon_trimmed(self, unit_cube):
        """Test only the outside part of a crossing polygon remains."""
        node = BSPNode(unit_cube.polygons)
        kept = node.clip_polygons([square(0.3, 0.7, -0.25, 0.25)])

        assert len(kept) == 1
        assert kept[0].area() == pytest.approx(0.1)
        assert kept[0].positions()[:, 0].min() == pytest.approx(0.5)

    def test_clip_to_empties_enclosed_tree(self, unit_cube):
        """Test clip_to removes a tree wholly inside another solid."""
        inner = BSPNode([square(-0.25, 0.25, -0.25, 0.25)])
        inner.clip_to(BSPNode(unit_cube.polygons))
        assert inner.all_polygons() == []

    def test_clone_is_independent(self, unit_cube):
        """Test mutating a clone leaves the original untouched."""
        node = BSPNode(unit_cube.polygons)
        copy = node.clone()
        copy.invert()

        assert node.front is None
        assert node.back is not None
        assert copy.back is None
        assert len(copy.all_polygons()) == len(node.all_polygons())


class TestBSPDeepTrees:
    """Tests for trees deeper than the interpreter's recursion limit."""

    SIDES = 1200

    @pytest.fixture
    def deep_tree(self, make_prism):
        return BSPNode(make_prism(self.SIDES).polygons)

    def test_convex_prism_is_back_chain(self, deep_tree):
        """Test every face of a convex prism lands one level deeper."""
        assert deep_tree.depth() == self.SIDES + 2
        assert deep_tree.front is None
        assert len(deep_tree.all_polygons()) == self.SIDES + 2

    def test_all_polygons_pre_order(self, make_prism):
        """Test polygons come out in insertion order along the back chain."""
        polygons = make_prism(self.SIDES).polygons
        assert BSPNode(polygons).all_polygons() == list(polygons)

    def test_invert_and_clone(self, deep_tree):
        """Test inverting a clone turns the back chain into a front chain."""
        copy = deep_tree.clone()
        copy.invert()

        assert copy.back is None
        assert copy.front is not None
        assert copy.depth() == self.SIDES + 2
        assert deep_tree.front is None

    def test_clip_to_deep_tree(self, deep_tree):
        """Test clipping against a deep tree still removes enclosed polygons."""
        inner = BSPNode([square(-0.25, 0.25, -0.25, 0.25)])
        inner.clip_to(deep_tree)
        assert inner.all_polygons() == []

        outer = BSPNode([square(2.0, 3.0, -0.5, 0.5)])
        outer.clip_to(deep_tree)
        kept = outer.all_polygons()
        assert sum(polygon.area() for polygon in kept) == pytest.approx(1.0)
