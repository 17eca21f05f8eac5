"""
Binary space partitioning tree over convex polygons.

A node stores a splitting plane, the polygons coplanar with it, and owns its
optional front and back subtrees outright, so the in-place mutations used by
the boolean operations (``build``, ``clip_to``, ``invert``) never alias.

A node's back side with no back child is solid space: ``clip_polygons``
drops whatever falls there. That is what lets ``clip_to`` remove the parts of
one surface lying inside another solid.

Every traversal walks an explicit node stack. A convex solid builds a
back-chain as deep as its face count, which would overflow the interpreter
stack if the walks recursed.
"""

from typing import Iterable, Iterator, Optional

from polycsg.csg.plane import EPSILON, Plane
from polycsg.csg.polygon import Polygon, PolygonClassification

_COPLANAR = (PolygonClassification.COPLANAR_FRONT, PolygonClassification.COPLANAR_BACK)


class BSPNode:
    """
    One node of a BSP tree.

    Attributes:
        plane: Splitting plane, None for an empty leaf
        front: Subtree in front of ``plane``
        back: Subtree behind ``plane``
        polygons: Polygons lying in ``plane``
        epsilon: Classification tolerance, inherited by child nodes
    """

    def __init__(
        self,
        polygons: Optional[Iterable[Polygon]] = None,
        epsilon: float = EPSILON,
    ) -> None:
        self.plane: Optional[Plane] = None
        self.front: Optional[BSPNode] = None
        self.back: Optional[BSPNode] = None
        self.polygons: list[Polygon] = []
        self.epsilon = epsilon
        if polygons is not None:
            self.build(list(polygons))

    def _nodes(self) -> Iterator["BSPNode"]:
        """Pre-order walk: node, front subtree, back subtree."""
        stack: list[BSPNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.back is not None:
                stack.append(node.back)
            if node.front is not None:
                stack.append(node.front)

    def clone(self) -> "BSPNode":
        """Deep copy of the tree structure; polygons are shared values."""
        root = BSPNode(epsilon=self.epsilon)
        stack: list[tuple[BSPNode, BSPNode]] = [(self, root)]
        while stack:
            source, target = stack.pop()
            target.plane = source.plane
            target.polygons = list(source.polygons)
            if source.front is not None:
                target.front = BSPNode(epsilon=source.front.epsilon)
                stack.append((source.front, target.front))
            if source.back is not None:
                target.back = BSPNode(epsilon=source.back.epsilon)
                stack.append((source.back, target.back))
        return root

    def invert(self) -> None:
        """Turn the solid inside out: solid space and empty space swap."""
        for node in list(self._nodes()):
            node.polygons = [polygon.flipped() for polygon in node.polygons]
            if node.plane is not None:
                node.plane = node.plane.flipped()
            node.front, node.back = node.back, node.front

    def clip_polygons(self, polygons: list[Polygon]) -> list[Polygon]:
        """
        Remove the parts of ``polygons`` that lie inside this tree's solid.

        An empty tree (no plane) returns the input unchanged. Surviving
        fragments come out front subtree first, then back subtree.
        """
        result: list[Polygon] = []
        stack: list[tuple[BSPNode, list[Polygon]]] = [(self, list(polygons))]
        while stack:
            node, bucket = stack.pop()
            if node.plane is None:
                result.extend(bucket)
                continue

            front_polygons: list[Polygon] = []
            back_polygons: list[Polygon] = []
            for polygon in bucket:
                front, back = polygon.split(node.plane, node.epsilon)
                if front is not None:
                    front_polygons.append(front)
                if back is not None:
                    back_polygons.append(back)

            # Back is pushed first so the front bucket is finished before it.
            if node.back is not None and back_polygons:
                stack.append((node.back, back_polygons))
            if node.front is not None:
                if front_polygons:
                    stack.append((node.front, front_polygons))
            else:
                result.extend(front_polygons)

        return result

    def clip_to(self, other: "BSPNode") -> None:
        """Remove every polygon in this tree that lies inside ``other``."""
        for node in self._nodes():
            node.polygons = other.clip_polygons(node.polygons)

    def all_polygons(self) -> list[Polygon]:
        """Pre-order list of this node's polygons, then front, then back."""
        return [polygon for node in self._nodes() for polygon in node.polygons]

    def build(self, polygons: list[Polygon]) -> None:
        """
        Insert ``polygons`` into the tree.

        An unbuilt node adopts the first polygon's plane. A node that already
        has a plane keeps it and only routes the new polygons.
        """
        stack: list[tuple[BSPNode, list[Polygon]]] = [(self, polygons)]
        while stack:
            node, bucket = stack.pop()
            if not bucket:
                continue

            if node.plane is None:
                node.plane = bucket[0].plane

            front_polygons: list[Polygon] = []
            back_polygons: list[Polygon] = []
            for polygon in bucket:
                classification = polygon.classify(node.plane, node.epsilon)
                if classification in _COPLANAR:
                    node.polygons.append(polygon)
                elif classification is PolygonClassification.FRONT:
                    front_polygons.append(polygon)
                elif classification is PolygonClassification.BACK:
                    back_polygons.append(polygon)
                else:
                    front, back = polygon.split(node.plane, node.epsilon)
                    if front is not None:
                        front_polygons.append(front)
                    if back is not None:
                        back_polygons.append(back)

            if front_polygons:
                if node.front is None:
                    node.front = BSPNode(epsilon=node.epsilon)
                stack.append((node.front, front_polygons))

            if back_polygons:
                if node.back is None:
                    node.back = BSPNode(epsilon=node.epsilon)
                stack.append((node.back, back_polygons))

    def depth(self) -> int:
        """Height of the tree; 0 for an empty leaf."""
        deepest = 0
        stack: list[tuple[BSPNode, int]] = [(self, 1)]
        while stack:
            node, level = stack.pop()
            if node.plane is None:
                continue
            deepest = max(deepest, level)
            if node.front is not None:
                stack.append((node.front, level + 1))
            if node.back is not None:
                stack.append((node.back, level + 1))
        return deepest

    def __repr__(self) -> str:
        return f"BSPNode(plane={self.plane!r}, polygons={len(self.polygons)})"
