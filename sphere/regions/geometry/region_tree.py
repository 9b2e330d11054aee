"""
Binary space partitioning trees over great circles.

A :class:`RegionTree` describes an arbitrary (possibly non‑convex or
empty) region of the sphere.  Internal nodes hold a cutting circle; the
minus child covers the part of the node's cell on the cut's pole side
and the plus child the rest.  Leaves are marked inside or outside.

Only the operations convex areas need are provided: inserting boundary
arcs, point classification, decomposition into convex pieces and the
size and centroid derived from that decomposition.  Boundary insertion
follows the usual rule that the minus side of an inserted arc is inside
and the plus side outside.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..config import debug_enabled
from .arcs import GreatArc
from .circles import GreatCircle, PointLike
from .convex_area import ConvexArea
from .locations import HyperplaneLocation, RegionLocation
from .points import Point2S
from .vectors import Vec3, norm, vec_sum

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class RegionNode:
    """Node of a :class:`RegionTree`.

    Attributes:
        cut: Cutting circle, or ``None`` for a leaf.
        minus: Child on the cut's minus side.
        plus: Child on the cut's plus side.
        inside: For leaves, whether the cell belongs to the region.
    """

    cut: Optional[GreatCircle] = None
    minus: Optional["RegionNode"] = None
    plus: Optional["RegionNode"] = None
    inside: bool = True

    def is_leaf(self) -> bool:
        return self.cut is None

    def count(self) -> int:
        if self.is_leaf():
            return 1
        return 1 + self.minus.count() + self.plus.count()


class RegionTree:
    """Region of the sphere represented as a BSP tree."""

    def __init__(self, full: bool = False) -> None:
        self.root = RegionNode(inside=full)

    @classmethod
    def full(cls) -> "RegionTree":
        return cls(full=True)

    @classmethod
    def empty(cls) -> "RegionTree":
        return cls(full=False)

    @classmethod
    def from_boundaries(cls, arcs: Iterable[GreatArc], full: bool = False) -> "RegionTree":
        """Build a tree by inserting ``arcs`` into a full or empty tree.

        Args:
            arcs: Boundary arcs with the region on their minus side.
            full: Whether the starting tree is full rather than empty.
                This only matters when ``arcs`` is empty.

        Returns:
            RegionTree: The new tree.
        """
        tree = cls(full=full)
        for arc in arcs:
            tree.insert(arc)
        return tree

    def insert(self, arc: GreatArc) -> None:
        """Insert a boundary arc, cutting the leaves it passes through."""
        self._insert(self.root, arc)
        if debug_enabled():
            logger.debug("Inserted boundary %r; tree now has %d nodes", arc, self.count())

    def _insert(self, node: RegionNode, arc: GreatArc) -> None:
        if node.is_leaf():
            node.cut = arc.circle
            node.minus = RegionNode(inside=True)
            node.plus = RegionNode(inside=False)
            return
        split = arc.split(node.cut)
        # Arcs lying on an existing cut add nothing
        if split.minus is not None:
            self._insert(node.minus, split.minus)
        if split.plus is not None:
            self._insert(node.plus, split.plus)

    def count(self) -> int:
        """Return the number of nodes in the tree."""
        return self.root.count()

    def is_full(self) -> bool:
        return self.root.is_leaf() and self.root.inside

    def is_empty(self) -> bool:
        return self.root.is_leaf() and not self.root.inside

    def classify(self, point: PointLike) -> RegionLocation:
        return _classify(self.root, point)

    def contains(self, point: PointLike) -> bool:
        return self.classify(point) != RegionLocation.OUTSIDE

    def to_convex(self) -> List[ConvexArea]:
        """Decompose the inside of the tree into convex areas.

        Each inside leaf yields the convex cell obtained by splitting the
        full sphere along the cuts on the path from the root.
        """
        result: List[ConvexArea] = []
        _to_convex(self.root, ConvexArea.full(), result)
        return result

    def size(self) -> float:
        return math.fsum(area.size() for area in self.to_convex())

    def weighted_centroid_vector(self) -> Optional[Vec3]:
        """Sum of the weighted centroid vectors of the convex pieces.

        ``None`` when the tree is empty or full, which have no centroid.
        """
        pieces = self.to_convex()
        if not pieces or any(piece.is_full() for piece in pieces):
            return None
        return vec_sum(piece.weighted_centroid_vector() for piece in pieces)

    def centroid(self) -> Optional[Point2S]:
        vec = self.weighted_centroid_vector()
        if vec is None or norm(vec) == 0.0:
            return None
        return Point2S.from_vector(vec)

    def __repr__(self) -> str:
        if self.is_full():
            return "RegionTree(full)"
        if self.is_empty():
            return "RegionTree(empty)"
        return f"RegionTree(nodes={self.count()}, size={self.size()})"


def _classify(node: RegionNode, point: PointLike) -> RegionLocation:
    if node.is_leaf():
        return RegionLocation.INSIDE if node.inside else RegionLocation.OUTSIDE
    loc = node.cut.classify(point)
    if loc == HyperplaneLocation.MINUS:
        return _classify(node.minus, point)
    if loc == HyperplaneLocation.PLUS:
        return _classify(node.plus, point)
    minus_loc = _classify(node.minus, point)
    plus_loc = _classify(node.plus, point)
    return minus_loc if minus_loc == plus_loc else RegionLocation.BOUNDARY


def _to_convex(node: RegionNode, area: Optional[ConvexArea], result: List[ConvexArea]) -> None:
    if area is None:
        return
    if node.is_leaf():
        if node.inside:
            result.append(area)
        return
    split = area.split(node.cut)
    _to_convex(node.minus, split.minus, result)
    _to_convex(node.plus, split.plus, result)


__all__ = ["RegionNode", "RegionTree"]
