"""
Unordered boundary collections.

A :class:`BoundaryList` holds region boundary arcs with no connectivity
requirement.  It is the interchange format between convex areas and
region trees: the full sphere maps to an empty list, and converting a
list to a tree starts from an empty tree so an empty list describes no
region at all.
"""

from __future__ import annotations

import math
from typing import Iterable, List

from .arcs import GreatArc
from .region_tree import RegionTree


class BoundaryList:
    """Ordered collection of boundary arcs."""

    def __init__(self, boundaries: Iterable[GreatArc] = ()) -> None:
        self._boundaries = tuple(boundaries)

    @property
    def boundaries(self) -> List[GreatArc]:
        return list(self._boundaries)

    def count(self) -> int:
        return len(self._boundaries)

    def __len__(self) -> int:
        return len(self._boundaries)

    def __iter__(self):
        return iter(self._boundaries)

    def size(self) -> float:
        """Total length of the boundary arcs."""
        return math.fsum(arc.size for arc in self._boundaries)

    def to_tree(self) -> RegionTree:
        return RegionTree.from_boundaries(self._boundaries)

    def __repr__(self) -> str:
        return f"BoundaryList(count={self.count()})"


__all__ = ["BoundaryList"]
