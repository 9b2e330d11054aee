"""
Connected sequences of great arcs.

A :class:`BoundaryPath` is an ordered tuple of arcs in which every arc
ends where the next one starts (under the arcs' tolerance).  Paths are
produced in three ways:

1. explicitly from arcs (:meth:`BoundaryPath.from_arcs`), which checks
   the connectivity,
2. from a vertex sequence, optionally closed back to the first vertex,
   via :class:`PathBuilder` or the ``from_vertices`` helpers, and
3. by :func:`connect_arcs`, which stitches an unordered collection of
   region boundary arcs into paths.  This is how a convex area recovers
   its counter‑clockwise vertex loop from the boundaries produced by
   splitting.

The connector mirrors segment‑stitching in planar slicing: arcs are
indexed by start point, the search always begins at the lowest start
point (smallest polar angle, then azimuth) and, when more than one arc
continues from the same point, the one forming the smallest interior
angle wins so that loops stay tight.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Union

from ..config import debug_enabled, default_precision
from .arcs import GreatArc, arc_from_points
from .errors import DegenerateGeometryError, InvalidBoundaryError
from .points import Point2S
from .precision import Precision

logger = logging.getLogger(__name__)


class BoundaryPath:
    """Immutable connected sequence of arcs."""

    def __init__(self, arcs: Sequence[GreatArc] = ()) -> None:
        self._arcs = tuple(arcs)

    @classmethod
    def empty(cls) -> "BoundaryPath":
        return cls(())

    @classmethod
    def from_arcs(cls, *arcs: Union[GreatArc, Iterable[GreatArc]]) -> "BoundaryPath":
        """Create a path from arcs that must already connect end to start.

        Accepts the arcs as positional arguments or as one iterable.

        Raises:
            InvalidBoundaryError: If consecutive arcs do not connect or a
                full circle is combined with other arcs.
        """
        if len(arcs) == 1 and not isinstance(arcs[0], GreatArc):
            arcs = tuple(arcs[0])
        items: List[GreatArc] = list(arcs)
        for arc in items:
            if arc.is_full() and len(items) > 1:
                raise InvalidBoundaryError("a full circle cannot be part of a multi-arc path")
        for prev, cur in zip(items, items[1:]):
            if not prev.end_point.eq(cur.start_point, prev.precision):
                raise InvalidBoundaryError(
                    f"path arcs do not connect: {prev.end_point} does not match {cur.start_point}"
                )
        return cls(items)

    @classmethod
    def from_vertices(
        cls,
        vertices: Iterable[Point2S],
        close: bool = False,
        precision: Optional[Precision] = None,
    ) -> "BoundaryPath":
        """Create a path through ``vertices``, optionally closing it.

        Consecutive duplicate vertices are skipped.

        Raises:
            InvalidBoundaryError: If only one distinct vertex is given or
                two consecutive vertices are antipodal.
        """
        builder = PathBuilder(precision)
        builder.append_all(vertices)
        if close:
            builder.close()
        return builder.build()

    @classmethod
    def from_vertex_loop(
        cls, vertices: Iterable[Point2S], precision: Optional[Precision] = None
    ) -> "BoundaryPath":
        return cls.from_vertices(vertices, close=True, precision=precision)

    @staticmethod
    def builder(precision: Optional[Precision] = None) -> "PathBuilder":
        return PathBuilder(precision)

    # ------------------------------------------------------------------

    @property
    def arcs(self) -> List[GreatArc]:
        return list(self._arcs)

    def __len__(self) -> int:
        return len(self._arcs)

    def __iter__(self):
        return iter(self._arcs)

    def is_empty(self) -> bool:
        return not self._arcs

    def is_closed(self) -> bool:
        """Return ``True`` if the path ends where it starts."""
        if not self._arcs:
            return False
        first = self._arcs[0]
        if first.is_full():
            return True
        return self.end_vertex.eq(self.start_vertex, first.precision)

    @property
    def start_arc(self) -> Optional[GreatArc]:
        return self._arcs[0] if self._arcs else None

    @property
    def end_arc(self) -> Optional[GreatArc]:
        return self._arcs[-1] if self._arcs else None

    @property
    def start_vertex(self) -> Optional[Point2S]:
        return self._arcs[0].start_point if self._arcs else None

    @property
    def end_vertex(self) -> Optional[Point2S]:
        return self._arcs[-1].end_point if self._arcs else None

    @property
    def vertices(self) -> List[Point2S]:
        """Start vertex followed by every arc's end vertex.

        Closed paths therefore repeat their first vertex at the end.  A
        path made of a single full circle has no vertices.
        """
        if not self._arcs or self._arcs[0].is_full():
            return []
        points = [self._arcs[0].start_point]
        points.extend(arc.end_point for arc in self._arcs)
        return points

    @property
    def size(self) -> float:
        return math.fsum(arc.size for arc in self._arcs)

    def reverse(self) -> "BoundaryPath":
        return BoundaryPath([arc.reverse() for arc in reversed(self._arcs)])

    def transform(self, transform) -> "BoundaryPath":
        return BoundaryPath([arc.transform(transform) for arc in self._arcs])

    def __repr__(self) -> str:
        return f"BoundaryPath(vertices={self.vertices})"


class PathBuilder:
    """Incremental builder for :class:`BoundaryPath` instances.

    Vertices and arcs may be appended to the end or prepended to the
    start.  Adding a vertex equal to the current end (or start) vertex is
    a no‑op.
    """

    def __init__(self, precision: Optional[Precision] = None) -> None:
        self.precision = precision or default_precision()
        self._arcs: List[GreatArc] = []
        self._start_vertex: Optional[Point2S] = None

    def _end(self) -> Optional[Point2S]:
        if self._arcs:
            return self._arcs[-1].end_point
        return self._start_vertex

    def _begin(self) -> Optional[Point2S]:
        if self._arcs:
            return self._arcs[0].start_point
        return self._start_vertex

    def _arc_between(self, a: Point2S, b: Point2S) -> GreatArc:
        try:
            return arc_from_points(a, b, self.precision)
        except DegenerateGeometryError as exc:
            raise InvalidBoundaryError(f"cannot connect vertices {a} and {b}") from exc

    def append(self, item: Union[Point2S, GreatArc]) -> "PathBuilder":
        """Append a vertex or an arc to the end of the path."""
        if isinstance(item, GreatArc):
            end = self._end()
            if item.is_full() and (self._arcs or end is not None):
                raise InvalidBoundaryError("a full circle cannot be appended to a path")
            if end is not None and not end.eq(item.start_point, self.precision):
                raise InvalidBoundaryError(
                    f"arc starting at {item.start_point} does not connect to path end {end}"
                )
            self._arcs.append(item)
            return self
        end = self._end()
        if end is None:
            self._start_vertex = item
        elif not end.eq(item, self.precision):
            self._arcs.append(self._arc_between(end, item))
        return self

    def append_all(self, items: Iterable[Union[Point2S, GreatArc]]) -> "PathBuilder":
        for item in items:
            self.append(item)
        return self

    def prepend(self, item: Union[Point2S, GreatArc]) -> "PathBuilder":
        """Prepend a vertex or an arc to the start of the path."""
        if isinstance(item, GreatArc):
            begin = self._begin()
            if item.is_full() and (self._arcs or begin is not None):
                raise InvalidBoundaryError("a full circle cannot be prepended to a path")
            if begin is not None and not item.end_point.eq(begin, self.precision):
                raise InvalidBoundaryError(
                    f"arc ending at {item.end_point} does not connect to path start {begin}"
                )
            self._arcs.insert(0, item)
            return self
        begin = self._begin()
        if begin is None:
            self._start_vertex = item
        elif not begin.eq(item, self.precision):
            self._arcs.insert(0, self._arc_between(item, begin))
        return self

    def close(self) -> "PathBuilder":
        """Connect the end of the path back to its start if needed."""
        begin = self._begin()
        end = self._end()
        if self._arcs and not end.eq(begin, self.precision):
            self.append(begin)
        return self

    def build(self) -> BoundaryPath:
        """Return the built path.

        Raises:
            InvalidBoundaryError: If a single vertex was added but no
                arc could be formed from it.
        """
        if not self._arcs and self._start_vertex is not None:
            raise InvalidBoundaryError(
                f"cannot build a path from a single unique vertex {self._start_vertex}"
            )
        return BoundaryPath(self._arcs)


def _interior_angle(incoming: GreatArc, outgoing: GreatArc) -> float:
    return math.pi - incoming.circle.angle(outgoing.circle, incoming.end_point)


def connect_arcs(arcs: Iterable[GreatArc]) -> List[BoundaryPath]:
    """Stitch unordered arcs into connected paths.

    Full circles become single‑arc paths.  The remaining arcs are sorted
    by start point; each path begins with the lowest unused start point
    and is extended by the unused arc starting at its end vertex that
    forms the smallest interior angle.  A path stops when it closes on
    itself or no arc continues it.

    Args:
        arcs: Arcs to connect, in any order.

    Returns:
        A list of paths.  Full‑circle paths come first.
    """
    items = list(arcs)
    paths: List[BoundaryPath] = [BoundaryPath([a]) for a in items if a.is_full()]
    pending = sorted(
        (a for a in items if not a.is_full()),
        key=lambda a: a.start_point.polar_azimuth_key(),
    )
    starts = [a.start_point for a in pending]
    used = [False] * len(pending)

    for idx, arc in enumerate(pending):
        if used[idx]:
            continue
        used[idx] = True
        chain = [arc]
        first_start = starts[idx]
        while True:
            current = chain[-1]
            end = current.end_point
            precision = current.precision
            best_idx = None
            best_angle = math.inf
            for cand_idx, cand in enumerate(pending):
                if used[cand_idx] or not starts[cand_idx].eq(end, precision):
                    continue
                cand_angle = _interior_angle(current, cand)
                if cand_angle < best_angle:
                    best_idx = cand_idx
                    best_angle = cand_angle
            if first_start.eq(end, precision):
                closing_angle = _interior_angle(current, chain[0])
                if best_idx is None or closing_angle <= best_angle:
                    break
            if best_idx is None:
                break
            used[best_idx] = True
            chain.append(pending[best_idx])
        paths.append(BoundaryPath(chain))

    if debug_enabled():
        logger.debug("Connected %d arcs into %d paths", len(items), len(paths))
    return paths


__all__ = ["BoundaryPath", "PathBuilder", "connect_arcs"]
