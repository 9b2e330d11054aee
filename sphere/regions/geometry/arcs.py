"""
Great arcs: convex pieces of great circles.

A :class:`GreatArc` couples a :class:`~.circles.GreatCircle` with an
azimuth interval ``[start, end]`` on it.  The interval is stored with
``start`` in ``[0, 2π)`` and ``end = start + length``, so ``end`` may
exceed ``2π`` when the arc wraps past azimuth zero.  Non‑full arcs are
convex: their length is positive and at most ``π``.  A missing interval
denotes the full circle.

Splitting an arc by another circle is the primitive every region
operation is built on.  The splitter meets the arc's circle at a pair of
antipodal points, cutting the circle into a half lying on the splitter's
minus side and a half on its plus side; an arc is cut only if one of
these points lies strictly inside it under the splitter's tolerance.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

from .circles import GreatCircle, PointLike
from .errors import DegenerateGeometryError
from .locations import Split
from .points import TWO_PI, Point2S, normalize_azimuth
from .precision import Precision

# Relative cut positions that can fall inside an arc of length <= π
_RELATIVE_CUTS = (math.pi, TWO_PI, 3.0 * math.pi)


@dataclass(frozen=True)
class GreatArc:
    """Convex arc on a great circle.

    Attributes:
        circle: The circle the arc lies on.
        start: Start azimuth in ``[0, 2π)``, or ``None`` for a full circle.
        end: End azimuth (``start + length``), or ``None`` for a full circle.
    """

    circle: GreatCircle
    start: Optional[float] = None
    end: Optional[float] = None

    @classmethod
    def full(cls, circle: GreatCircle) -> "GreatArc":
        return cls(circle, None, None)

    @classmethod
    def from_interval(cls, circle: GreatCircle, start: float, end: float) -> "GreatArc":
        """Create an arc from an azimuth interval on ``circle``.

        Args:
            circle: The owning circle.
            start: Start azimuth; any finite value, wrapped into ``[0, 2π)``.
            end: End azimuth, greater than ``start``.

        Returns:
            GreatArc: The arc.

        Raises:
            DegenerateGeometryError: If the interval is empty, longer
                than a half circle or wraps the whole circle.
        """
        if not (math.isfinite(start) and math.isfinite(end)):
            raise DegenerateGeometryError(f"arc interval must be finite, got [{start}, {end}]")
        precision = circle.precision
        length = end - start
        if length <= 0.0 or precision.eq_zero(length) or precision.eq(length, TWO_PI):
            raise DegenerateGeometryError(f"arc interval [{start}, {end}] has zero length")
        if precision.gt(length, math.pi):
            raise DegenerateGeometryError(
                f"arc interval [{start}, {end}] is longer than a half circle"
            )
        s = normalize_azimuth(start)
        return cls(circle, s, s + length)

    def is_full(self) -> bool:
        return self.start is None

    @property
    def precision(self) -> Precision:
        return self.circle.precision

    @property
    def size(self) -> float:
        """Arc length in radians; ``2π`` for a full circle."""
        if self.start is None:
            return TWO_PI
        return self.end - self.start

    @property
    def start_point(self) -> Optional[Point2S]:
        if self.start is None:
            return None
        return self.circle.to_space(self.start)

    @property
    def end_point(self) -> Optional[Point2S]:
        if self.end is None:
            return None
        return self.circle.to_space(self.end)

    @property
    def centroid(self) -> Optional[Point2S]:
        """Midpoint of the arc, or ``None`` for a full circle."""
        if self.start is None:
            return None
        return self.circle.to_space(self.start + 0.5 * self.size)

    @property
    def vertices(self) -> List[Point2S]:
        if self.start is None:
            return []
        return [self.start_point, self.end_point]

    def contains(self, point: PointLike) -> bool:
        """Return ``True`` if ``point`` lies on the arc, endpoints included."""
        if not self.circle.contains(point):
            return False
        if self.start is None:
            return True
        precision = self.precision
        rel = (self.circle.azimuth(point) - self.start) % TWO_PI
        return precision.lte(rel, self.size) or precision.eq(rel, TWO_PI)

    def reverse(self) -> "GreatArc":
        """Return the arc traversed in the opposite direction."""
        rev_circle = self.circle.reverse()
        if self.start is None:
            return GreatArc.full(rev_circle)
        rev_start = normalize_azimuth(-self.end)
        return GreatArc(rev_circle, rev_start, rev_start + self.size)

    def transform(self, transform) -> "GreatArc":
        # Circle transforms preserve azimuths, so the interval carries over
        return GreatArc(self.circle.transform(transform), self.start, self.end)

    def eq(self, other: "GreatArc") -> bool:
        if not self.circle.eq(other.circle):
            return False
        if self.is_full() or other.is_full():
            return self.is_full() and other.is_full()
        precision = self.precision
        return self.start_point.eq(other.start_point, precision) and self.end_point.eq(
            other.end_point, precision
        )

    def split(self, splitter: GreatCircle) -> Split["GreatArc"]:
        """Split the arc by ``splitter``.

        Args:
            splitter: The cutting circle.  Its precision decides whether
                an intersection point lies strictly inside the arc.

        Returns:
            Split: The minus and plus pieces.  Both are ``None`` when the
            arc lies on the splitter.  An arc lying entirely on one side
            is returned unchanged as that side.
        """
        intersection = splitter.intersection(self.circle)
        if intersection is None:
            return Split(None, None)

        # Azimuths in (cut, cut + π) lie on the minus side of the splitter
        cut = self.circle.azimuth(intersection)
        if self.start is None:
            plus_start = normalize_azimuth(cut + math.pi)
            return Split(
                GreatArc(self.circle, cut, cut + math.pi),
                GreatArc(self.circle, plus_start, plus_start + math.pi),
            )

        precision = splitter.precision
        size = self.size
        rel_start = (self.start - cut) % TWO_PI
        if precision.eq(rel_start, TWO_PI):
            rel_start = 0.0
        rel_end = rel_start + size

        for rel_cut in _RELATIVE_CUTS:
            if precision.gt(rel_cut, rel_start) and precision.lt(rel_cut, rel_end):
                head_len = rel_cut - rel_start
                head = GreatArc(self.circle, self.start, self.start + head_len)
                tail_start = self.start + head_len
                tail_end = self.end
                if tail_start >= TWO_PI:
                    tail_start -= TWO_PI
                    tail_end -= TWO_PI
                tail = GreatArc(self.circle, tail_start, tail_end)
                if _on_minus_side(rel_start + 0.5 * head_len):
                    return Split(head, tail)
                return Split(tail, head)

        if _on_minus_side(rel_start + 0.5 * size):
            return Split(self, None)
        return Split(None, self)

    def __repr__(self) -> str:
        if self.start is None:
            return f"GreatArc(full, pole={self.circle.pole})"
        return f"GreatArc(start={self.start_point}, end={self.end_point})"


def _on_minus_side(relative_azimuth: float) -> bool:
    return (relative_azimuth % TWO_PI) < math.pi


def arc_from_points(a: PointLike, b: PointLike, precision: Precision) -> GreatArc:
    """Return the shortest arc from ``a`` to ``b``.

    Raises:
        DegenerateGeometryError: If the points are equal or antipodal.
    """
    circle = GreatCircle.from_points(a, b, precision)
    return circle.arc(a, b)


__all__ = ["GreatArc", "arc_from_points"]
