"""
Oriented great circles.

A :class:`GreatCircle` is the spherical analogue of a plane through the
origin.  It is stored as a unit ``pole`` (the plane normal) plus an
orthonormal basis ``(u, v)`` spanning the circle, with ``u × v = pole``.
The basis gives every point on the circle a one dimensional
coordinate, its *azimuth* ``atan2(x·v, x·u)`` in ``[0, 2π)``, so arcs can
be expressed as azimuth intervals.

Orientation matters.  The pole lies on the MINUS side of its circle and
the antipode of the pole on the PLUS side; convex areas are built as the
intersection of the minus sides of their bounding circles, so the
positive hemisphere is always "outside".  The signed :meth:`offset` of a
point is its angular distance from the circle, negative on the pole
side.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Union

from ..config import debug_enabled
from .errors import DegenerateGeometryError
from .locations import HyperplaneLocation
from .points import Point2S, normalize_azimuth
from .precision import Precision
from .vectors import Vec3, add, angle, cross, dot, negate, norm, normalize, orthogonal, scale, sub

if TYPE_CHECKING:
    from .arcs import GreatArc

logger = logging.getLogger(__name__)

PointLike = Union[Point2S, Sequence[float]]


def as_vector(point: PointLike) -> Vec3:
    """Return the vector behind a :class:`Point2S` or a raw 3‑tuple."""
    if isinstance(point, Point2S):
        return point.vector
    return (float(point[0]), float(point[1]), float(point[2]))


@dataclass(frozen=True)
class GreatCircle:
    """Oriented great circle on the unit sphere.

    Attributes:
        pole: Unit normal of the circle's plane; lies on the minus side.
        u: Unit vector on the circle at azimuth zero.
        v: Unit vector on the circle at azimuth ``π/2``.
        precision: Tolerance used by every predicate on this circle.
    """

    pole: Vec3
    u: Vec3
    v: Vec3
    precision: Precision

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_pole(cls, pole: PointLike, precision: Precision) -> "GreatCircle":
        """Create a circle from its pole, choosing an arbitrary ``u``.

        Raises:
            DegenerateGeometryError: If ``pole`` is a zero vector.
        """
        p = normalize(as_vector(pole))
        u = orthogonal(p)
        v = normalize(cross(p, u))
        return cls(p, u, v, precision)

    @classmethod
    def from_pole_and_u(cls, pole: PointLike, u: PointLike, precision: Precision) -> "GreatCircle":
        """Create a circle from its pole and a hint for the zero azimuth.

        ``u`` is projected onto the circle's plane before use.

        Raises:
            DegenerateGeometryError: If the pole is zero or ``u`` is
                parallel to it.
        """
        p = normalize(as_vector(pole))
        u_vec = as_vector(u)
        u_unit = normalize(sub(u_vec, scale(p, dot(u_vec, p))))
        v = normalize(cross(p, u_unit))
        return cls(p, u_unit, v, precision)

    @classmethod
    def from_points(cls, a: PointLike, b: PointLike, precision: Precision) -> "GreatCircle":
        """Create the circle passing through ``a`` and then ``b``.

        The circle is oriented so that travelling the short way from ``a``
        to ``b`` increases the azimuth; ``a`` sits at azimuth zero.

        Args:
            a: First point on the circle.
            b: Second point on the circle.
            precision: Tolerance for the new circle.

        Returns:
            GreatCircle: The circle through both points.

        Raises:
            DegenerateGeometryError: If the points are equal or antipodal
                under ``precision``; no unique circle exists then.
        """
        pa = a if isinstance(a, Point2S) else Point2S.from_vector(a)
        pb = b if isinstance(b, Point2S) else Point2S.from_vector(b)
        dist = pa.distance(pb)
        if precision.eq_zero(dist) or precision.eq(dist, math.pi):
            if debug_enabled():
                logger.debug("Rejecting circle through %s and %s (distance=%s)", pa, pb, dist)
            raise DegenerateGeometryError(
                f"cannot create a great circle from equal or antipodal points {pa} and {pb}"
            )
        return cls._from_u_and_second(pa.vector, pb.vector, precision)

    @classmethod
    def _from_u_and_second(cls, u: Vec3, second: Vec3, precision: Precision) -> "GreatCircle":
        u_unit = normalize(u)
        pole = normalize(cross(u_unit, second))
        v = normalize(cross(pole, u_unit))
        return cls(pole, u_unit, v, precision)

    # ------------------------------------------------------------------
    # Point relations
    # ------------------------------------------------------------------

    def offset(self, point: PointLike) -> float:
        """Return the signed angular distance of ``point`` from the circle.

        The value is negative on the pole (minus) side and positive on
        the opposite side; it lies in ``[-π/2, π/2]``.
        """
        x = as_vector(point)
        return -math.atan2(dot(self.pole, x), norm(cross(self.pole, x)))

    def classify(self, point: PointLike) -> HyperplaneLocation:
        """Classify ``point`` as MINUS, ON or PLUS under this circle's precision."""
        cmp = self.precision.sign(self.offset(point))
        if cmp < 0:
            return HyperplaneLocation.MINUS
        if cmp > 0:
            return HyperplaneLocation.PLUS
        return HyperplaneLocation.ON

    def contains(self, point: PointLike) -> bool:
        return self.classify(point) == HyperplaneLocation.ON

    def azimuth(self, point: PointLike) -> float:
        """Return the circle coordinate of ``point`` in ``[0, 2π)``.

        Points off the circle are implicitly projected onto it.
        """
        x = as_vector(point)
        return normalize_azimuth(math.atan2(dot(x, self.v), dot(x, self.u)))

    def vector_at(self, azimuth: float) -> Vec3:
        return normalize(add(scale(self.u, math.cos(azimuth)), scale(self.v, math.sin(azimuth))))

    def to_space(self, azimuth: float) -> Point2S:
        """Map a circle coordinate to the point on the sphere."""
        return Point2S.from_vector(self.vector_at(azimuth))

    def to_subspace(self, point: PointLike) -> float:
        return self.azimuth(point)

    def project(self, point: PointLike) -> Point2S:
        """Return the point on the circle closest to ``point``.

        The poles project onto an arbitrary point (azimuth zero).
        """
        return self.to_space(self.azimuth(point))

    def pole_point(self) -> Point2S:
        return Point2S.from_vector(self.pole)

    def minus_point(self) -> Point2S:
        """Point furthest into the minus side, i.e. the pole."""
        return self.pole_point()

    def plus_point(self) -> Point2S:
        """Point furthest into the plus side, i.e. the antipode of the pole."""
        return Point2S.from_vector(negate(self.pole))

    # ------------------------------------------------------------------
    # Circle relations
    # ------------------------------------------------------------------

    def reverse(self) -> "GreatCircle":
        """Return the same circle with the opposite orientation.

        The azimuth of every point is negated by the reversal.
        """
        return GreatCircle(negate(self.pole), self.u, negate(self.v), self.precision)

    def transform(self, transform) -> "GreatCircle":
        """Apply a rigid transform.

        The images of ``u`` and ``v`` define the new circle, so the
        azimuth of a point on this circle equals the azimuth of its image
        on the result, for rotations and reflections alike.
        """
        tu = transform.apply_vector(self.u)
        tv = transform.apply_vector(self.v)
        return GreatCircle._from_u_and_second(tu, tv, self.precision)

    def intersection(self, other: "GreatCircle") -> Optional[Point2S]:
        """Return the intersection ``self.pole × other.pole`` or ``None``.

        Two great circles meet at a pair of antipodal points; the one
        returned is where travelling along ``other`` in increasing
        azimuth crosses from the plus side to the minus side of this
        circle.  ``None`` is returned when the circles coincide.
        """
        c = cross(self.pole, other.pole)
        if self.precision.eq_zero(norm(c)):
            return None
        return Point2S.from_vector(c)

    def angle(self, other: "GreatCircle", intersection: Optional[PointLike] = None) -> float:
        """Return the angle between the poles of the two circles.

        Args:
            other: The other circle.
            intersection: Optional intersection point.  When given, the
                result is signed: negative if the cross product of the
                poles points away from this point.

        Returns:
            The angle in ``[0, π]`` or, when signed, ``[-π, π]``.
        """
        theta = angle(self.pole, other.pole)
        if intersection is not None:
            if dot(cross(self.pole, other.pole), as_vector(intersection)) < 0.0:
                return -theta
        return theta

    def similar_orientation(self, other: "GreatCircle") -> bool:
        return dot(self.pole, other.pole) > 0.0

    def is_same_circle(self, other: "GreatCircle") -> bool:
        """Return ``True`` if both describe the same point set, ignoring orientation."""
        theta = angle(self.pole, other.pole)
        return self.precision.eq_zero(theta) or self.precision.eq(theta, math.pi)

    def eq(self, other: "GreatCircle") -> bool:
        """Return ``True`` if both are the same oriented circle within tolerance."""
        return self.precision.eq_zero(angle(self.pole, other.pole))

    # ------------------------------------------------------------------
    # Arcs
    # ------------------------------------------------------------------

    def span(self) -> "GreatArc":
        """Return the arc covering the whole circle."""
        # Local import to avoid cycles
        from .arcs import GreatArc

        return GreatArc.full(self)

    def arc(self, start: PointLike, end: PointLike) -> "GreatArc":
        """Return the arc from ``start`` to ``end`` in increasing azimuth.

        Raises:
            DegenerateGeometryError: If the points coincide or the arc
                would be longer than a half circle.
        """
        from .arcs import GreatArc

        start_az = self.azimuth(start)
        end_az = self.azimuth(end)
        if end_az <= start_az:
            end_az += 2.0 * math.pi
        return GreatArc.from_interval(self, start_az, end_az)


__all__ = ["PointLike", "as_vector", "GreatCircle"]
