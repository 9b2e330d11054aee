"""
Points on the unit 2‑sphere.

A :class:`Point2S` stores its spherical coordinates (azimuth measured in
the x‑y plane from +x, polar angle measured from +z) together with the
equivalent unit vector.  Points are immutable and hashable so they can
be used as dictionary keys in connectivity maps.  Equality under a
tolerance is exposed through :meth:`Point2S.eq`; the dataclass ``==``
compares exact coordinates only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from .errors import DegenerateGeometryError
from .precision import Precision
from .vectors import Vec3, angle, is_finite, negate, normalize, scale, add

TWO_PI = 2.0 * math.pi


def normalize_azimuth(azimuth: float) -> float:
    """Wrap ``azimuth`` into ``[0, 2π)``."""
    if not math.isfinite(azimuth):
        raise DegenerateGeometryError(f"azimuth must be finite, got {azimuth!r}")
    az = math.fmod(azimuth, TWO_PI)
    if az < 0.0:
        az += TWO_PI
    # Adding 2π to a tiny negative value can round up to 2π itself
    if az >= TWO_PI:
        az = 0.0
    return az


@dataclass(frozen=True)
class Point2S:
    """Immutable point on the unit sphere.

    Attributes:
        azimuth: Angle in ``[0, 2π)`` measured in the x‑y plane from +x.
        polar: Angle in ``[0, π]`` measured from +z.
        vector: Unit vector corresponding to the coordinates.
    """

    azimuth: float
    polar: float
    vector: Vec3 = field(compare=False, repr=False)

    @classmethod
    def of(cls, azimuth: float, polar: float) -> "Point2S":
        """Create a point from spherical coordinates.

        Args:
            azimuth: Azimuth angle in radians; wrapped into ``[0, 2π)``.
            polar: Polar angle in radians; must lie in ``[0, π]``.

        Returns:
            Point2S: The new point.

        Raises:
            DegenerateGeometryError: If either angle is not finite or the
                polar angle is out of range.
        """
        az = normalize_azimuth(azimuth)
        if not math.isfinite(polar) or polar < 0.0 or polar > math.pi:
            raise DegenerateGeometryError(f"polar angle must lie in [0, pi], got {polar!r}")
        sin_p = math.sin(polar)
        vec = (math.cos(az) * sin_p, math.sin(az) * sin_p, math.cos(polar))
        return cls(az, float(polar), vec)

    @classmethod
    def from_vector(cls, vector: Sequence[float]) -> "Point2S":
        """Create a point from any non‑zero 3D vector.

        Raises:
            DegenerateGeometryError: If the vector is zero or not finite.
        """
        unit = normalize(vector)
        x, y, z = unit
        az = normalize_azimuth(math.atan2(y, x))
        polar = math.atan2(math.hypot(x, y), z)
        return cls(az, polar, unit)

    def is_finite(self) -> bool:
        return math.isfinite(self.azimuth) and math.isfinite(self.polar) and is_finite(self.vector)

    def distance(self, other: "Point2S") -> float:
        """Return the great‑circle distance to ``other`` in radians."""
        return angle(self.vector, other.vector)

    def antipodal(self) -> "Point2S":
        return Point2S.from_vector(negate(self.vector))

    def slerp(self, other: "Point2S", t: float) -> "Point2S":
        """Spherically interpolate towards ``other``.

        ``t = 0`` yields this point and ``t = 1`` yields ``other``; values
        outside ``[0, 1]`` extrapolate along the same great circle.

        Raises:
            DegenerateGeometryError: If the points are antipodal, in which
                case the interpolating great circle is undefined.
        """
        theta = self.distance(other)
        if theta == 0.0:
            return self
        sin_theta = math.sin(theta)
        if sin_theta == 0.0:
            raise DegenerateGeometryError("cannot interpolate between antipodal points")
        a = math.sin((1.0 - t) * theta) / sin_theta
        b = math.sin(t * theta) / sin_theta
        return Point2S.from_vector(add(scale(self.vector, a), scale(other.vector, b)))

    def eq(self, other: "Point2S", precision: Precision) -> bool:
        """Return ``True`` if the points coincide within ``precision``."""
        return precision.eq_zero(self.distance(other))

    def polar_azimuth_key(self) -> Tuple[float, float]:
        """Sort key ordering points by polar angle, then azimuth."""
        return (self.polar, self.azimuth)


_HALF_PI = 0.5 * math.pi

PLUS_I = Point2S(0.0, _HALF_PI, (1.0, 0.0, 0.0))
MINUS_I = Point2S(math.pi, _HALF_PI, (-1.0, 0.0, 0.0))
PLUS_J = Point2S(_HALF_PI, _HALF_PI, (0.0, 1.0, 0.0))
MINUS_J = Point2S(1.5 * math.pi, _HALF_PI, (0.0, -1.0, 0.0))
PLUS_K = Point2S(0.0, 0.0, (0.0, 0.0, 1.0))
MINUS_K = Point2S(0.0, math.pi, (0.0, 0.0, -1.0))


__all__ = [
    "TWO_PI",
    "normalize_azimuth",
    "Point2S",
    "PLUS_I",
    "MINUS_I",
    "PLUS_J",
    "MINUS_J",
    "PLUS_K",
    "MINUS_K",
]
