"""
Exception types raised by the spherical geometry services.

Every error derives from :class:`ValueError` so that callers treating
bad geometric input the same way as any other invalid argument keep
working.  Two failure families are distinguished:

- :class:`DegenerateGeometryError` signals that an intermediate
  computation has no well defined answer, e.g. normalising a zero
  vector or drawing a great circle through two antipodal points.
- :class:`InvalidBoundaryError` signals that a set of bounding circles,
  arcs or vertices cannot describe a convex region.  Construction
  helpers re‑raise degenerate failures as this type with the original
  exception chained.
"""

from __future__ import annotations


class GeometryError(ValueError):
    """Base class for all spherical geometry errors."""


class DegenerateGeometryError(GeometryError):
    """Raised when a computation degenerates under the active tolerance."""


class InvalidBoundaryError(GeometryError):
    """Raised when inputs cannot form a valid convex region boundary."""


__all__ = [
    "GeometryError",
    "DegenerateGeometryError",
    "InvalidBoundaryError",
]
