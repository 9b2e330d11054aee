"""
Pure‑Python 3D vector helpers.

Vectors are plain ``(x, y, z)`` tuples so that every geometry type in
the package can share them without conversion.  The helpers mirror the
small ``dot``/``sub``/``add``/``scale`` toolkit used by planar slicing
code, extended with the operations spherical geometry needs: cross
products, normalisation, angles and an orthogonal vector picker.

Dot and cross products are evaluated with an accurate linear
combination: each product is split into a rounded value and its exact
rounding error (Dekker's two‑product) and the terms are summed with
:func:`math.fsum`.  Cross products of nearly parallel unit vectors
therefore keep full relative precision, which the centroid and split
computations rely on when regions shrink towards a single point.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

from .errors import DegenerateGeometryError

Vec3 = Tuple[float, float, float]

ZERO: Vec3 = (0.0, 0.0, 0.0)

# 2**27 + 1, splits a double into two non‑overlapping 26 bit halves
_SPLITTER = 134217729.0


def _split(a: float) -> Tuple[float, float]:
    c = _SPLITTER * a
    hi = c - (c - a)
    return hi, a - hi


def two_product(a: float, b: float) -> Tuple[float, float]:
    """Return ``(p, e)`` with ``p = fl(a * b)`` and ``p + e == a * b`` exactly.

    Args:
        a: First factor.
        b: Second factor.

    Returns:
        The rounded product and its rounding error.
    """
    p = a * b
    if not math.isfinite(p):
        return p, 0.0
    a_hi, a_lo = _split(a)
    b_hi, b_lo = _split(b)
    err = ((a_hi * b_hi - p) + a_hi * b_lo + a_lo * b_hi) + a_lo * b_lo
    return p, err


def linear_combination(pairs: Iterable[Tuple[float, float]]) -> float:
    """Compute ``sum(a * b for a, b in pairs)`` with compensated accuracy.

    Args:
        pairs: Iterable of ``(a, b)`` factor pairs.

    Returns:
        The sum of products, correct to nearly full double precision even
        when the individual terms cancel.
    """
    terms = []
    for a, b in pairs:
        p, e = two_product(a, b)
        terms.append(p)
        terms.append(e)
    return math.fsum(terms)


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Return the dot product of two 3D vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The scalar dot product ``a · b``.
    """
    return linear_combination(((a[0], b[0]), (a[1], b[1]), (a[2], b[2])))


def cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Return the cross product ``a × b``."""
    return (
        linear_combination(((a[1], b[2]), (-a[2], b[1]))),
        linear_combination(((a[2], b[0]), (-a[0], b[2]))),
        linear_combination(((a[0], b[1]), (-a[1], b[0]))),
    )


def add(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Return the vector sum ``a + b``."""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Return the vector difference ``a - b``."""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(a: Sequence[float], s: float) -> Vec3:
    """Scale vector ``a`` by scalar ``s``."""
    return (a[0] * s, a[1] * s, a[2] * s)


def negate(a: Sequence[float]) -> Vec3:
    return (-a[0], -a[1], -a[2])


def norm(a: Sequence[float]) -> float:
    """Return the Euclidean length of ``a``."""
    return math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def is_finite(a: Sequence[float]) -> bool:
    return math.isfinite(a[0]) and math.isfinite(a[1]) and math.isfinite(a[2])


def normalize(a: Sequence[float]) -> Vec3:
    """Return the unit vector pointing in the direction of ``a``.

    Raises:
        DegenerateGeometryError: If ``a`` is zero or not finite.
    """
    n = norm(a)
    if n == 0.0 or not math.isfinite(n):
        raise DegenerateGeometryError(f"cannot normalize vector {tuple(a)!r}")
    return (a[0] / n, a[1] / n, a[2] / n)


def with_norm(a: Sequence[float], length: float) -> Vec3:
    """Return ``a`` rescaled to the given length."""
    return scale(normalize(a), length)


def angle(a: Sequence[float], b: Sequence[float]) -> float:
    """Return the angle between ``a`` and ``b`` in ``[0, π]``.

    Uses ``atan2(|a × b|, a · b)`` which stays accurate for both nearly
    parallel and nearly antiparallel vectors.
    """
    return math.atan2(norm(cross(a, b)), dot(a, b))


def orthogonal(a: Sequence[float]) -> Vec3:
    """Return a unit vector orthogonal to ``a``.

    The component with the smallest magnitude relative to the norm is
    zeroed so that the remaining two stay well conditioned.

    Raises:
        DegenerateGeometryError: If ``a`` is zero or not finite.
    """
    n = norm(a)
    if n == 0.0 or not math.isfinite(n):
        raise DegenerateGeometryError(f"no orthogonal vector for {tuple(a)!r}")
    x, y, z = a
    threshold = 0.6 * n
    if abs(x) <= threshold:
        inv = 1.0 / math.sqrt(y * y + z * z)
        return (0.0, inv * z, -inv * y)
    if abs(y) <= threshold:
        inv = 1.0 / math.sqrt(x * x + z * z)
        return (-inv * z, 0.0, inv * x)
    inv = 1.0 / math.sqrt(x * x + y * y)
    return (inv * y, -inv * x, 0.0)


def vec_sum(vectors: Iterable[Sequence[float]]) -> Vec3:
    """Sum an iterable of vectors component‑wise using :func:`math.fsum`."""
    xs, ys, zs = [], [], []
    for v in vectors:
        xs.append(v[0])
        ys.append(v[1])
        zs.append(v[2])
    return (math.fsum(xs), math.fsum(ys), math.fsum(zs))


__all__ = [
    "Vec3",
    "ZERO",
    "two_product",
    "linear_combination",
    "dot",
    "cross",
    "add",
    "sub",
    "scale",
    "negate",
    "norm",
    "is_finite",
    "normalize",
    "with_norm",
    "angle",
    "orthogonal",
    "vec_sum",
]
