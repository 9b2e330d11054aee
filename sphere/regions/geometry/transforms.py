"""
Rigid transforms of the unit sphere.

:class:`Transform2S` wraps an orthogonal 3×3 ``numpy`` matrix acting on
the unit vectors of points.  Rotations (determinant +1) preserve the
orientation of great circles; reflections (determinant −1) reverse it,
which convex areas compensate for by reversing their boundaries.

Composition follows the "this then that" convention: ``t.rotate(...)``
returns a transform applying ``t`` first and the rotation second.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .circles import PointLike, as_vector
from .errors import DegenerateGeometryError
from .points import Point2S
from .vectors import Vec3, normalize


class Transform2S:
    """Orthogonal linear transform applied to points on the sphere."""

    def __init__(self, matrix: np.ndarray) -> None:
        m = np.array(matrix, dtype=float)
        if m.shape != (3, 3) or not np.all(np.isfinite(m)):
            raise DegenerateGeometryError(f"transform matrix must be a finite 3x3 array, got {m!r}")
        self._matrix = m
        self._matrix.setflags(write=False)

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    @classmethod
    def identity(cls) -> "Transform2S":
        return cls(np.eye(3))

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[float]]) -> "Transform2S":
        """Create a transform from a 3×3 matrix.

        Raises:
            DegenerateGeometryError: If the matrix is not orthogonal, since
                only rotations and reflections map great circles onto
                great circles.
        """
        m = np.array(matrix, dtype=float)
        if m.shape != (3, 3) or not np.allclose(m @ m.T, np.eye(3), atol=1e-9):
            raise DegenerateGeometryError("transform matrix must be orthogonal")
        return cls(m)

    @classmethod
    def create_rotation(cls, axis: PointLike, angle: float) -> "Transform2S":
        """Right‑handed rotation by ``angle`` radians about ``axis``.

        Args:
            axis: Rotation axis as a point or a non‑zero vector.
            angle: Rotation angle in radians.

        Returns:
            Transform2S: The rotation.
        """
        k = np.array(normalize(as_vector(axis)))
        kx = np.array(
            [
                [0.0, -k[2], k[1]],
                [k[2], 0.0, -k[0]],
                [-k[1], k[0], 0.0],
            ]
        )
        # Rodrigues' rotation formula
        rot = np.eye(3) + math.sin(angle) * kx + (1.0 - math.cos(angle)) * (kx @ kx)
        return cls(rot)

    @classmethod
    def create_reflection(cls, normal: PointLike) -> "Transform2S":
        """Reflection across the plane with the given normal.

        Points map to ``x - 2 (x · n) n``.
        """
        n = np.array(normalize(as_vector(normal)))
        return cls(np.eye(3) - 2.0 * np.outer(n, n))

    def multiply(self, other: "Transform2S") -> "Transform2S":
        """Return ``self ∘ other``: apply ``other`` first, then ``self``."""
        return Transform2S(self._matrix @ other._matrix)

    def premultiply(self, other: "Transform2S") -> "Transform2S":
        """Return ``other ∘ self``: apply ``self`` first, then ``other``."""
        return Transform2S(other._matrix @ self._matrix)

    def rotate(self, axis: PointLike, angle: float) -> "Transform2S":
        return self.premultiply(Transform2S.create_rotation(axis, angle))

    def reflect(self, normal: PointLike) -> "Transform2S":
        return self.premultiply(Transform2S.create_reflection(normal))

    def inverse(self) -> "Transform2S":
        # Orthogonal matrices invert by transposition
        return Transform2S(self._matrix.T)

    def determinant(self) -> float:
        return float(np.linalg.det(self._matrix))

    def preserves_orientation(self) -> bool:
        return self.determinant() > 0.0

    def apply_vector(self, vector: Sequence[float]) -> Vec3:
        out = self._matrix @ np.asarray(vector, dtype=float)
        return (float(out[0]), float(out[1]), float(out[2]))

    def apply(self, point: Point2S) -> Point2S:
        return Point2S.from_vector(self.apply_vector(point.vector))

    def __call__(self, point: Point2S) -> Point2S:
        return self.apply(point)

    def __repr__(self) -> str:
        return f"Transform2S({self._matrix.tolist()!r})"


__all__ = ["Transform2S"]
