"""
Tolerance context for floating point comparisons.

All geometric predicates in this package take their epsilon from a
:class:`Precision` instance rather than hardcoding one.  Two values are
considered equal when their absolute difference does not exceed the
configured epsilon.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Precision:
    """Absolute‑epsilon comparison policy.

    Attributes:
        epsilon: Maximum absolute difference at which two floats are
            still considered equal.  Must be positive and finite.
    """

    epsilon: float

    def __post_init__(self) -> None:
        if not (self.epsilon > 0.0) or not math.isfinite(self.epsilon):
            raise ValueError(f"epsilon must be positive and finite, got {self.epsilon!r}")

    def eq(self, a: float, b: float) -> bool:
        # Exact equality covers matching infinities
        return a == b or abs(a - b) <= self.epsilon

    def eq_zero(self, a: float) -> bool:
        return abs(a) <= self.epsilon

    def compare(self, a: float, b: float) -> int:
        """Return -1, 0 or 1 as ``a`` is less than, equal to or greater than ``b``."""
        if self.eq(a, b):
            return 0
        return -1 if a < b else 1

    def sign(self, a: float) -> int:
        return self.compare(a, 0.0)

    def lt(self, a: float, b: float) -> bool:
        return self.compare(a, b) < 0

    def lte(self, a: float, b: float) -> bool:
        return self.compare(a, b) <= 0

    def gt(self, a: float, b: float) -> bool:
        return self.compare(a, b) > 0

    def gte(self, a: float, b: float) -> bool:
        return self.compare(a, b) >= 0


__all__ = ["Precision"]
