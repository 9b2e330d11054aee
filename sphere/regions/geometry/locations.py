"""
Location enums and the generic split result.

These small types describe where something lies relative to a great
circle (:class:`HyperplaneLocation`), relative to a region
(:class:`RegionLocation`) and on which side(s) the result of a split
operation ended up (:class:`SplitLocation`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class HyperplaneLocation(Enum):
    """Position of a point relative to an oriented great circle."""

    MINUS = "minus"
    ON = "on"
    PLUS = "plus"


class RegionLocation(Enum):
    """Position of a point relative to a region."""

    INSIDE = "inside"
    BOUNDARY = "boundary"
    OUTSIDE = "outside"


class SplitLocation(Enum):
    MINUS = "minus"
    PLUS = "plus"
    BOTH = "both"
    NEITHER = "neither"


@dataclass(frozen=True)
class Split(Generic[T]):
    """Result of splitting an object by a great circle.

    Attributes:
        minus: Part lying on the minus (pole) side, or ``None``.
        plus: Part lying on the plus side, or ``None``.
    """

    minus: Optional[T] = None
    plus: Optional[T] = None

    @property
    def location(self) -> SplitLocation:
        if self.minus is not None:
            return SplitLocation.BOTH if self.plus is not None else SplitLocation.MINUS
        if self.plus is not None:
            return SplitLocation.PLUS
        return SplitLocation.NEITHER


__all__ = ["HyperplaneLocation", "RegionLocation", "SplitLocation", "Split"]
