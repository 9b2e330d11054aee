"""
Runtime configuration for the spherical region library.

Settings are modelled with pydantic so that values pulled from the
environment are validated in one place.  Two knobs exist:

- ``SPHERE_EPSILON``: absolute tolerance used by the default
  :class:`~regions.geometry.precision.Precision`.  Must be positive.
- ``SPHERE_DEBUG``: when truthy, geometry services emit verbose debug
  log messages describing constructions, splits and tree insertions.

The library never configures logging handlers itself; applications
decide where the messages go.
"""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_EPSILON = 1e-10

_TRUTHY = {"1", "true", "yes", "on"}


class GeometrySettings(BaseModel):
    """Validated library settings."""

    epsilon: float = Field(
        default=DEFAULT_EPSILON,
        gt=0.0,
        description="Absolute tolerance for floating point comparisons",
    )
    debug: bool = Field(
        default=False,
        description="Emit verbose debug logging from geometry services",
    )

    @classmethod
    def from_env(cls) -> "GeometrySettings":
        """Build settings from ``SPHERE_EPSILON`` and ``SPHERE_DEBUG``.

        Unset variables fall back to the field defaults.  Malformed values
        raise :class:`pydantic.ValidationError`.
        """
        values = {}
        raw_eps = os.getenv("SPHERE_EPSILON")
        if raw_eps is not None and raw_eps.strip():
            values["epsilon"] = raw_eps.strip()
        values["debug"] = debug_enabled()
        return cls(**values)


def debug_enabled() -> bool:
    """Return ``True`` when ``SPHERE_DEBUG`` is set to a truthy value.

    The environment is consulted on every call so tests can toggle the
    flag with ``monkeypatch``.
    """
    raw = os.getenv("SPHERE_DEBUG")
    if not raw:
        return False
    return raw.strip().lower() in _TRUTHY


def default_precision(settings: Optional[GeometrySettings] = None):
    """Return a :class:`Precision` built from ``settings`` or the environment."""
    # Local import to avoid cycles with the geometry package
    from .geometry.precision import Precision

    settings = settings or GeometrySettings.from_env()
    return Precision(settings.epsilon)


__all__ = ["DEFAULT_EPSILON", "GeometrySettings", "debug_enabled", "default_precision"]
