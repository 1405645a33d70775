"""
Value types shared by the orbit core.

- :class:`OrbitalElements`: immutable classical element set in rendering units.
- :class:`CartesianState`: position/velocity pair in the render frame.
- :class:`EphemerisSample`: one timestamped ECI state (km, km/s), optionally
  carrying a covariance upper triangle.

All three are frozen; an edited element set is a new value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitmapper.config import get_dtype

COVARIANCE_UPPER_SIZE = 21


@dataclass(frozen=True)
class OrbitalElements:
    """Classical (Keplerian) orbital elements.

    Units are chosen for visualization: the semi-major axis is measured in
    reference-body radii and angles are degrees, conventionally in
    ``[0, 360)``.

    Attributes:
        semi_major_axis: Semi-major axis [body radii].
        eccentricity: Eccentricity in ``[0, 1)`` [dimensionless].
        inclination_deg: Inclination [deg].
        raan_deg: Right ascension of the ascending node [deg].
        arg_periapsis_deg: Argument of periapsis [deg].
        mean_anomaly_deg: Mean anomaly at epoch [deg].
    """

    semi_major_axis: float = 1.0
    eccentricity: float = 0.0
    inclination_deg: float = 0.0
    raan_deg: float = 0.0
    arg_periapsis_deg: float = 0.0
    mean_anomaly_deg: float = 0.0


class CartesianState(NamedTuple):
    """Position and velocity in the render frame.

    Lengths are in reference-body radii and time in seconds.  Being a
    :class:`~typing.NamedTuple`, the state is a JAX pytree.

    Attributes:
        position: Position ``[x, y, z]``, shape ``(3,)``.
        velocity: Velocity ``[vx, vy, vz]``, shape ``(3,)``.
    """

    position: Array
    velocity: Array

    @classmethod
    def zero(cls) -> CartesianState:
        """Return the degenerate all-zero state used to signal failure."""
        return cls(jnp.zeros(3, dtype=get_dtype()), jnp.zeros(3, dtype=get_dtype()))

    def is_zero(self) -> bool:
        """Return True if both position and velocity are exactly zero."""
        return bool(jnp.all(self.position == 0.0) and jnp.all(self.velocity == 0.0))


def _vector3(value: ArrayLike, name: str) -> tuple[float, float, float]:
    values = tuple(float(x) for x in jnp.ravel(jnp.asarray(value)))
    if len(values) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(values)}")
    return values  # type: ignore[return-value]


@dataclass(frozen=True)
class EphemerisSample:
    """One timestamped state sample in an ECI-like frame.

    A sample whose covariance block is present is treated as an epoch
    state estimate rather than a plain trajectory point.

    Attributes:
        t: Absolute time of the sample.  ``None`` (or the Unix epoch) marks
            an unset timestamp; such samples are dropped by the ephemeris
            propagator.
        position_km: Position ``(x, y, z)`` [km].
        velocity_kms: Velocity ``(vx, vy, vz)`` [km/s].
        covariance_upper: Optional 21-value upper triangle of the 6x6
            state covariance, row-major: ``(0,0) (0,1) ... (0,5) (1,1) ... (5,5)``.
    """

    t: datetime | None
    position_km: tuple[float, float, float]
    velocity_kms: tuple[float, float, float]
    covariance_upper: tuple[float, ...] | None = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "position_km", _vector3(self.position_km, "position_km"))
        object.__setattr__(self, "velocity_kms", _vector3(self.velocity_kms, "velocity_kms"))
        if self.covariance_upper is not None:
            cov = tuple(float(x) for x in self.covariance_upper)
            if len(cov) != COVARIANCE_UPPER_SIZE:
                raise ValueError(
                    f"covariance_upper must have {COVARIANCE_UPPER_SIZE} values, got {len(cov)}"
                )
            object.__setattr__(self, "covariance_upper", cov)

    @property
    def has_covariance(self) -> bool:
        """True if this sample carries a covariance block."""
        return self.covariance_upper is not None
