"""Module-wide numeric and reference-body configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
by every JAX computation in orbitmapper, and :class:`ReferenceBody`, the
frozen record of the central-body constants that propagators and state
conversions take as their ``body`` argument.

The default dtype is ``jnp.float64``.  Mean-element text records carry
epochs to 1e-8 day and eccentricities to 1e-7, which single precision
cannot represent, so importing this module enables JAX's 64-bit mode.
Switching to a narrower dtype is allowed for rendering-only use.
"""

from __future__ import annotations

from dataclasses import dataclass

import jax
import jax.numpy as jnp

from orbitmapper.constants import GM_EARTH_KM, R_EARTH_KM

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_GRAVITY_MODELS = ("wgs72old", "wgs72", "wgs84")

jax.config.update("jax_enable_x64", True)
_dtype = jnp.float64


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for orbitmapper.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is (re-)enabled via
    ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


@dataclass(frozen=True)
class ReferenceBody:
    """Constants of the central body an orbit is expressed around.

    The radius doubles as the rendering length unit: render-frame
    positions are measured in body radii.

    Args:
        radius_km: Equatorial radius [km].
        mu_km3_s2: Gravitational parameter [km^3/s^2].
        gravity_model: Constant set handed to the SGP4 integrator, one of
            ``"wgs72old"``, ``"wgs72"`` or ``"wgs84"``.

    Examples:
        ```python
        from orbitmapper.config import EARTH, ReferenceBody
        body = ReferenceBody(radius_km=6378.135, gravity_model="wgs72")
        body.mu_re3_s2
        ```
    """

    radius_km: float = R_EARTH_KM
    mu_km3_s2: float = GM_EARTH_KM
    gravity_model: str = "wgs72"

    def __post_init__(self) -> None:
        if not self.radius_km > 0.0:
            raise ValueError(f"radius_km must be positive, got {self.radius_km}")
        if not self.mu_km3_s2 > 0.0:
            raise ValueError(f"mu_km3_s2 must be positive, got {self.mu_km3_s2}")
        if self.gravity_model.lower() not in _GRAVITY_MODELS:
            raise ValueError(
                f"Unknown gravity model {self.gravity_model!r}. "
                f"Must be one of: {', '.join(_GRAVITY_MODELS)}"
            )

    @property
    def mu_re3_s2(self) -> float:
        """Gravitational parameter in body radii cubed per second squared."""
        return self.mu_km3_s2 / self.radius_km**3


EARTH = ReferenceBody()
