"""ECI to render-frame conversion.

The renderer draws the body's equatorial plane horizontally, so ECI
axes are relabeled ``(x, y, z) -> (x, z, -y)``: the ECI pole becomes the
render "up" axis.  Lengths are expressed in reference-body radii.

Every propagator funnels its output through these functions so the
Kepler geometry, the SGP4 wrapper and raw ephemeris samples all land in
the same frame.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitmapper.config import EARTH, ReferenceBody, get_dtype
from orbitmapper.types import CartesianState


def remap_eci_to_render(vec: ArrayLike) -> Array:
    """Relabel an ECI vector into render axes: ``(x, y, z) -> (x, z, -y)``.

    Args:
        vec: Vector ``[x, y, z]`` in ECI axes.

    Returns:
        Vector in render axes.
    """
    vec = jnp.asarray(vec, dtype=get_dtype())
    return jnp.array([vec[0], vec[2], -vec[1]])


def remap_render_to_eci(vec: ArrayLike) -> Array:
    """Inverse of :func:`remap_eci_to_render`: ``(x, y, z) -> (x, -z, y)``."""
    vec = jnp.asarray(vec, dtype=get_dtype())
    return jnp.array([vec[0], -vec[2], vec[1]])


def state_km_to_render(
    position_km: ArrayLike,
    velocity_kms: ArrayLike,
    body: ReferenceBody = EARTH,
) -> CartesianState:
    """Convert an ECI state in km and km/s into the render frame.

    Divides both vectors by the body radius and applies the axis remap.

    Args:
        position_km: ECI position [km].
        velocity_kms: ECI velocity [km/s].
        body: Reference body whose radius is the length unit.

    Returns:
        CartesianState: Position [radii] and velocity [radii/s] in render axes.
    """
    r = jnp.asarray(position_km, dtype=get_dtype()) / body.radius_km
    v = jnp.asarray(velocity_kms, dtype=get_dtype()) / body.radius_km
    return CartesianState(remap_eci_to_render(r), remap_eci_to_render(v))
