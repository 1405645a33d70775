"""Kepler geometry: classical elements and an anomaly to a render-frame vector.

The perifocal position ``(r cos(nu), r sin(nu), 0)`` with
``r = a(1 - e^2) / (1 + e cos(nu))`` is rotated by ``Z(RAAN) X(i) Z(omega)``
into the body-equatorial frame and then relabeled into render axes, so an
equatorial orbit is drawn in the render frame's horizontal plane.

Outputs are in the length unit of ``elements.semi_major_axis`` (body
radii for every element set this package produces).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitmapper.config import get_dtype
from orbitmapper.frames import remap_eci_to_render, rotation_perifocal_to_eci
from orbitmapper.types import OrbitalElements


def _rotation(elements: OrbitalElements) -> Array:
    return rotation_perifocal_to_eci(
        elements.raan_deg,
        elements.inclination_deg,
        elements.arg_periapsis_deg,
        use_degrees=True,
    )


def position_eci_from_elements(elements: OrbitalElements, true_anomaly: ArrayLike) -> Array:
    """Compute the render-frame position at a true anomaly.

    Total over finite inputs except ``semi_major_axis == 0``.

    Args:
        elements: Classical elements.
        true_anomaly: True anomaly. Units: *rad*

    Returns:
        Position ``[x, y, z]`` in render axes.

    Examples:
        ```python
        from orbitmapper.orbits import position_eci_from_elements
        from orbitmapper.types import OrbitalElements
        position_eci_from_elements(OrbitalElements(), 0.0)  # -> [1, 0, 0]
        ```
    """
    nu = jnp.asarray(true_anomaly, dtype=get_dtype())
    a = elements.semi_major_axis
    e = elements.eccentricity

    p = a * (1.0 - e * e)
    r = p / (1.0 + e * jnp.cos(nu))
    r_pqw = jnp.array([r * jnp.cos(nu), r * jnp.sin(nu), 0.0])

    return remap_eci_to_render(_rotation(elements) @ r_pqw)


def velocity_eci_from_elements(
    elements: OrbitalElements,
    true_anomaly: ArrayLike,
    mu: float,
) -> Array:
    """Compute the render-frame two-body velocity at a true anomaly.

    Uses the perifocal velocity ``sqrt(mu/p) * (-sin(nu), e + cos(nu), 0)``.

    Args:
        elements: Classical elements.
        true_anomaly: True anomaly. Units: *rad*
        mu: Gravitational parameter in the cube of the element length unit
            per second squared (see :attr:`ReferenceBody.mu_re3_s2`).

    Returns:
        Velocity ``[vx, vy, vz]`` in render axes, length unit per second.
    """
    nu = jnp.asarray(true_anomaly, dtype=get_dtype())
    a = elements.semi_major_axis
    e = elements.eccentricity

    p = a * (1.0 - e * e)
    scale = jnp.sqrt(mu / p)
    v_pqw = jnp.array([-scale * jnp.sin(nu), scale * (e + jnp.cos(nu)), 0.0])

    return remap_eci_to_render(_rotation(elements) @ v_pqw)
