"""Keplerian anomaly conversions and two-body rates.

This module provides the anomaly conversions used by the orbit sampler,
the Kepler-clock propagator and the state-vector element extraction,
together with mean motion and orbital period.

Two Kepler-equation solvers are provided:

- :func:`anomaly_mean_to_eccentric_fixed_point` runs a fixed number of
  ``E <- M + e*sin(E)`` iterations.  The iteration count is its contract;
  there is no convergence test.  The orbit sampler uses it.
- :func:`anomaly_mean_to_eccentric` runs Newton-Raphson with an early
  exit, for propagating a marker along a drawn orbit.

Both loops use ``jax.lax`` control flow and are traceable under
``jax.jit`` and ``jax.vmap``.  Inputs are coerced to the configured float
dtype (see :func:`orbitmapper.config.set_dtype`).
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitmapper.config import get_dtype
from orbitmapper.utils import from_radians, to_radians

FIXED_POINT_ITERATIONS = 8
NEWTON_MAX_ITERATIONS = 12
NEWTON_TOL = 1e-12

# ──────────────────────────────────────────────
# Rates
# ──────────────────────────────────────────────


def mean_motion(a: ArrayLike, mu: ArrayLike) -> Array:
    """Compute the two-body mean motion.

    Args:
        a: Semi-major axis, in the length unit of ``mu``.
        mu: Gravitational parameter. Units: *L^3/s^2*

    Returns:
        Mean motion. Units: *rad/s*
    """
    a = jnp.asarray(a, dtype=get_dtype())
    return jnp.sqrt(mu / a**3)


def orbital_period(a: ArrayLike, mu: ArrayLike) -> Array:
    """Compute the two-body orbital period.

    Args:
        a: Semi-major axis, in the length unit of ``mu``.
        mu: Gravitational parameter. Units: *L^3/s^2*

    Returns:
        Orbital period. Units: *s*

    Examples:
        ```python
        from orbitmapper.constants import GM_EARTH_KM, R_EARTH_KM
        from orbitmapper.orbits import orbital_period
        T = orbital_period(R_EARTH_KM + 500.0, GM_EARTH_KM)
        ```
    """
    return 2.0 * jnp.pi / mean_motion(a, mu)


# ──────────────────────────────────────────────
# Anomaly conversions
# ──────────────────────────────────────────────


def anomaly_eccentric_to_mean(anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert eccentric anomaly to mean anomaly.

    Applies Kepler's equation: ``M = E - e * sin(E)``.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Mean anomaly. Units: *rad* or *deg*

    References:
        O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
        Applications*, 2012. Eq. 2.65.
    """
    anm_ecc = jnp.asarray(anm_ecc, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    E = to_radians(anm_ecc, use_degrees)
    M = E - e * jnp.sin(E)
    return from_radians(M, use_degrees)


def anomaly_mean_to_eccentric_fixed_point(
    anm_mean: ArrayLike,
    e: ArrayLike,
    iterations: int = FIXED_POINT_ITERATIONS,
) -> Array:
    """Solve Kepler's equation by fixed-point iteration.

    Starts from ``E = M`` and applies ``E <- M + e * sin(E)`` exactly
    ``iterations`` times.  Accuracy degrades as ``e`` approaches 1 but the
    result is always finite for finite input.

    Args:
        anm_mean: Mean anomaly. Units: *rad*
        e: Eccentricity. Dimensionless.
        iterations: Number of fixed-point steps.

    Returns:
        Eccentric anomaly. Units: *rad*
    """
    M = jnp.asarray(anm_mean, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    def step(_, E):
        return M + e * jnp.sin(E)

    return jax.lax.fori_loop(0, iterations, step, M)


def anomaly_mean_to_eccentric(anm_mean: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert mean anomaly to eccentric anomaly.

    Solves Kepler's equation ``M = E - e * sin(E)`` for ``E`` with
    Newton-Raphson, starting from ``M`` for ``e < 0.8`` and from ``pi``
    otherwise.  Stops after :data:`NEWTON_MAX_ITERATIONS` steps or once a
    step is smaller than :data:`NEWTON_TOL`.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Eccentric anomaly. Units: *rad* or *deg*

    Examples:
        ```python
        from orbitmapper.orbits import anomaly_mean_to_eccentric
        E = anomaly_mean_to_eccentric(84.27, 0.1, use_degrees=True)
        ```
    """
    anm_mean = jnp.asarray(anm_mean, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    M = to_radians(anm_mean, use_degrees)
    M = M % (2.0 * jnp.pi)

    E0 = jnp.where(e < 0.8, M, jnp.pi)

    def cond(carry):
        i, _, dE = carry
        return (i < NEWTON_MAX_ITERATIONS) & (jnp.abs(dE) >= NEWTON_TOL)

    def newton_step(carry):
        i, E, _ = carry
        f = E - e * jnp.sin(E) - M
        dE = -f / (1.0 - e * jnp.cos(E))
        return i + 1, E + dE, dE

    _, E, _ = jax.lax.while_loop(cond, newton_step, (jnp.int32(0), E0, jnp.ones_like(E0)))
    return from_radians(E, use_degrees)


def anomaly_true_to_eccentric(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to eccentric anomaly.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Eccentric anomaly in ``(-pi, pi]``. Units: *rad* or *deg*

    References:
        D. Vallado, *Fundamentals of Astrodynamics and Applications
        (4th Ed.)*, pp. 47, eq. 2-9, 2010.
    """
    anm_true = jnp.asarray(anm_true, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    nu = to_radians(anm_true, use_degrees)
    E = jnp.arctan2(jnp.sin(nu) * jnp.sqrt(1.0 - e**2), jnp.cos(nu) + e)
    return from_radians(E, use_degrees)


def anomaly_eccentric_to_true(anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert eccentric anomaly to true anomaly with the half-angle identity.

    ``nu = 2 * atan2(sqrt(1 + e) * sin(E/2), sqrt(1 - e) * cos(E/2))``

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly in ``(-pi, pi]``. Units: *rad* or *deg*
    """
    anm_ecc = jnp.asarray(anm_ecc, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    E = to_radians(anm_ecc, use_degrees)
    nu = 2.0 * jnp.arctan2(
        jnp.sqrt(1.0 + e) * jnp.sin(E / 2.0),
        jnp.sqrt(1.0 - e) * jnp.cos(E / 2.0),
    )
    return from_radians(nu, use_degrees)


def anomaly_true_to_mean(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to mean anomaly.

    Composite conversion: true -> eccentric -> mean.
    """
    return anomaly_eccentric_to_mean(
        anomaly_true_to_eccentric(anm_true, e, use_degrees),
        e,
        use_degrees,
    )


def anomaly_mean_to_true(anm_mean: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert mean anomaly to true anomaly.

    Composite conversion: mean -> eccentric (Newton) -> true.
    """
    return anomaly_eccentric_to_true(
        anomaly_mean_to_eccentric(anm_mean, e, use_degrees),
        e,
        use_degrees,
    )
