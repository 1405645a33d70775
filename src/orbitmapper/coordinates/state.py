"""ECI state vector to osculating orbital geometry.

:func:`orbit_geometry_from_state` is the single derivation of classical
elements from a position/velocity pair.  Both consumers build on it so
they cannot drift apart:

- :func:`elements_from_state` turns it into :class:`OrbitalElements` for
  display, with extra plausibility guards on radius and semi-major axis.
- :func:`orbitmapper.tle.tle_from_state` encodes it as a mean-element
  text record.

Derivation (Vallado, Alg. 9):

1. ``h = r x v``; inclination from ``h_z / |h|``.
2. Node vector ``n = z x h``; RAAN from ``atan2(n_y, n_x)``, zero for an
   equatorial orbit.
3. ``e_vec = (v x h)/mu - r/|r|``.
4. Argument of periapsis from ``n . e_vec`` (sign from ``e_z``) and true
   anomaly from ``e_vec . r`` (sign from ``r . v``).  Near-circular or
   near-equatorial orbits fall back to the true longitude with the
   argument of periapsis set to zero.
5. Semi-major axis from vis-viva, mean anomaly via the eccentric anomaly.

Failures are reported as ``None``; nothing here raises for bad physics.

References:
    D. Vallado, *Fundamentals of Astrodynamics and Applications
    (4th Ed.)*, 2013, Algorithm 9 (RV2COE).
"""

from __future__ import annotations

import math
from typing import NamedTuple

import jax.numpy as jnp
from jax.typing import ArrayLike

from orbitmapper.config import EARTH, ReferenceBody, get_dtype
from orbitmapper.constants import (
    CIRCULAR_TOL,
    ECC_MAX,
    EQUATORIAL_TOL,
    RAD2DEG,
    RADIUS_MAX_KM,
    TWO_PI,
)
from orbitmapper.orbits.keplerian import anomaly_eccentric_to_mean, anomaly_true_to_eccentric
from orbitmapper.types import OrbitalElements
from orbitmapper.utils import wrap_degrees, wrap_two_pi


class OrbitGeometry(NamedTuple):
    """Osculating two-body geometry of one state vector.

    Angles are radians in ``[0, 2pi)`` (inclination in ``[0, pi]``).

    Attributes:
        radius_km: Position magnitude [km].
        semi_major_axis_km: Semi-major axis [km].
        eccentricity: Eccentricity [dimensionless].
        inclination: Inclination [rad].
        raan: Right ascension of the ascending node [rad].
        arg_periapsis: Argument of periapsis [rad].
        true_anomaly: True anomaly (true longitude in the degenerate case) [rad].
        eccentric_anomaly: Eccentric anomaly [rad].
        mean_anomaly: Mean anomaly [rad].
        mean_motion: Mean motion [rad/s].
    """

    radius_km: float
    semi_major_axis_km: float
    eccentricity: float
    inclination: float
    raan: float
    arg_periapsis: float
    true_anomaly: float
    eccentric_anomaly: float
    mean_anomaly: float
    mean_motion: float


def _clamp_unit(x: float) -> float:
    return min(1.0, max(-1.0, x))


def orbit_geometry_from_state(
    position_km: ArrayLike,
    velocity_kms: ArrayLike,
    body: ReferenceBody = EARTH,
) -> OrbitGeometry | None:
    """Derive osculating orbital geometry from an inertial state.

    Rejects (returns ``None``) when the radius or speed is non-finite, the
    radius is not positive, the angular momentum vanishes, the
    eccentricity is non-finite or at least :data:`ECC_MAX`, or the
    semi-major axis is non-finite or not positive.

    Args:
        position_km: Inertial position [km].
        velocity_kms: Inertial velocity [km/s].
        body: Central body providing ``mu``.

    Returns:
        OrbitGeometry or ``None``.
    """
    mu = body.mu_km3_s2
    r = jnp.asarray(position_km, dtype=get_dtype())
    v = jnp.asarray(velocity_kms, dtype=get_dtype())

    r_mag = float(jnp.linalg.norm(r))
    v_sq = float(jnp.dot(v, v))
    if not (math.isfinite(r_mag) and math.isfinite(v_sq) and r_mag > 0.0):
        return None

    # Angular momentum
    h = jnp.cross(r, v)
    h_mag = float(jnp.linalg.norm(h))
    if not (math.isfinite(h_mag) and h_mag > 0.0):
        return None

    inclination = math.acos(_clamp_unit(float(h[2]) / h_mag))

    # Node vector n = z x h
    n_x = -float(h[1])
    n_y = float(h[0])
    n_mag = math.hypot(n_x, n_y)

    raan = 0.0
    if n_mag > EQUATORIAL_TOL:
        raan = wrap_two_pi(math.atan2(n_y, n_x))

    # Eccentricity vector
    e_vec = jnp.cross(v, h) / mu - r / r_mag
    ecc = float(jnp.linalg.norm(e_vec))
    if not (math.isfinite(ecc) and ecc < ECC_MAX):
        return None

    r_dot_v = float(jnp.dot(r, v))
    if ecc > CIRCULAR_TOL and n_mag > EQUATORIAL_TOL:
        e_x, e_y, e_z = (float(x) for x in e_vec)
        arg_periapsis = math.acos(_clamp_unit((n_x * e_x + n_y * e_y) / (n_mag * ecc)))
        if e_z < 0.0:
            arg_periapsis = TWO_PI - arg_periapsis

        true_anomaly = math.acos(_clamp_unit(float(jnp.dot(e_vec, r)) / (ecc * r_mag)))
        if r_dot_v < 0.0:
            true_anomaly = TWO_PI - true_anomaly
    else:
        # Degenerate orbit: true longitude from the reference axis, periapsis at the node
        arg_periapsis = 0.0
        true_anomaly = wrap_two_pi(math.atan2(float(r[1]) / r_mag, float(r[0]) / r_mag))

    # Vis-viva
    a = 1.0 / (2.0 / r_mag - v_sq / mu)
    if not (math.isfinite(a) and a > 0.0):
        return None

    E = wrap_two_pi(float(anomaly_true_to_eccentric(true_anomaly, ecc)))
    M = wrap_two_pi(float(anomaly_eccentric_to_mean(E, ecc)))
    n = math.sqrt(mu / (a * a * a))

    return OrbitGeometry(
        radius_km=r_mag,
        semi_major_axis_km=a,
        eccentricity=ecc,
        inclination=inclination,
        raan=raan,
        arg_periapsis=arg_periapsis,
        true_anomaly=true_anomaly,
        eccentric_anomaly=E,
        mean_anomaly=M,
        mean_motion=n,
    )


def elements_from_state(
    position_km: ArrayLike,
    velocity_kms: ArrayLike,
    body: ReferenceBody = EARTH,
) -> OrbitalElements | None:
    """Extract classical elements from an inertial state vector.

    On top of the checks in :func:`orbit_geometry_from_state`, rejects a
    radius or semi-major axis at or below the body radius or at or above
    :data:`RADIUS_MAX_KM`.

    Args:
        position_km: Inertial position [km].
        velocity_kms: Inertial velocity [km/s].
        body: Central body; its radius is the output length unit.

    Returns:
        OrbitalElements with the semi-major axis in body radii and angles
        in degrees wrapped to ``[0, 360)``, or ``None``.

    Examples:
        ```python
        import math
        from orbitmapper.coordinates import elements_from_state
        from orbitmapper.constants import GM_EARTH_KM
        r = 7000.0
        el = elements_from_state([r, 0.0, 0.0], [0.0, math.sqrt(GM_EARTH_KM / r), 0.0])
        el.eccentricity  # ~0
        ```
    """
    r_mag = float(jnp.linalg.norm(jnp.asarray(position_km, dtype=get_dtype())))
    if not (math.isfinite(r_mag) and body.radius_km < r_mag < RADIUS_MAX_KM):
        return None

    geom = orbit_geometry_from_state(position_km, velocity_kms, body)
    if geom is None:
        return None
    if not body.radius_km < geom.semi_major_axis_km < RADIUS_MAX_KM:
        return None

    return OrbitalElements(
        semi_major_axis=geom.semi_major_axis_km / body.radius_km,
        eccentricity=geom.eccentricity,
        inclination_deg=wrap_degrees(geom.inclination * RAD2DEG),
        raan_deg=wrap_degrees(geom.raan * RAD2DEG),
        arg_periapsis_deg=wrap_degrees(geom.arg_periapsis * RAD2DEG),
        mean_anomaly_deg=wrap_degrees(geom.mean_anomaly * RAD2DEG),
    )
