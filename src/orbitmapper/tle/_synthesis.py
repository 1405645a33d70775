"""
Synthetic mean-element records from a single state vector.

SGP4 is designed for mean elements; the record built here carries the
osculating elements of the state with all drag terms zeroed.  It is good
enough to draw a full orbit from one epoch state and is never meant for
precision work.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from jax.typing import ArrayLike

from orbitmapper.config import EARTH, ReferenceBody
from orbitmapper.constants import RAD2DEG, SECONDS_PER_DAY, TWO_PI
from orbitmapper.coordinates import orbit_geometry_from_state
from orbitmapper.tle._format import (
    TLE_DATA_LENGTH,
    finalize_tle_line,
    format_angle,
    format_eccentricity,
    format_mean_motion,
    format_tle_epoch,
)
from orbitmapper.utils import wrap_degrees

logger = logging.getLogger(__name__)

SATNUM = "00001"
CLASSIFICATION = "U"
INTL_DESIGNATOR = "00000A"
REV_NUMBER = 1

# ndot, nddot, bstar, ephemeris type and element set number
_LINE1_TAIL = "  .00000000  00000-0  00000-0 0  999"


def _line1(epoch_field: str) -> str:
    return f"1 {SATNUM}{CLASSIFICATION} {INTL_DESIGNATOR:<8} {epoch_field}{_LINE1_TAIL}"


def _line2(inc: float, raan: float, ecc: float, argp: float, mean_anom: float, n: float) -> str:
    return (
        f"2 {SATNUM}"
        f" {format_angle(inc)}"
        f" {format_angle(raan)}"
        f" {format_eccentricity(ecc)}"
        f" {format_angle(argp)}"
        f" {format_angle(mean_anom)}"
        f" {format_mean_motion(n)}"
        f"{REV_NUMBER:5d}"
    )


def tle_from_state(
    epoch: datetime,
    position_km: ArrayLike,
    velocity_kms: ArrayLike,
    body: ReferenceBody = EARTH,
) -> tuple[str, str] | None:
    """Build a synthetic two-line mean-element record from an inertial state.

    Uses :func:`orbitmapper.coordinates.orbit_geometry_from_state` for the
    elements, then encodes them into the fixed-width layout with
    placeholder identification and zero drag terms.

    Args:
        epoch: Absolute time of the state.
        position_km: Inertial position [km].
        velocity_kms: Inertial velocity [km/s].
        body: Central body providing ``mu``.

    Returns:
        ``(line1, line2)``, each 69 characters with a valid checksum, or
        ``None`` when the state has no valid elliptical orbit (eccentricity
        at least 0.999, non-positive semi-major axis, non-finite values) or
        a field overflows its column.

    Examples:
        ```python
        import math
        from datetime import datetime, timezone
        from orbitmapper.constants import GM_EARTH_KM
        from orbitmapper.tle import tle_from_state
        r = 7000.0
        line1, line2 = tle_from_state(
            datetime(2024, 1, 1, tzinfo=timezone.utc),
            [r, 0.0, 0.0],
            [0.0, math.sqrt(GM_EARTH_KM / r), 0.0],
        )
        ```
    """
    geom = orbit_geometry_from_state(position_km, velocity_kms, body)
    if geom is None:
        logger.debug("No elliptical orbit for state r=%s v=%s", position_km, velocity_kms)
        return None

    rev_per_day = geom.mean_motion * SECONDS_PER_DAY / TWO_PI
    if not (math.isfinite(rev_per_day) and rev_per_day > 0.0):
        return None

    data1 = _line1(format_tle_epoch(epoch))
    data2 = _line2(
        wrap_degrees(geom.inclination * RAD2DEG),
        wrap_degrees(geom.raan * RAD2DEG),
        geom.eccentricity,
        wrap_degrees(geom.arg_periapsis * RAD2DEG),
        wrap_degrees(geom.mean_anomaly * RAD2DEG),
        rev_per_day,
    )

    for data in (data1, data2):
        if len(data) != TLE_DATA_LENGTH:
            logger.debug("Synthetic TLE field overflow (%d chars): %r", len(data), data)
            return None

    return finalize_tle_line(data1), finalize_tle_line(data2)
