"""Mean-element (TLE) propagator backed by the SGP4 integrator.

:class:`TLEPropagator` wraps ``sgp4.api.Satrec``: it parses the two lines
once, converts each absolute query time to the integrator's split Julian
Date, and converts the TEME output (km, km/s) into the render frame.

A record that fails to parse still yields a usable object; every
propagation then returns the zero state and every query returns
``None``, so a render loop keeps running.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from sgp4.api import WGS72, WGS72OLD, WGS84, Satrec

from orbitmapper.config import EARTH, ReferenceBody
from orbitmapper.constants import MINUTES_PER_DAY, RAD2DEG, SECONDS_PER_DAY, TWO_PI
from orbitmapper.frames import state_km_to_render
from orbitmapper.tle import TLE_LINE_LENGTH
from orbitmapper.time import datetime_to_jd, jd_to_datetime
from orbitmapper.types import CartesianState, OrbitalElements
from orbitmapper.utils import wrap_degrees

logger = logging.getLogger(__name__)

_GRAVITY_CONSTANTS = {
    "wgs72old": WGS72OLD,
    "wgs72": WGS72,
    "wgs84": WGS84,
}


def _parse_record(line1: str, line2: str, body: ReferenceBody) -> Satrec:
    """Hand a record to the integrator.

    Only the fixed-width layout is checked here; the checksum digit is
    trusted as given.

    Raises:
        ValueError: If either line is too short, carries the wrong line
            number, or the integrator rejects the elements.
    """
    for number, line in ((1, line1), (2, line2)):
        if len(line) < TLE_LINE_LENGTH:
            raise ValueError(
                f"TLE line {number} is too short ({len(line)} chars, expected 69): {line!r}"
            )
        if line[0] != str(number):
            raise ValueError(f"TLE line {number} does not start with '{number}': {line!r}")

    satrec = Satrec.twoline2rv(line1, line2, _GRAVITY_CONSTANTS[body.gravity_model.lower()])
    if satrec.error != 0:
        raise ValueError(f"SGP4 initialization failed with error code {satrec.error}")
    return satrec


class TLEPropagator:
    """Propagate a two-line mean-element record with SGP4.

    Args:
        line1: First TLE line (69 characters).
        line2: Second TLE line (69 characters).
        body: Reference body; its radius is the render length unit and its
            gravity model selects the SGP4 constant set.

    Examples:
        ```python
        from datetime import datetime, timezone
        from orbitmapper.propagators import TLEPropagator

        line1 = "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927"
        line2 = "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537"
        prop = TLEPropagator(line1, line2)
        state = prop.propagate(datetime(2008, 9, 20, 13, tzinfo=timezone.utc))
        prop.try_get_orbital_period_seconds()  # ~5495.8
        ```
    """

    def __init__(self, line1: str, line2: str, body: ReferenceBody = EARTH) -> None:
        self._line1 = line1.rstrip()
        self._line2 = line2.rstrip()
        self._body = body
        self._satrec: Satrec | None

        try:
            self._satrec = _parse_record(self._line1, self._line2, body)
        except ValueError as exc:
            logger.warning("Could not parse TLE record: %s", exc)
            self._satrec = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def line1(self) -> str:
        """First record line as given (trailing whitespace removed)."""
        return self._line1

    @property
    def line2(self) -> str:
        """Second record line as given (trailing whitespace removed)."""
        return self._line2

    @property
    def is_valid(self) -> bool:
        """True if the record parsed and initialized."""
        return self._satrec is not None

    @property
    def epoch(self) -> datetime | None:
        """Record epoch as an aware UTC datetime, or ``None`` if invalid."""
        if self._satrec is None:
            return None
        return jd_to_datetime(self._satrec.jdsatepoch, self._satrec.jdsatepochF)

    # ------------------------------------------------------------------
    # Propagation
    # ------------------------------------------------------------------

    def propagate(self, t: datetime) -> CartesianState:
        """Return the render-frame state at absolute time ``t``.

        Returns the zero state if the record is invalid or the integrator
        reports an error (decayed orbit, eccentricity out of range, ...).
        """
        if self._satrec is None:
            return CartesianState.zero()

        jd, fr = datetime_to_jd(t)
        error, r_km, v_kms = self._satrec.sgp4(jd, fr)
        if error != 0:
            logger.debug("SGP4 error %d at %s for satellite %s", error, t, self._line1[2:7])
            return CartesianState.zero()

        return state_km_to_render(r_km, v_kms, self._body)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _rev_per_day(self) -> float:
        return self._satrec.no_kozai * MINUTES_PER_DAY / TWO_PI

    def try_get_mean_elements(self) -> OrbitalElements | None:
        """Return the record's mean elements in rendering units.

        The semi-major axis is derived from the record's mean motion with
        the body's gravitational parameter and expressed in body radii.

        Returns:
            OrbitalElements, or ``None`` if the record did not parse or its
            mean motion gives no finite semi-major axis.
        """
        if self._satrec is None:
            return None

        sat = self._satrec
        n_rad_s = sat.no_kozai / 60.0
        if not n_rad_s > 0.0:
            return None
        a_km = (self._body.mu_km3_s2 / (n_rad_s * n_rad_s)) ** (1.0 / 3.0)
        if not math.isfinite(a_km):
            return None

        return OrbitalElements(
            semi_major_axis=a_km / self._body.radius_km,
            eccentricity=sat.ecco,
            inclination_deg=wrap_degrees(sat.inclo * RAD2DEG),
            raan_deg=wrap_degrees(sat.nodeo * RAD2DEG),
            arg_periapsis_deg=wrap_degrees(sat.argpo * RAD2DEG),
            mean_anomaly_deg=wrap_degrees(sat.mo * RAD2DEG),
        )

    def try_get_orbital_period_seconds(self) -> float | None:
        """Return the period implied by the record's mean motion.

        ``period = 86400 / rev_per_day``.

        Returns:
            Period [s], or ``None`` if the record did not parse or its
            mean motion is not positive.
        """
        if self._satrec is None:
            return None

        rev_per_day = self._rev_per_day()
        if not rev_per_day > 0.0:
            return None
        return SECONDS_PER_DAY / rev_per_day

    def __repr__(self) -> str:
        if self._satrec is None:
            return "TLEPropagator(invalid)"
        return (
            f"TLEPropagator(satnum={self._line1[2:7]!r}, epoch={self.epoch.isoformat()}, "
            f"n={self._rev_per_day():.8f} rev/day)"
        )
