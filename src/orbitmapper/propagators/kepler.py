"""Two-body "Kepler clock" propagator.

Advances the mean anomaly of a fixed element set linearly in time and
places the satellite with the same Kepler geometry the orbit sampler
uses, so a marker driven by this propagator stays on the drawn polyline.
"""

from __future__ import annotations

from datetime import datetime

from orbitmapper.config import EARTH, ReferenceBody
from orbitmapper.constants import DEG2RAD, TWO_PI
from orbitmapper.orbits import (
    anomaly_mean_to_true,
    position_eci_from_elements,
    velocity_eci_from_elements,
)
from orbitmapper.time import as_utc, seconds_between
from orbitmapper.types import CartesianState, OrbitalElements


class KeplerPropagator:
    """Unperturbed two-body propagation of classical elements.

    The element set's mean anomaly holds at ``epoch``; at time ``t`` it is
    ``M0 + n * (t - epoch)`` with ``n = sqrt(mu / a^3)`` in body radii.

    Args:
        elements: Element set, semi-major axis in body radii.
        epoch: Absolute time at which ``elements.mean_anomaly_deg`` holds.
        body: Reference body providing ``mu``.

    Examples:
        ```python
        from datetime import datetime, timezone
        from orbitmapper.propagators import KeplerPropagator
        from orbitmapper.types import OrbitalElements

        epoch = datetime(2024, 1, 1, tzinfo=timezone.utc)
        prop = KeplerPropagator(OrbitalElements(semi_major_axis=1.1), epoch)
        prop.propagate(epoch).position  # -> [1.1, 0, 0]
        ```
    """

    def __init__(
        self,
        elements: OrbitalElements,
        epoch: datetime,
        body: ReferenceBody = EARTH,
    ) -> None:
        if not elements.semi_major_axis > 0.0:
            raise ValueError(f"semi_major_axis must be positive, got {elements.semi_major_axis}")
        if not 0.0 <= elements.eccentricity < 1.0:
            raise ValueError(f"eccentricity must be in [0, 1), got {elements.eccentricity}")

        self._elements = elements
        self._epoch = as_utc(epoch)
        self._mu = body.mu_re3_s2
        a = elements.semi_major_axis
        self._mean_motion = (self._mu / (a * a * a)) ** 0.5

    @property
    def elements(self) -> OrbitalElements:
        """Element set at epoch."""
        return self._elements

    @property
    def epoch(self) -> datetime:
        """Epoch of the element set (UTC)."""
        return self._epoch

    @property
    def mean_motion(self) -> float:
        """Mean motion [rad/s]."""
        return self._mean_motion

    def propagate(self, t: datetime) -> CartesianState:
        """Return the render-frame state at absolute time ``t``."""
        dt = seconds_between(self._epoch, t)
        M = self._elements.mean_anomaly_deg * DEG2RAD + self._mean_motion * dt
        nu = anomaly_mean_to_true(M, self._elements.eccentricity)
        return CartesianState(
            position_eci_from_elements(self._elements, nu),
            velocity_eci_from_elements(self._elements, nu, self._mu),
        )

    def try_get_orbital_period_seconds(self) -> float | None:
        """Return the two-body period ``2*pi / n`` [s]."""
        return TWO_PI / self._mean_motion

    def __repr__(self) -> str:
        return f"KeplerPropagator(elements={self._elements}, epoch={self._epoch.isoformat()})"
