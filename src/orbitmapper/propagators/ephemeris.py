"""Ephemeris-driven propagator.

:class:`EphemerisPropagator` turns a list of timestamped ECI samples into
a :class:`~orbitmapper.propagators.Propagator`.  The strategy is chosen
once, at construction:

- **One sample**: synthesize a TLE from it and propagate with SGP4, so a
  single state vector still drives a full orbit.
- **Several samples, some with covariance**: those samples are epoch
  state estimates; each one gets its own synthesized TLE propagator, and a
  query uses the propagator of the sample nearest in time.
- **Otherwise**: clamp to the end samples and interpolate linearly in
  between.

Samples with an unset timestamp are dropped and the rest are sorted by
time; every lookup relies on that order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

import jax.numpy as jnp
from jax import Array

from orbitmapper.config import EARTH, ReferenceBody, get_dtype
from orbitmapper.coordinates import elements_from_state
from orbitmapper.frames import state_km_to_render
from orbitmapper.propagators.tle import TLEPropagator
from orbitmapper.time import as_utc, datetime_to_posix, is_unset_time
from orbitmapper.tle import tle_from_state
from orbitmapper.types import CartesianState, EphemerisSample, OrbitalElements

logger = logging.getLogger(__name__)


def _synthesize_propagator(sample: EphemerisSample, body: ReferenceBody) -> TLEPropagator | None:
    lines = tle_from_state(sample.t, sample.position_km, sample.velocity_kms, body)
    if lines is None:
        logger.debug("TLE synthesis rejected sample at %s", sample.t)
        return None

    prop = TLEPropagator(*lines, body=body)
    if not prop.is_valid:
        logger.debug("Synthesized TLE for sample at %s did not initialize", sample.t)
        return None
    return prop


class EphemerisPropagator:
    """Propagate from a set of timestamped ECI state samples.

    Args:
        samples: Samples in any order.  Positions in km, velocities in km/s.
        body: Reference body; its radius is the render length unit.

    Examples:
        ```python
        from datetime import datetime, timedelta, timezone
        from orbitmapper.propagators import EphemerisPropagator
        from orbitmapper.types import EphemerisSample

        t0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
        prop = EphemerisPropagator([
            EphemerisSample(t0, (7000.0, 0.0, 0.0), (0.0, 7.5, 0.0)),
            EphemerisSample(t0 + timedelta(seconds=60), (6990.0, 450.0, 0.0), (-0.5, 7.5, 0.0)),
        ])
        prop.propagate(t0 + timedelta(seconds=30))  # midpoint of the two samples
        ```
    """

    def __init__(self, samples: Iterable[EphemerisSample], body: ReferenceBody = EARTH) -> None:
        self._body = body
        self._samples: tuple[EphemerisSample, ...] = tuple(
            sorted(
                (s for s in samples if not is_unset_time(s.t)),
                key=lambda s: as_utc(s.t),
            )
        )

        n = len(self._samples)
        dtype = get_dtype()
        self._times: Array = jnp.array(
            [datetime_to_posix(s.t) for s in self._samples], dtype=jnp.float64
        )
        self._positions: Array = jnp.array(
            [s.position_km for s in self._samples], dtype=dtype
        ).reshape(n, 3)
        self._velocities: Array = jnp.array(
            [s.velocity_kms for s in self._samples], dtype=dtype
        ).reshape(n, 3)

        self._elements: OrbitalElements | None = None
        self._sgp4: TLEPropagator | None = None
        self._sgp4_by_sample: tuple[TLEPropagator | None, ...] = ()

        if n == 0:
            return

        first = self._samples[0]
        self._elements = elements_from_state(first.position_km, first.velocity_kms, body)

        if n == 1:
            self._sgp4 = _synthesize_propagator(first, body)
        elif any(s.has_covariance for s in self._samples):
            by_sample = tuple(
                _synthesize_propagator(s, body) if s.has_covariance else None
                for s in self._samples
            )
            if any(p is not None for p in by_sample):
                self._sgp4_by_sample = by_sample
            else:
                logger.debug("No epoch state of %d synthesized; interpolating", n)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def samples(self) -> tuple[EphemerisSample, ...]:
        """Retained samples, sorted by time."""
        return self._samples

    @property
    def has_sgp4(self) -> bool:
        """True if at least one SGP4 model was synthesized."""
        return self._sgp4 is not None or len(self._sgp4_by_sample) > 0

    # ------------------------------------------------------------------
    # Propagation
    # ------------------------------------------------------------------

    def _render_state(self, idx: int) -> CartesianState:
        return state_km_to_render(self._positions[idx], self._velocities[idx], self._body)

    def _nearest_index(self, t_sec: float) -> int:
        n = len(self._samples)
        idx = int(jnp.searchsorted(self._times, t_sec, side="left"))
        if idx == 0:
            return 0
        if idx == n:
            return n - 1

        da = abs(t_sec - float(self._times[idx - 1]))
        db = abs(float(self._times[idx]) - t_sec)
        return idx - 1 if da <= db else idx

    def _interpolate(self, t_sec: float) -> CartesianState:
        n = len(self._samples)
        if n == 1 or t_sec <= float(self._times[0]):
            return self._render_state(0)
        if t_sec >= float(self._times[-1]):
            return self._render_state(n - 1)

        b = int(jnp.searchsorted(self._times, t_sec, side="left"))
        a = b - 1
        dt = float(self._times[b] - self._times[a])
        if dt <= 0.0:
            return self._render_state(a)

        alpha = min(1.0, max(0.0, (t_sec - float(self._times[a])) / dt))
        r = self._positions[a] + alpha * (self._positions[b] - self._positions[a])
        v = self._velocities[a] + alpha * (self._velocities[b] - self._velocities[a])
        return state_km_to_render(r, v, self._body)

    def propagate(self, t: datetime) -> CartesianState:
        """Return the render-frame state at absolute time ``t``.

        Dispatch, first match wins:

        1. the single-sample SGP4 model;
        2. the SGP4 model of the sample nearest ``t`` (ties go to the
           earlier sample), if that sample has one;
        3. the lone sample itself;
        4. the first/last sample outside the covered span, linear
           interpolation between the bracketing pair inside it.

        An empty ephemeris yields the zero state.
        """
        if not self._samples:
            return CartesianState.zero()

        if self._sgp4 is not None:
            return self._sgp4.propagate(t)

        t_sec = datetime_to_posix(t)
        if self._sgp4_by_sample:
            prop = self._sgp4_by_sample[self._nearest_index(t_sec)]
            if prop is not None:
                return prop.propagate(t)

        return self._interpolate(t_sec)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def try_get_orbital_period_seconds(self) -> float | None:
        """Return the orbital period of a synthesized SGP4 model [s].

        Uses the single-sample model if present, else the first per-sample
        model that reports a period.
        """
        if self._sgp4 is not None:
            return self._sgp4.try_get_orbital_period_seconds()
        for prop in self._sgp4_by_sample:
            if prop is None:
                continue
            period = prop.try_get_orbital_period_seconds()
            if period is not None:
                return period
        return None

    def is_epoch_state_set(self) -> bool:
        """True when the samples look like epoch state estimates.

        That is, an SGP4 model was synthesized or any sample carries
        covariance.
        """
        if not self._samples:
            return False
        if self.has_sgp4:
            return True
        return any(s.has_covariance for s in self._samples)

    def try_get_keplerian_elements(self) -> OrbitalElements | None:
        """Return elements extracted from the earliest sample, if valid."""
        return self._elements

    def __repr__(self) -> str:
        return (
            f"EphemerisPropagator(samples={len(self._samples)}, has_sgp4={self.has_sgp4})"
        )
