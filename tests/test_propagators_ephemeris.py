"""Tests for the ephemeris-driven propagator."""

import math
from datetime import datetime, timedelta, timezone

import jax.numpy as jnp
import pytest

from orbitmapper.constants import GM_EARTH_KM, R_EARTH_KM
from orbitmapper.coordinates import elements_from_state
from orbitmapper.frames import state_km_to_render
from orbitmapper.propagators import EphemerisPropagator, Propagator, TLEPropagator
from orbitmapper.tle import tle_from_state
from orbitmapper.types import EphemerisSample

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
COV = tuple(float(k) for k in range(21))

R0 = (7000.0, 0.0, 0.0)
V0 = (0.0, 7.5, 0.0)
R1 = (6990.0, 450.0, 0.0)
V1 = (-0.5, 7.5, 0.0)


def _at(seconds: float) -> datetime:
    return T0 + timedelta(seconds=seconds)


def _pair(covariance=(None, None)):
    return [
        EphemerisSample(T0, R0, V0, covariance[0]),
        EphemerisSample(_at(60.0), R1, V1, covariance[1]),
    ]


def _synthesized(sample: EphemerisSample) -> TLEPropagator:
    return TLEPropagator(*tle_from_state(sample.t, sample.position_km, sample.velocity_kms))


def _assert_state_equal(state, expected):
    assert jnp.array_equal(state.position, expected.position)
    assert jnp.array_equal(state.velocity, expected.velocity)


# ──────────────────────────────────────────────
# Construction
# ──────────────────────────────────────────────

class TestEphemerisInit:
    def test_is_propagator(self):
        assert isinstance(EphemerisPropagator(_pair()), Propagator)

    def test_sorted_by_time(self):
        samples = _pair()
        prop = EphemerisPropagator(reversed(samples))
        assert [s.t for s in prop.samples] == [T0, _at(60.0)]

    def test_unset_timestamps_dropped(self):
        samples = _pair() + [
            EphemerisSample(None, (1.0, 2.0, 3.0), (0.0, 0.0, 0.0)),
            EphemerisSample(datetime(1970, 1, 1, tzinfo=timezone.utc), (1.0, 2.0, 3.0), (0.0, 0.0, 0.0)),
        ]
        prop = EphemerisPropagator(samples)
        assert len(prop.samples) == 2

    def test_empty(self):
        prop = EphemerisPropagator([])
        assert prop.propagate(T0).is_zero()
        assert not prop.has_sgp4
        assert not prop.is_epoch_state_set()
        assert prop.try_get_orbital_period_seconds() is None
        assert prop.try_get_keplerian_elements() is None

    def test_only_unset_samples_is_empty(self):
        prop = EphemerisPropagator([EphemerisSample(None, R0, V0)])
        assert prop.samples == ()
        assert prop.propagate(T0).is_zero()

    def test_repr(self):
        assert repr(EphemerisPropagator(_pair())) == "EphemerisPropagator(samples=2, has_sgp4=False)"


# ──────────────────────────────────────────────
# Interpolation
# ──────────────────────────────────────────────

class TestEphemerisInterpolation:
    def test_midpoint(self):
        state = EphemerisPropagator(_pair()).propagate(_at(30.0))
        expected = state_km_to_render((6995.0, 225.0, 0.0), (-0.25, 7.5, 0.0))
        assert jnp.allclose(state.position, expected.position, atol=1e-12)
        assert jnp.allclose(state.velocity, expected.velocity, atol=1e-12)

    def test_render_units(self):
        state = EphemerisPropagator(_pair()).propagate(_at(30.0))
        assert jnp.allclose(state.position, jnp.array([6995.0, 0.0, -225.0]) / R_EARTH_KM, atol=1e-12)

    def test_clamp_before_first(self):
        state = EphemerisPropagator(_pair()).propagate(_at(-10.0))
        _assert_state_equal(state, state_km_to_render(R0, V0))

    def test_clamp_after_last(self):
        state = EphemerisPropagator(_pair()).propagate(_at(70.0))
        _assert_state_equal(state, state_km_to_render(R1, V1))

    def test_exact_sample_times(self):
        prop = EphemerisPropagator(_pair())
        _assert_state_equal(prop.propagate(T0), state_km_to_render(R0, V0))
        _assert_state_equal(prop.propagate(_at(60.0)), state_km_to_render(R1, V1))

    def test_second_bracket(self):
        samples = _pair() + [EphemerisSample(_at(120.0), (6970.0, 900.0, 10.0), (-1.0, 7.4, 0.2))]
        state = EphemerisPropagator(samples).propagate(_at(75.0))
        r = tuple(a + 0.25 * (b - a) for a, b in zip(R1, (6970.0, 900.0, 10.0)))
        v = tuple(a + 0.25 * (b - a) for a, b in zip(V1, (-1.0, 7.4, 0.2)))
        expected = state_km_to_render(r, v)
        assert jnp.allclose(state.position, expected.position, atol=1e-12)
        assert jnp.allclose(state.velocity, expected.velocity, atol=1e-12)

    def test_naive_query_time(self):
        prop = EphemerisPropagator(_pair())
        aware = prop.propagate(_at(30.0))
        naive = prop.propagate(_at(30.0).replace(tzinfo=None))
        _assert_state_equal(aware, naive)

    def test_plain_samples_have_no_period(self):
        prop = EphemerisPropagator(_pair())
        assert not prop.has_sgp4
        assert not prop.is_epoch_state_set()
        assert prop.try_get_orbital_period_seconds() is None


# ──────────────────────────────────────────────
# Single sample
# ──────────────────────────────────────────────

class TestEphemerisSingleSample:
    def test_delegates_to_synthesized_tle(self):
        r = 7000.0
        sample = EphemerisSample(T0, (r, 0.0, 0.0), (0.0, math.sqrt(GM_EARTH_KM / r), 0.0))
        prop = EphemerisPropagator([sample])
        assert prop.has_sgp4
        assert prop.is_epoch_state_set()

        reference = _synthesized(sample)
        for minutes in (0.0, 30.0, 600.0):
            t = T0 + timedelta(minutes=minutes)
            _assert_state_equal(prop.propagate(t), reference.propagate(t))

    def test_single_sample_period(self):
        r = 7000.0
        sample = EphemerisSample(T0, (r, 0.0, 0.0), (0.0, math.sqrt(GM_EARTH_KM / r), 0.0))
        period = EphemerisPropagator([sample]).try_get_orbital_period_seconds()
        assert period == pytest.approx(2.0 * math.pi * math.sqrt(r**3 / GM_EARTH_KM), rel=1e-8)

    def test_single_sample_orbits(self):
        """The synthesized model moves the satellite away from the sample position."""
        r = 7000.0
        sample = EphemerisSample(T0, (r, 0.0, 0.0), (0.0, math.sqrt(GM_EARTH_KM / r), 0.0))
        prop = EphemerisPropagator([sample])
        p0 = prop.propagate(T0).position
        p1 = prop.propagate(T0 + timedelta(minutes=25)).position
        assert float(jnp.linalg.norm(p1 - p0)) > 0.5

    def test_unsynthesizable_sample_is_static(self):
        sample = EphemerisSample(T0, (7000.0, 0.0, 0.0), (0.0, 12.0, 0.0))
        prop = EphemerisPropagator([sample])
        assert not prop.has_sgp4
        assert not prop.is_epoch_state_set()
        _assert_state_equal(prop.propagate(_at(3600.0)), state_km_to_render(sample.position_km, sample.velocity_kms))
        assert prop.try_get_keplerian_elements() is None


# ──────────────────────────────────────────────
# Epoch state estimates
# ──────────────────────────────────────────────

class TestEphemerisCovariance:
    def test_nearest_sample_model(self):
        samples = _pair((COV, COV))
        prop = EphemerisPropagator(samples)
        assert prop.has_sgp4
        assert prop.is_epoch_state_set()

        p0, p1 = _synthesized(samples[0]), _synthesized(samples[1])
        _assert_state_equal(prop.propagate(_at(10.0)), p0.propagate(_at(10.0)))
        _assert_state_equal(prop.propagate(_at(50.0)), p1.propagate(_at(50.0)))
        _assert_state_equal(prop.propagate(_at(-600.0)), p0.propagate(_at(-600.0)))
        _assert_state_equal(prop.propagate(_at(600.0)), p1.propagate(_at(600.0)))

    def test_tie_goes_to_earlier_sample(self):
        samples = _pair((COV, COV))
        prop = EphemerisPropagator(samples)
        _assert_state_equal(prop.propagate(_at(30.0)), _synthesized(samples[0]).propagate(_at(30.0)))

    def test_sample_without_model_interpolates(self):
        samples = _pair((None, COV))
        prop = EphemerisPropagator(samples)
        assert prop.has_sgp4

        state = prop.propagate(_at(15.0))
        r = tuple(a + 0.25 * (b - a) for a, b in zip(R0, R1))
        v = tuple(a + 0.25 * (b - a) for a, b in zip(V0, V1))
        expected = state_km_to_render(r, v)
        assert jnp.allclose(state.position, expected.position, atol=1e-12)
        assert jnp.allclose(state.velocity, expected.velocity, atol=1e-12)

        _assert_state_equal(prop.propagate(_at(45.0)), _synthesized(samples[1]).propagate(_at(45.0)))

    def test_period_from_first_model(self):
        samples = _pair((None, COV))
        period = EphemerisPropagator(samples).try_get_orbital_period_seconds()
        assert period == pytest.approx(_synthesized(samples[1]).try_get_orbital_period_seconds())

    def test_no_model_synthesized(self):
        samples = [
            EphemerisSample(T0, (7000.0, 0.0, 0.0), (0.0, 12.0, 0.0), COV),
            EphemerisSample(_at(60.0), (7000.0, 700.0, 0.0), (0.0, 12.0, 0.0), COV),
        ]
        prop = EphemerisPropagator(samples)
        assert not prop.has_sgp4
        assert prop.is_epoch_state_set()
        assert prop.try_get_orbital_period_seconds() is None

        state = prop.propagate(_at(30.0))
        expected = state_km_to_render((7000.0, 350.0, 0.0), (0.0, 12.0, 0.0))
        assert jnp.allclose(state.position, expected.position, atol=1e-12)


# ──────────────────────────────────────────────
# Keplerian elements
# ──────────────────────────────────────────────

class TestEphemerisElements:
    def test_from_earliest_sample(self):
        prop = EphemerisPropagator(reversed(_pair()))
        assert prop.try_get_keplerian_elements() == elements_from_state(R0, V0)

    def test_invalid_first_sample(self):
        samples = [
            EphemerisSample(T0, (3000.0, 0.0, 0.0), (0.0, 7.5, 0.0)),
            EphemerisSample(_at(60.0), R1, V1),
        ]
        assert EphemerisPropagator(samples).try_get_keplerian_elements() is None
