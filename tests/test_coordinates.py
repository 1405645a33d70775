"""Tests for state-vector element extraction."""

import math

import jax.numpy as jnp
import pytest

from orbitmapper.config import EARTH, ReferenceBody
from orbitmapper.constants import GM_EARTH_KM, R_EARTH_KM
from orbitmapper.coordinates import elements_from_state, orbit_geometry_from_state
from orbitmapper.frames import state_km_to_render
from orbitmapper.orbits import anomaly_true_to_mean, position_eci_from_elements
from orbitmapper.types import OrbitalElements

_DEG_TOL = 1e-8
_ECC_TOL = 1e-10


def _state_from_elements(a, e, i, raan, argp, nu, mu=GM_EARTH_KM):
    """Inertial state [km, km/s] from classical elements (angles in degrees)."""
    i, raan, argp, nu = (math.radians(x) for x in (i, raan, argp, nu))
    p = a * (1.0 - e * e)
    r = p / (1.0 + e * math.cos(nu))
    r_pqw = (r * math.cos(nu), r * math.sin(nu), 0.0)
    s = math.sqrt(mu / p)
    v_pqw = (-s * math.sin(nu), s * (e + math.cos(nu)), 0.0)

    cO, sO = math.cos(raan), math.sin(raan)
    ci, si = math.cos(i), math.sin(i)
    cw, sw = math.cos(argp), math.sin(argp)
    R = (
        (cO * cw - sO * sw * ci, -cO * sw - sO * cw * ci, sO * si),
        (sO * cw + cO * sw * ci, -sO * sw + cO * cw * ci, -cO * si),
        (sw * si, cw * si, ci),
    )

    def rot(vec):
        return [sum(R[row][k] * vec[k] for k in range(3)) for row in range(3)]

    return rot(r_pqw), rot(v_pqw)


def _circular(r_km):
    return [r_km, 0.0, 0.0], [0.0, math.sqrt(GM_EARTH_KM / r_km), 0.0]


def _angle_diff(a, b):
    """Smallest signed difference between two angles in degrees."""
    return (a - b + 180.0) % 360.0 - 180.0


# ──────────────────────────────────────────────
# Element extraction
# ──────────────────────────────────────────────

class TestElementsFromState:
    def test_circular_equatorial(self):
        el = elements_from_state(*_circular(7000.0))
        assert el is not None
        assert el.semi_major_axis == pytest.approx(7000.0 / R_EARTH_KM, rel=1e-12)
        assert el.eccentricity < 1e-12
        assert el.inclination_deg == pytest.approx(0.0, abs=_DEG_TOL)
        assert el.raan_deg == 0.0
        assert el.arg_periapsis_deg == 0.0
        assert el.mean_anomaly_deg == pytest.approx(0.0, abs=_DEG_TOL)

    def test_circular_round_trip_through_geometry(self):
        """Kepler geometry of the extracted elements reproduces the input position."""
        v = math.sqrt(GM_EARTH_KM / 7000.0)
        r_km, v_kms = [0.0, 7000.0, 0.0], [-v, 0.0, 0.0]
        el = elements_from_state(r_km, v_kms)
        assert el.mean_anomaly_deg == pytest.approx(90.0, abs=_DEG_TOL)

        expected = state_km_to_render(r_km, v_kms).position
        p = position_eci_from_elements(el, math.radians(el.mean_anomaly_deg))
        assert jnp.allclose(p, expected, atol=1e-10)
        assert jnp.allclose(p, jnp.array([0.0, 0.0, -7000.0 / R_EARTH_KM]), atol=1e-10)

    @pytest.mark.parametrize(
        ("a", "e", "i", "raan", "argp", "nu"),
        [
            (8000.0, 0.1, 30.0, 40.0, 60.0, 50.0),
            (26560.0, 0.01, 55.0, 300.0, 10.0, 200.0),
            (24500.0, 0.7, 63.4, 280.0, 270.0, 330.0),
            (7200.0, 0.05, 98.7, 15.0, 135.0, 100.0),
        ],
    )
    def test_inclined_eccentric_round_trip(self, a, e, i, raan, argp, nu):
        r_km, v_kms = _state_from_elements(a, e, i, raan, argp, nu)
        el = elements_from_state(r_km, v_kms)
        assert el is not None

        M = float(anomaly_true_to_mean(nu, e, use_degrees=True)) % 360.0
        assert el.semi_major_axis * R_EARTH_KM == pytest.approx(a, rel=1e-10)
        assert el.eccentricity == pytest.approx(e, abs=_ECC_TOL)
        assert el.inclination_deg == pytest.approx(i, abs=_DEG_TOL)
        assert abs(_angle_diff(el.raan_deg, raan)) < _DEG_TOL
        assert abs(_angle_diff(el.arg_periapsis_deg, argp)) < 1e-6
        assert abs(_angle_diff(el.mean_anomaly_deg, M)) < 1e-6

    def test_geometry_reproduces_position(self):
        r_km, v_kms = _state_from_elements(9000.0, 0.2, 45.0, 75.0, 120.0, 33.0)
        el = elements_from_state(r_km, v_kms)
        geom = orbit_geometry_from_state(r_km, v_kms)
        p = position_eci_from_elements(el, geom.true_anomaly)
        assert jnp.allclose(p, state_km_to_render(r_km, v_kms).position, atol=1e-9)

    def test_angles_wrapped(self):
        r_km, v_kms = _state_from_elements(12000.0, 0.3, 120.0, 350.0, 355.0, 359.0)
        el = elements_from_state(r_km, v_kms)
        for angle in (el.inclination_deg, el.raan_deg, el.arg_periapsis_deg, el.mean_anomaly_deg):
            assert 0.0 <= angle < 360.0

    def test_vallado_rv2coe(self):
        """Vallado Example 2-5."""
        r_km = [6524.834, 6862.875, 6448.296]
        v_kms = [4.901327, 5.533756, -1.976341]
        el = elements_from_state(r_km, v_kms)
        geom = orbit_geometry_from_state(r_km, v_kms)
        assert el.semi_major_axis * R_EARTH_KM == pytest.approx(36127.343, abs=0.5)
        assert el.eccentricity == pytest.approx(0.832853, abs=1e-5)
        assert el.inclination_deg == pytest.approx(87.870, abs=1e-2)
        assert el.raan_deg == pytest.approx(227.898, abs=1e-2)
        assert el.arg_periapsis_deg == pytest.approx(53.38, abs=2e-2)
        assert math.degrees(geom.true_anomaly) == pytest.approx(92.335, abs=1e-2)

    def test_equatorial_eccentric_uses_true_longitude(self):
        """No node line: periapsis argument is zero and the anomaly is the true longitude."""
        el = elements_from_state([0.0, -7000.0, 0.0], [8.5, 0.0, 0.0])
        assert el is not None
        assert el.eccentricity > 0.1
        assert el.raan_deg == 0.0
        assert el.arg_periapsis_deg == 0.0
        geom = orbit_geometry_from_state([0.0, -7000.0, 0.0], [8.5, 0.0, 0.0])
        assert math.degrees(geom.true_anomaly) == pytest.approx(270.0, abs=_DEG_TOL)

    def test_custom_body_units(self):
        body = ReferenceBody(radius_km=1000.0)
        el = elements_from_state(*_circular(7000.0), body=body)
        assert el.semi_major_axis == pytest.approx(7.0, rel=1e-12)


class TestElementsFromStateRejections:
    def test_inside_body(self):
        assert elements_from_state(*_circular(6000.0)) is None

    def test_beyond_max_radius(self):
        assert elements_from_state(*_circular(2.0e6)) is None

    def test_semi_major_axis_inside_body(self):
        """Apoapsis state of an orbit whose mean radius is below the surface."""
        r_km, v_kms = _state_from_elements(5000.0, 0.4, 20.0, 0.0, 0.0, 180.0)
        assert elements_from_state(r_km, v_kms) is None

    def test_hyperbolic(self):
        assert elements_from_state([7000.0, 0.0, 0.0], [0.0, 12.0, 0.0]) is None

    def test_near_parabolic(self):
        v_esc = math.sqrt(2.0 * GM_EARTH_KM / 7000.0)
        assert elements_from_state([7000.0, 0.0, 0.0], [0.0, 0.9999 * v_esc, 0.0]) is None

    def test_zero_velocity(self):
        assert elements_from_state([7000.0, 0.0, 0.0], [0.0, 0.0, 0.0]) is None

    def test_radial_velocity(self):
        assert elements_from_state([7000.0, 0.0, 0.0], [3.0, 0.0, 0.0]) is None

    @pytest.mark.parametrize(
        ("r_km", "v_kms"),
        [
            ([math.nan, 0.0, 0.0], [0.0, 7.5, 0.0]),
            ([7000.0, 0.0, 0.0], [0.0, math.inf, 0.0]),
            ([0.0, 0.0, 0.0], [0.0, 7.5, 0.0]),
        ],
    )
    def test_non_finite_or_zero(self, r_km, v_kms):
        assert elements_from_state(r_km, v_kms) is None


class TestOrbitGeometry:
    def test_allows_sub_surface_radius(self):
        """Only the element extraction applies the body-radius guard."""
        geom = orbit_geometry_from_state(*_circular(3000.0))
        assert geom is not None
        assert geom.semi_major_axis_km == pytest.approx(3000.0, rel=1e-12)

    def test_mean_motion(self):
        geom = orbit_geometry_from_state(*_circular(7000.0))
        assert geom.mean_motion == pytest.approx(math.sqrt(GM_EARTH_KM / 7000.0**3), rel=1e-12)

    def test_anomalies_consistent(self):
        r_km, v_kms = _state_from_elements(10000.0, 0.25, 10.0, 20.0, 30.0, 140.0)
        geom = orbit_geometry_from_state(r_km, v_kms)
        assert math.degrees(geom.true_anomaly) == pytest.approx(140.0, abs=1e-8)
        assert geom.mean_anomaly == pytest.approx(
            geom.eccentric_anomaly - geom.eccentricity * math.sin(geom.eccentric_anomaly), abs=1e-12
        )

    def test_rejects_hyperbolic(self):
        assert orbit_geometry_from_state([7000.0, 0.0, 0.0], [0.0, 12.0, 0.0]) is None

    def test_uses_body_mu(self):
        body = ReferenceBody(mu_km3_s2=2.0 * GM_EARTH_KM)
        geom = orbit_geometry_from_state(*_circular(7000.0), body=body)
        assert geom.eccentricity == pytest.approx(0.5, rel=1e-9)
        assert EARTH.mu_km3_s2 == GM_EARTH_KM
