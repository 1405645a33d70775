"""Keplerian orbit functions.

This sub-module provides:

- **Anomaly conversions**: mean, eccentric and true anomaly, with a
  fixed-iteration and a Newton-Raphson Kepler equation solver.
- **Rates**: mean motion and orbital period.
- **Kepler geometry**: render-frame position and velocity from classical
  elements at a true anomaly.
- **Orbit sampling**: closed one-revolution polylines for drawing.
"""

from .geometry import position_eci_from_elements, velocity_eci_from_elements
from .keplerian import (
    anomaly_eccentric_to_mean,
    anomaly_eccentric_to_true,
    anomaly_mean_to_eccentric,
    anomaly_mean_to_eccentric_fixed_point,
    anomaly_mean_to_true,
    anomaly_true_to_eccentric,
    anomaly_true_to_mean,
    mean_motion,
    orbital_period,
)
from .sampler import MIN_SEGMENTS, OrbitPolyline, sample_orbit_polyline

__all__ = [
    "anomaly_eccentric_to_mean",
    "anomaly_eccentric_to_true",
    "anomaly_mean_to_eccentric",
    "anomaly_mean_to_eccentric_fixed_point",
    "anomaly_mean_to_true",
    "anomaly_true_to_eccentric",
    "anomaly_true_to_mean",
    "mean_motion",
    "orbital_period",
    "position_eci_from_elements",
    "velocity_eci_from_elements",
    "MIN_SEGMENTS",
    "OrbitPolyline",
    "sample_orbit_polyline",
]
