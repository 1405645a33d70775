"""Coordinate conversions between state vectors and orbital elements.

This sub-module provides:

- **Orbit geometry**: the canonical osculating-element derivation from an
  inertial position/velocity pair.
- **Element extraction**: classical elements in rendering units from a
  raw state vector, with physical plausibility guards.
"""

from .state import OrbitGeometry, elements_from_state, orbit_geometry_from_state

__all__ = [
    "OrbitGeometry",
    "elements_from_state",
    "orbit_geometry_from_state",
]
