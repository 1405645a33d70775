"""
orbitmapper converts between classical orbital elements, two-line mean-element
records and timestamped state samples, and places satellites in a render frame
measured in Earth radii.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    TWO_PI,
    R_EARTH_KM,
    GM_EARTH_KM,
    SECONDS_PER_DAY,
)

from .config import set_dtype, get_dtype, ReferenceBody, EARTH

from .types import OrbitalElements, CartesianState, EphemerisSample

from .frames import (
    remap_eci_to_render,
    state_km_to_render,
)

from .orbits import (
    position_eci_from_elements,
    velocity_eci_from_elements,
    sample_orbit_polyline,
    OrbitPolyline,
)

from .coordinates import (
    OrbitGeometry,
    orbit_geometry_from_state,
    elements_from_state,
)

from .tle import (
    compute_checksum,
    validate_tle_line,
    tle_from_state,
)

from .propagators import (
    Propagator,
    KeplerPropagator,
    TLEPropagator,
    EphemerisPropagator,
)

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "TWO_PI",
    "R_EARTH_KM",
    "GM_EARTH_KM",
    "SECONDS_PER_DAY",
    # Config
    "set_dtype",
    "get_dtype",
    "ReferenceBody",
    "EARTH",
    # Types
    "OrbitalElements",
    "CartesianState",
    "EphemerisSample",
    # Frames
    "remap_eci_to_render",
    "state_km_to_render",
    # Orbits
    "position_eci_from_elements",
    "velocity_eci_from_elements",
    "sample_orbit_polyline",
    "OrbitPolyline",
    # Coordinates
    "OrbitGeometry",
    "orbit_geometry_from_state",
    "elements_from_state",
    # TLE
    "compute_checksum",
    "validate_tle_line",
    "tle_from_state",
    # Propagators
    "Propagator",
    "KeplerPropagator",
    "TLEPropagator",
    "EphemerisPropagator",
]
