"""
Mean-element (TLE) text records.

Provides the fixed-width field encoders and checksum used to write
two-line element sets, a validator for caller-supplied lines, and
synthesis of a complete record from a single inertial state vector.
Parsing and propagation of records belong to the SGP4 integrator; see
:class:`orbitmapper.propagators.TLEPropagator`.
"""

from orbitmapper.tle._format import (
    TLE_DATA_LENGTH,
    TLE_LINE_LENGTH,
    compute_checksum,
    finalize_tle_line,
    format_eccentricity,
    format_tle_epoch,
    validate_tle_line,
)
from orbitmapper.tle._synthesis import tle_from_state

__all__ = [
    "TLE_DATA_LENGTH",
    "TLE_LINE_LENGTH",
    "compute_checksum",
    "finalize_tle_line",
    "format_eccentricity",
    "format_tle_epoch",
    "validate_tle_line",
    "tle_from_state",
]
