"""
Fixed-width field encoding for mean-element (TLE) text records.

Every emitted line is 68 data characters plus one checksum digit.  The
checksum is the sum of all digit characters plus 1 for each minus sign,
modulo 10, over the first 68 characters.
"""

from __future__ import annotations

import math
from datetime import datetime

from orbitmapper.time import datetime_to_day_of_year

TLE_LINE_LENGTH = 69
TLE_DATA_LENGTH = 68

_FRACTION_SCALE = 100_000_000
_ECC_SCALE = 10_000_000
_ECC_FIELD_MAX = 9_999_999


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def compute_checksum(line: str) -> int:
    """Compute the TLE checksum for a line.

    The checksum is the sum of all digit characters plus 1 for each
    minus sign, modulo 10, computed over the first 68 characters.

    Args:
        line: A TLE line string (the first 68 characters are used).

    Returns:
        The checksum digit (0-9).
    """
    return sum((int(c) if c.isdigit() else c == "-") for c in line[:TLE_DATA_LENGTH]) % 10


def validate_tle_line(line: str, line_number: int) -> None:
    """Validate a TLE line's format and checksum.

    Args:
        line: A TLE line string.
        line_number: Expected line number (1 or 2).

    Raises:
        ValueError: If the line fails format or checksum validation.
    """
    line = line.rstrip()

    if len(line) < TLE_LINE_LENGTH:
        raise ValueError(
            f"TLE line {line_number} is too short ({len(line)} chars, expected 69): {line}"
        )

    if line[0] != str(line_number):
        raise ValueError(f"TLE line {line_number} does not start with '{line_number}': {line}")

    checksum_char = line[TLE_DATA_LENGTH]
    if not checksum_char.isdigit():
        raise ValueError(f"TLE line {line_number} has non-digit checksum: {line}")

    expected = compute_checksum(line)
    actual = int(checksum_char)
    if expected != actual:
        raise ValueError(
            f"TLE line {line_number} checksum mismatch: computed {expected}, found {actual}: {line}"
        )


def finalize_tle_line(data: str) -> str:
    """Pad or cut a data line to 68 characters and append its checksum digit.

    Args:
        data: Line content without checksum.

    Returns:
        The 69-character line.
    """
    data = data[:TLE_DATA_LENGTH].ljust(TLE_DATA_LENGTH)
    return data + str(compute_checksum(data))


def format_tle_epoch(t: datetime) -> str:
    """Encode an absolute time as the ``YYDDD.dddddddd`` epoch field.

    The day fraction is rounded to the nearest 1e-8 day.  When rounding
    carries the fraction to 1.0 the day of year is incremented and the
    fraction restarts at zero.

    Args:
        t: Absolute time.

    Returns:
        The 14-character epoch field.

    Examples:
        ```python
        from datetime import datetime, timezone
        from orbitmapper.tle import format_tle_epoch
        format_tle_epoch(datetime(2024, 2, 1, 12, tzinfo=timezone.utc))  # '24032.50000000'
        ```
    """
    year, doy, fraction = datetime_to_day_of_year(t)

    scaled = _round_half_up(fraction * _FRACTION_SCALE)
    if scaled >= _FRACTION_SCALE:
        scaled -= _FRACTION_SCALE
        doy += 1

    return f"{year % 100:02d}{doy:03d}.{scaled:08d}"


def format_eccentricity(e: float) -> str:
    """Encode an eccentricity as the 7-digit implied-decimal field.

    ``round(e * 1e7)`` clamped to ``[0, 9999999]``; ``0.0003317`` encodes
    as ``'0003317'``.

    Args:
        e: Eccentricity [dimensionless].

    Returns:
        The 7-character field.
    """
    ecc7 = _round_half_up(e * _ECC_SCALE)
    ecc7 = min(_ECC_FIELD_MAX, max(0, ecc7))
    return f"{ecc7:07d}"


def format_angle(deg: float) -> str:
    """Encode an angle in degrees as a right-justified ``8.4f`` field."""
    return f"{deg:8.4f}"


def format_mean_motion(rev_per_day: float) -> str:
    """Encode mean motion in rev/day as a right-justified ``11.8f`` field."""
    return f"{rev_per_day:11.8f}"
