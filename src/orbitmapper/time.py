"""Absolute-time helpers.

Absolute times are :class:`datetime.datetime` values in UTC.  Naive
datetimes are read as UTC; aware ones are converted.  These helpers turn
them into the split Julian Date the SGP4 integrator expects and into the
year / day-of-year pieces of a mean-element epoch field.

The core holds no clock of its own: callers pass the simulation time
into every ``propagate`` call.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from orbitmapper.constants import JD2000, JD_MJD_OFFSET, SECONDS_PER_DAY

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_J2000 = datetime(2000, 1, 1, 12, tzinfo=timezone.utc)


def as_utc(t: datetime) -> datetime:
    """Return ``t`` as an aware UTC datetime.

    Args:
        t: Naive (read as UTC) or aware datetime.

    Returns:
        Aware datetime with ``tzinfo=timezone.utc``.
    """
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc)


def is_unset_time(t: datetime | None) -> bool:
    """Return True for the "unset" timestamp sentinel.

    ``None`` and the Unix epoch (the value of a default-constructed
    system-clock time point) both count as unset.
    """
    return t is None or as_utc(t) == _UNIX_EPOCH


def seconds_between(t0: datetime, t1: datetime) -> float:
    """Return ``t1 - t0`` in seconds."""
    return (as_utc(t1) - as_utc(t0)).total_seconds()


def caldate_to_mjd(year: int, month: int, day: int) -> int:
    """Convert a calendar date to the Modified Julian Date of its midnight.

    Algorithm is only valid from year 1583 onward.

    References:

        1. Montenbruck, O., & Gill, E. (2012). *Satellite Orbits: Models, Methods and Applications*. Springer Science & Business Media.
    """
    if month <= 2:
        year -= 1
        month += 12

    b = year // 400 - year // 100 + year // 4
    return 365 * year - 679004 + b + int(30.6001 * (month + 1)) + day


def datetime_to_jd(t: datetime) -> tuple[float, float]:
    """Split an absolute time into whole and fractional Julian Date.

    The whole part is the Julian Date of the preceding UTC midnight (it
    always ends in ``.5``) and the fraction is the elapsed part of that
    day, the same split ``sgp4.api.jday`` produces.

    Args:
        t: Absolute time.

    Returns:
        Tuple ``(jd, fr)``.
    """
    t = as_utc(t)
    jd = caldate_to_mjd(t.year, t.month, t.day) + JD_MJD_OFFSET
    seconds = t.hour * 3600 + t.minute * 60 + t.second + t.microsecond / 1e6
    return float(jd), seconds / SECONDS_PER_DAY


def jd_to_datetime(jd: float, fr: float = 0.0) -> datetime:
    """Convert a (possibly split) Julian Date to an aware UTC datetime.

    The result is rounded to the microsecond.
    """
    days = (jd - JD2000) + fr
    return _J2000 + timedelta(days=days)


def datetime_to_day_of_year(t: datetime) -> tuple[int, int, float]:
    """Return ``(year, day_of_year, day_fraction)`` for an absolute time.

    ``day_of_year`` is 1-based and ``day_fraction`` is in ``[0, 1)``.
    """
    t = as_utc(t)
    doy = t.timetuple().tm_yday
    seconds = t.hour * 3600 + t.minute * 60 + t.second + t.microsecond / 1e6
    return t.year, doy, seconds / SECONDS_PER_DAY


def datetime_to_posix(t: datetime) -> float:
    """Return seconds since the Unix epoch as a float."""
    return (as_utc(t) - _UNIX_EPOCH).total_seconds()
