"""Greenwich Mean Sidereal Time (GMST) for UTC instants.

GMST at 0h is evaluated with the IAU 1982 polynomial in Julian centuries
since J2000.0, then advanced to the requested instant at the Earth's
rotation rate:

    θg(0h) = 24110.54841 + 8640184.812866·Tu + 0.093104·Tu² − 6.2×10⁻⁶·Tu³

UTC is used in place of UT1, which introduces a sub-second systematic error.

References:
    - Kelso, T.S. "Orbital Coordinate Systems, Part II"
      https://celestrak.org/columns/v02n02/
    - Vallado, D. (2013). Fundamentals of Astrodynamics and Applications.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone

SECONDS_PER_DAY = 86400.0
"""Seconds in a solar day."""

JD_J2000 = 2451545.0
"""Julian date of 2000-01-01 12:00 UTC."""

DAYS_PER_JULIAN_CENTURY = 36525.0

EARTH_ROTATION_RATE = 7.29211510e-5
"""Earth rotation rate (rad/s)."""

SIDEREAL_SECONDS_PER_UTC_SECOND = EARTH_ROTATION_RATE * SECONDS_PER_DAY / (2.0 * math.pi)
"""Sidereal seconds elapsed per UTC second (≈1.0027379)."""

_J2000_DATE = date(2000, 1, 1)


def _as_utc(instant: datetime) -> datetime:
    # naive datetimes are taken to already be UTC
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(timezone.utc).replace(tzinfo=None)


def wrap_to_day(seconds: float) -> float:
    """Wrap a seconds value into ``[0, 86400)``."""
    wrapped = seconds - SECONDS_PER_DAY * math.floor(seconds / SECONDS_PER_DAY)
    # tiny negative inputs round up to exactly one day
    if wrapped >= SECONDS_PER_DAY:
        wrapped -= SECONDS_PER_DAY
    return wrapped


def julian_date(instant: datetime) -> float:
    """Julian date of a UTC instant.

    Args:
        instant: UTC datetime (naive values are interpreted as UTC).

    Returns:
        Julian date (days).
    """
    utc = _as_utc(instant)
    days = (utc.date() - _J2000_DATE).days - 0.5
    return JD_J2000 + days + _seconds_since_midnight(utc) / SECONDS_PER_DAY


def sidereal_angle_at_midnight(julian_day: float) -> float:
    """GMST at 0h UT for the given Julian date, in unwrapped seconds.

    Args:
        julian_day: Julian date of a UTC midnight.

    Returns:
        Sidereal time in seconds, not wrapped to a single day.
    """
    tu = (julian_day - JD_J2000) / DAYS_PER_JULIAN_CENTURY
    return 24110.54841 + tu * (8640184.812866 + tu * (0.093104 - tu * 6.2e-6))


def gmst_seconds(instant: datetime) -> float:
    """Compute Greenwich Mean Sidereal Time.

    The instant is floored to its UTC midnight, GMST is evaluated there, and
    the seconds elapsed since midnight are added at the sidereal rate.

    Args:
        instant: UTC datetime with sub-second precision (naive values are
            interpreted as UTC).

    Returns:
        GMST in seconds, wrapped to ``[0, 86400)``.
    """
    utc = _as_utc(instant)
    midnight_days = (utc.date() - _J2000_DATE).days - 0.5
    theta0 = sidereal_angle_at_midnight(JD_J2000 + midnight_days)
    elapsed = _seconds_since_midnight(utc)
    return wrap_to_day(theta0 + elapsed * SIDEREAL_SECONDS_PER_UTC_SECOND)


def gmst_radians(instant: datetime) -> float:
    """GMST as an angle in ``[0, 2π)`` radians."""
    angle = gmst_seconds(instant) * (2.0 * math.pi / SECONDS_PER_DAY)
    return angle if angle < 2.0 * math.pi else 0.0


def format_sidereal(seconds: float) -> str:
    """Render sidereal seconds as ``HH:MM:SS.ssss``."""
    hours, rem = divmod(seconds, 3600.0)
    minutes, secs = divmod(rem, 60.0)
    # avoid printing 60.0000 after rounding
    if round(secs, 4) >= 60.0:
        secs = 0.0
        minutes += 1
        if minutes >= 60:
            minutes -= 60
            hours += 1
    return f"{int(hours) % 24:02d}:{int(minutes):02d}:{secs:07.4f}"


def format_instant(instant: datetime) -> str:
    """Render a UTC instant as ``YYYY-MM-DDTHH:MM:SS.ffffffZ``."""
    return _as_utc(instant).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _seconds_since_midnight(utc: datetime) -> float:
    return utc.hour * 3600 + utc.minute * 60 + utc.second + utc.microsecond / 1e6
