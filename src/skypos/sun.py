"""Position of the Sun and the equation of time (Duffett-Smith sections 46-51)."""

from __future__ import annotations

import math

from skypos.angle_utils import normalize_degrees
from skypos.civil import (
    CivilDate,
    CivilDateTime,
    CivilTime,
    DateLike,
    DateTimeLike,
    date_parts,
)
from skypos.constants import (
    DAYS_PER_TROPICAL_YEAR,
    DEGREES_PER_CIRCLE,
    HOURS_PER_DAY,
    SUN_ECLIPTIC_LONGITUDE_AT_EPOCH,
    SUN_LONGITUDE_OF_PERIGEE,
)
from skypos.coords import EclipticCoord, EquatorialCoord, equatorial_from_ecliptic_on
from skypos.orbits import solve_kepler, true_anomaly
from skypos.sidereal import ut_from_gst
from skypos.time_utils import (
    days_since_epoch,
    decimal_hours_from_time,
    local_from_ut,
    time_from_decimal_hours,
    ut_from_local,
)


def sun_longitude_and_mean_anomaly(days: float) -> tuple[float, float]:
    """Sun's ecliptic longitude and mean anomaly, both in degrees.

    Parameters:
        days: Days since the epoch 1990 January 0.0.

    Returns:
        (longitude in [0, 360), mean anomaly in [0, 360)).
    """
    n = normalize_degrees(DEGREES_PER_CIRCLE / DAYS_PER_TROPICAL_YEAR * days)
    mean_anomaly = n + SUN_ECLIPTIC_LONGITUDE_AT_EPOCH - SUN_LONGITUDE_OF_PERIGEE
    if mean_anomaly < 0.0:
        mean_anomaly += DEGREES_PER_CIRCLE
    ecc_anomaly = solve_kepler(math.radians(mean_anomaly))
    v = math.degrees(true_anomaly(ecc_anomaly))
    return (normalize_degrees(v + SUN_LONGITUDE_OF_PERIGEE), mean_anomaly)


def ecliptic_position_of_sun(date: DateLike) -> EclipticCoord:
    """Ecliptic position of the Sun (latitude is zero by definition)."""
    longitude, _ = sun_longitude_and_mean_anomaly(days_since_epoch(date))
    return EclipticCoord(0.0, longitude)


def equatorial_position_of_sun(date: DateLike) -> EquatorialCoord:
    """Right ascension and declination of the Sun at the given date.

    1988 July 27.0 gives 8h26m04s, +19d12m43s.
    """
    return equatorial_from_ecliptic_on(ecliptic_position_of_sun(date), date)


def equation_of_time_from_gst(date: DateLike) -> CivilTime:
    """Equation of time (apparent minus mean solar time) for a date.

    The Sun's right ascension on ``date`` is read as a GST and converted to
    UT; the equation of time is ``12h - UT``. A fractional day selects the
    instant at which the Sun's position is evaluated.

    Parameters:
        date: Any DateLike; a clock part, if present, is ignored.

    Returns:
        Signed CivilTime; 1980 July 27.5 gives about -6m25s.
    """
    sun = equatorial_position_of_sun(date)
    ut = ut_from_gst(CivilDateTime.combine(date, sun.ra_hms))
    return time_from_decimal_hours(12.0 - decimal_hours_from_time(ut))


def equation_of_time_from_ut(ut: DateTimeLike) -> CivilTime:
    """Equation of time with the Sun evaluated at the given UT instant."""
    year, month, day = date_parts(ut)
    instant = CivilDate(year, month, day + decimal_hours_from_time(ut) / HOURS_PER_DAY)
    return equation_of_time_from_gst(instant)


def eot_corrected_ut_from_local(dt: DateTimeLike, zone: float) -> CivilDateTime:
    """UT of a local civil time, shifted by the equation of time.

    Parameters:
        dt: Local civil date/time.
        zone: Zone offset in hours east of Greenwich.
    """
    ut = ut_from_local(dt, zone)
    return local_from_ut(ut, decimal_hours_from_time(equation_of_time_from_ut(ut)))
