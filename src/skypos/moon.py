"""Low-precision position of the Moon (Duffett-Smith section 65).

The Moon's mean orbit at epoch 1990 January 0.0 is corrected for evection,
the annual equation, the equation of the centre and variation, then
projected from the inclined lunar orbit onto the ecliptic. The input time is
UT; delta-T converts it to dynamical time first. Expect arc-minute accuracy.
"""

from __future__ import annotations

import logging
import math

from skypos.angle_utils import normalize_degrees
from skypos.civil import DateTimeLike
from skypos.constants import (
    HOURS_PER_DAY,
    MOON_DAILY_MOTION,
    MOON_LONGITUDE_OF_NODE_AT_EPOCH,
    MOON_LONGITUDE_OF_PERIGEE_AT_EPOCH,
    MOON_MEAN_LONGITUDE_AT_EPOCH,
    MOON_NODE_DAILY_MOTION,
    MOON_ORBIT_INCLINATION,
    MOON_PERIGEE_DAILY_MOTION,
    SECONDS_PER_HOUR,
)
from skypos.coords import EclipticCoord, EquatorialCoord, equatorial_from_ecliptic_on
from skypos.delta_t import delta_t
from skypos.sun import sun_longitude_and_mean_anomaly
from skypos.time_utils import days_since_epoch, decimal_hours_from_time

logger = logging.getLogger(__name__)


def _sin_deg(value: float) -> float:
    return math.sin(math.radians(value))


def moon_ecliptic_position(dt: DateTimeLike) -> EclipticCoord:
    """Ecliptic latitude and longitude of the Moon at a UT date/time."""
    correction = delta_t(dt)
    hours = decimal_hours_from_time(dt) + correction / SECONDS_PER_HOUR
    days = days_since_epoch(dt) + hours / HOURS_PER_DAY
    logger.debug('Moon at %.6f days from epoch (delta-T %.2f s)', days, correction)

    sun_longitude, sun_anomaly = sun_longitude_and_mean_anomaly(days)
    sin_sun_anomaly = _sin_deg(sun_anomaly)

    longitude = normalize_degrees(MOON_DAILY_MOTION * days + MOON_MEAN_LONGITUDE_AT_EPOCH)
    anomaly = normalize_degrees(
        longitude - MOON_PERIGEE_DAILY_MOTION * days - MOON_LONGITUDE_OF_PERIGEE_AT_EPOCH
    )
    node = normalize_degrees(MOON_LONGITUDE_OF_NODE_AT_EPOCH - MOON_NODE_DAILY_MOTION * days)

    evection = 1.2739 * _sin_deg(2.0 * (longitude - sun_longitude) - anomaly)
    annual = 0.1858 * sin_sun_anomaly
    a3 = 0.37 * sin_sun_anomaly
    anomaly += evection - annual - a3

    centre = 6.2886 * _sin_deg(anomaly)
    a4 = 0.214 * _sin_deg(2.0 * anomaly)
    longitude += evection + centre - annual + a4
    longitude += 0.6583 * _sin_deg(2.0 * (longitude - sun_longitude))
    node -= 0.16 * sin_sun_anomaly

    arg = math.radians(longitude - node)
    inc = math.radians(MOON_ORBIT_INCLINATION)
    ecl_longitude = math.degrees(math.atan2(math.sin(arg) * math.cos(inc), math.cos(arg))) + node
    ecl_latitude = math.degrees(math.asin(math.sin(arg) * math.sin(inc)))
    return EclipticCoord(ecl_latitude, normalize_degrees(ecl_longitude))


def moon_equatorial_position(dt: DateTimeLike) -> EquatorialCoord:
    """Right ascension and declination of the Moon at a UT date/time.

    Parameters:
        dt: UT date and time.

    Returns:
        EquatorialCoord; 1979-02-26 16:00 UT gives about 22h33m, -8d01m.
    """
    return equatorial_from_ecliptic_on(moon_ecliptic_position(dt), dt)
