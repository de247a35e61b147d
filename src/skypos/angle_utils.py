"""Angle reduction, clamping, and sexagesimal parsing/formatting."""

from __future__ import annotations

import math
import re

from skypos.constants import (
    ARCMIN_PER_DEGREE,
    ARCSEC_PER_DEGREE,
    DEGREES_PER_CIRCLE,
    HOURS_PER_DAY,
)

_SEXAGESIMAL_SPLIT = re.compile(r'[\s:hdmsHDMS°\'"]+')


def carry_over(value: float, modulus: float) -> tuple[float, int]:
    """Reduce ``value`` into ``[0, modulus)`` and return the signed carry.

    The one carry primitive used for seconds to minutes, minutes to hours,
    hours to days and degrees to revolutions. Negative values borrow: the
    remainder stays non-negative and the quotient carries the sign.

    Parameters:
        value: Value to reduce.
        modulus: Positive base (60, 24, 360, ...).

    Returns:
        (remainder, quotient) with ``value == quotient * modulus + remainder``.

    Examples:
        ``carry_over(121.0, 60.0) == (1.0, 2)``,
        ``carry_over(-61.0, 60.0) == (59.0, -2)``,
        ``carry_over(-60.0, 60.0) == (0.0, -1)``.
    """
    quotient = math.floor(value / modulus)
    remainder = value - quotient * modulus
    # Round-off on tiny negative values can land exactly on the modulus.
    if remainder >= modulus:
        remainder -= modulus
        quotient += 1
    return (remainder, int(quotient))


def normalize_degrees(value: float) -> float:
    """Reduce an angle in degrees into [0, 360)."""
    return carry_over(value, DEGREES_PER_CIRCLE)[0]


def normalize_hours(value: float) -> float:
    """Reduce a time or hour angle in hours into [0, 24)."""
    return carry_over(value, HOURS_PER_DAY)[0]


def clamp_unit(value: float) -> float:
    """Clamp an asin/acos argument into [-1, 1] against floating round-off."""
    return max(-1.0, min(1.0, value))


def parse_angle(string: str) -> float | None:
    """Parse a sexagesimal or decimal angle into decimal units.

    Accepts one to three numbers separated by blanks, colons, or unit marks
    (``"12 30 45"``, ``"-8:13:30"``, ``"5h13m31.7s"``, ``"139d41'10\\""``,
    ``"-16.5"``). Only the first number may carry a sign, which applies to the
    whole value, so ``"-0 30"`` is -0.5. The result has the unit of the first
    number (hours or degrees).

    Returns:
        The decimal value, or None if the string is not an angle.
    """
    s = string.strip()
    if not s:
        return None
    negative = s.startswith('-')
    parts = [p for p in _SEXAGESIMAL_SPLIT.split(s.lstrip('+-')) if p]
    if not 1 <= len(parts) <= 3:
        return None
    try:
        values = [float(p) for p in parts]
    except ValueError:
        return None
    if any(v < 0 for v in values):
        return None
    value = values[0]
    if len(values) >= 2:
        value += values[1] / ARCMIN_PER_DEGREE
    if len(values) == 3:
        value += values[2] / ARCSEC_PER_DEGREE
    return -value if negative else value


def dms_string(value: float, separator: str = 'dms', ndecimal: int = 2) -> str:
    """Format a decimal angle as sign, whole units, minutes, seconds.

    Parameters:
        value: Angle in degrees (or hours with ``separator='hms'``).
        separator: Three unit marks placed after each field, e.g. ``'hms'``,
            ``"°'\\""``, or ``'::'`` + blank.
        ndecimal: Decimal places of the seconds field.

    Returns:
        Text such as ``'+19d12m42.52s'`` or ``'08h26m03.81s'``. Hours-style
        separators suppress the plus sign.
    """
    marks = (separator + '   ')[:3]
    sign = '-' if value < 0 else ('' if marks[0] == 'h' else '+')
    scale = 10**ndecimal
    total = round(abs(value) * ARCSEC_PER_DEGREE * scale)
    units, rest = divmod(total, int(ARCSEC_PER_DEGREE) * scale)
    minutes, seconds = divmod(rest, int(ARCMIN_PER_DEGREE) * scale)
    whole_sec, frac_sec = divmod(seconds, scale)
    sec_text = f'{whole_sec:02d}' + (f'.{frac_sec:0{ndecimal}d}' if ndecimal > 0 else '')
    return f'{sign}{units:02d}{marks[0]}{minutes:02d}{marks[1]}{sec_text}{marks[2]}'.rstrip()
