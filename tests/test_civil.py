"""Tests for civil date/time value types and protocols."""

from __future__ import annotations

import datetime

import pytest

from skypos.civil import (
    CivilDate,
    CivilDateTime,
    CivilTime,
    DateLike,
    DateTimeLike,
    Direction,
    days_in_month,
    is_leap_year,
)
from skypos.errors import InvalidDateError, SkyposError


def test_is_leap_year_gregorian_rule() -> None:
    """Divisible by 4, except centuries not divisible by 400."""
    assert is_leap_year(2024)
    assert is_leap_year(2000)
    assert not is_leap_year(1900)
    assert not is_leap_year(2023)


def test_days_in_month_uses_julian_rule_before_reform() -> None:
    """1500 is a Julian leap year; 1900 is not a Gregorian one."""
    assert days_in_month(1500, 2) == 29
    assert days_in_month(1900, 2) == 28
    assert days_in_month(2020, 2) == 29
    assert days_in_month(2021, 4) == 30


def test_civil_date_accepts_day_zero_and_fraction() -> None:
    """'January 0' and fractional days are valid."""
    assert CivilDate(1990, 1, 0.0).day == 0.0
    assert CivilDate(2020, 2, 29.5).day == 29.5


@pytest.mark.parametrize(
    ('year', 'month', 'day'),
    [(2021, 2, 29), (2021, 13, 1), (2021, 0, 1), (1900, 2, 29), (2021, 1, -1)],
)
def test_civil_date_rejects_invalid_components(year: int, month: int, day: float) -> None:
    """Out-of-range month or day raises InvalidDateError."""
    with pytest.raises(InvalidDateError, match='Invalid date'):
        CivilDate(year, month, day)


@pytest.mark.parametrize('day', [5, 10, 14, 14.999])
def test_civil_date_rejects_days_skipped_by_gregorian_reform(day: float) -> None:
    """1582 October 5-14 never happened."""
    with pytest.raises(InvalidDateError, match='skipped by the Gregorian reform'):
        CivilDate(1582, 10, day)


def test_civil_date_accepts_days_around_gregorian_reform() -> None:
    """October 4 (to its last instant) and October 15 are valid."""
    assert CivilDate(1582, 10, 4.99).day == 4.99
    assert CivilDate(1582, 10, 15).day == 15
    assert CivilDate(1583, 10, 10).day == 10


def test_invalid_date_error_is_value_error() -> None:
    """InvalidDateError belongs to both the skypos and ValueError families."""
    with pytest.raises(ValueError):
        CivilDateTime(2021, 4, 31)
    with pytest.raises(SkyposError):
        CivilDate(2021, 4, 31)


def test_stdlib_datetime_satisfies_protocols() -> None:
    """datetime values are accepted wherever DateLike/DateTimeLike is expected."""
    assert isinstance(datetime.date(2020, 1, 1), DateLike)
    assert isinstance(datetime.datetime(2020, 1, 1, 12), DateTimeLike)


def test_from_datetime_folds_microseconds() -> None:
    """Microseconds become fractional seconds."""
    value = CivilDateTime.from_datetime(datetime.datetime(2021, 1, 2, 3, 4, 5, 500000))
    assert value == CivilDateTime(2021, 1, 2, 3, 4, 5.5)


def test_combine_and_split() -> None:
    """A CivilDateTime splits back into its date and time."""
    dt = CivilDateTime.combine(CivilDate(1980, 4, 22), CivilTime(14, 36, 51.67))
    assert dt.date() == CivilDate(1980, 4, 22)
    assert dt.time() == CivilTime(14, 36, 51.67)


def test_iso_8601() -> None:
    """Formatting uses whole day and second."""
    assert CivilDateTime(2021, 2, 1, 0, 0, 58.0).iso_8601() == '2021-02-01T00:00:58'


def test_civil_time_sign() -> None:
    """A minus sign on any component marks the value negative."""
    assert CivilTime(0, -30, 0.0).is_negative
    assert CivilTime(0, 0, -1.5).is_negative
    assert not CivilTime(1, 2, 3.0).is_negative


def test_direction_parse() -> None:
    """Full names and initials parse case-insensitively."""
    assert Direction.parse('W') is Direction.WEST
    assert Direction.parse(' East ') is Direction.EAST
    assert Direction.parse('north') is Direction.NORTH
    with pytest.raises(ValueError, match='Unknown direction'):
        Direction.parse('up')
