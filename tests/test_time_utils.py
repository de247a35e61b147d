"""Tests for calendar and clock arithmetic and date/time parsing."""

from __future__ import annotations

import datetime

import julian
import pytest

from skypos import time_utils
from skypos.civil import CivilDate, CivilDateTime, CivilTime, Weekday
from skypos.time_utils import (
    add_days,
    date_from_julian_day,
    day_number,
    days_since_1990,
    days_since_epoch,
    decimal_hours_from_time,
    decimal_year,
    is_julian_date,
    j2000_from_julian_day,
    julian_day,
    julian_day_from_ut,
    local_from_ut,
    modified_julian_day,
    normalize_datetime,
    normalize_time,
    time_from_decimal_hours,
    ut_from_local,
    weekday,
)


def test_julian_day_textbook_example() -> None:
    """1985 February 17.25 is JD 2446113.75."""
    assert julian_day(CivilDate(1985, 2, 17.25)) == pytest.approx(2446113.75, abs=1e-6)


def test_julian_day_origin() -> None:
    """JD 0 is -4712 January 1.5 in the Julian calendar."""
    assert julian_day(CivilDate(-4712, 1, 1.5)) == pytest.approx(0.0, abs=1e-9)


def test_julian_day_across_gregorian_reform() -> None:
    """1582-10-04 (Julian) is followed directly by 1582-10-15 (Gregorian)."""
    before = julian_day(CivilDate(1582, 10, 4))
    after = julian_day(CivilDate(1582, 10, 15))
    assert before == pytest.approx(2299159.5)
    assert after - before == pytest.approx(1.0)


@pytest.mark.parametrize(
    ('y', 'm', 'd'), [(2000, 1, 1), (1972, 6, 30), (2024, 3, 15), (1900, 2, 28)]
)
def test_julian_day_agrees_with_rms_julian(y: int, m: int, d: int) -> None:
    """Gregorian dates agree with rms-julian's day count (day 0 = 2000-01-01)."""
    assert julian_day(CivilDate(y, m, d)) == pytest.approx(julian.day_from_ymd(y, m, d) + 2451544.5)


def test_julian_day_accepts_stdlib_date() -> None:
    """datetime.date works as a DateLike."""
    assert julian_day(datetime.date(2000, 1, 1)) == pytest.approx(2451544.5)


def test_julian_day_from_ut_adds_time_of_day() -> None:
    """The clock adds its fraction of a day."""
    ut = CivilDateTime(1985, 2, 17, 6, 0, 0.0)
    assert julian_day_from_ut(ut) == pytest.approx(2446113.75)


def test_date_from_julian_day_inverse() -> None:
    """Inverse of julian_day, fractional day included."""
    date = date_from_julian_day(2446113.75)
    assert (date.year, date.month) == (1985, 2)
    assert date.day == pytest.approx(17.25)


@pytest.mark.parametrize(
    'date',
    [
        CivilDate(1582, 10, 4),
        CivilDate(1066, 12, 25.5),
        CivilDate(1988, 7, 27.125),
        CivilDate(100, 3, 1),
        CivilDate(-1000, 3, 1.5),
        CivilDate(-500, 6, 15),
        CivilDate(-1, 12, 31.25),
    ],
)
def test_julian_day_round_trip(date: CivilDate) -> None:
    """date_from_julian_day(julian_day(d)) reproduces d on both calendars."""
    back = date_from_julian_day(julian_day(date))
    assert (back.year, back.month) == (date.year, date.month)
    assert back.day == pytest.approx(date.day, abs=1e-6)


def test_julian_day_negative_years() -> None:
    """Years before 1 AD: -1000 March 1.5 is 3712 Julian years plus 60 days after JD 0."""
    assert julian_day(CivilDate(-1000, 3, 1.5)) == pytest.approx(1355868.0)
    assert julian_day(CivilDate(-500, 6, 15)) == pytest.approx(1538598.5)
    assert julian_day(CivilDate(0, 1, 1.5)) - julian_day(CivilDate(-1, 1, 1.5)) == pytest.approx(
        365.0
    )


def test_is_julian_date_boundary() -> None:
    """The calendar switches from 1582-10-04 (Julian) to 1582-10-15 (Gregorian)."""
    assert is_julian_date(CivilDate(1582, 10, 4))
    assert not is_julian_date(CivilDate(1582, 10, 15))
    assert not is_julian_date(CivilDate(1583, 1, 1))


def test_add_days_crosses_month() -> None:
    """2020 is a leap year."""
    assert add_days(CivilDate(2020, 2, 28), 1) == CivilDate(2020, 2, 29)
    assert add_days(CivilDate(2020, 3, 1), -1) == CivilDate(2020, 2, 29)


def test_j2000_and_mjd() -> None:
    """J2000.0 offsets."""
    assert j2000_from_julian_day(2451545.0) == 0.0
    assert modified_julian_day(2451545.0) == 51544.5


def test_day_number() -> None:
    """Day of year, January 1 = 1."""
    assert day_number(CivilDate(1985, 2, 17)) == 48
    assert day_number(CivilDate(1988, 7, 27)) == 209
    assert day_number(CivilDate(2021, 12, 31)) == 365
    assert day_number(CivilDate(2020, 12, 31)) == 366


def test_days_since_1990() -> None:
    """Whole days from 1990 January 0.0 to January 0.0 of the year."""
    assert days_since_1990(1990) == 0
    assert days_since_1990(1988) == -731
    assert days_since_1990(1991) == 365
    assert days_since_1990(1992) == 730
    assert days_since_1990(1994) == 1461


def test_days_since_epoch() -> None:
    """Fractional day carries through."""
    assert days_since_epoch(CivilDate(1988, 7, 27)) == pytest.approx(-522.0)
    assert days_since_epoch(CivilDate(1990, 1, 1.5)) == pytest.approx(1.5)


def test_decimal_year_is_mid_month() -> None:
    """Evaluated at the middle of the month."""
    assert decimal_year(CivilDate(1986, 1, 1)) == pytest.approx(1986 + 0.5 / 12)


def test_weekday() -> None:
    """1985 February 17 was a Sunday."""
    assert weekday(CivilDate(1985, 2, 17)) is Weekday.SUNDAY
    assert weekday(CivilDate(2000, 1, 1)) is Weekday.SATURDAY


@pytest.mark.parametrize('fraction', [0.0, 0.4, 0.5, 0.6, 0.99])
def test_weekday_ignores_fraction_of_day(fraction: float) -> None:
    """Any time on 1985 February 17 is still Sunday."""
    assert weekday(CivilDate(1985, 2, 17 + fraction)) is Weekday.SUNDAY


def test_weekday_before_1_ad() -> None:
    """JD 0 (-4712 January 1.5) fell on a Monday."""
    assert weekday(CivilDate(-4712, 1, 1.5)) is Weekday.MONDAY


def test_decimal_hours_from_time() -> None:
    """18h31m27s is 18.524167 hours; a sign on any component negates."""
    assert decimal_hours_from_time(CivilTime(18, 31, 27.0)) == pytest.approx(18.524166667)
    assert decimal_hours_from_time(CivilTime(0, -30, 0.0)) == pytest.approx(-0.5)
    assert decimal_hours_from_time(CivilTime(-8, 13, 30.0)) == pytest.approx(-8.225)


def test_time_from_decimal_hours() -> None:
    """18.52417 hours is 18h31m27.012s."""
    t = time_from_decimal_hours(18.52417)
    assert (t.hour, t.minute) == (18, 31)
    assert t.second == pytest.approx(27.012, abs=1e-6)


def test_time_from_decimal_hours_sign_on_first_nonzero() -> None:
    """The minus sign goes on the most significant non-zero component."""
    assert time_from_decimal_hours(-0.5) == CivilTime(0, -30, 0.0)
    assert time_from_decimal_hours(-2.5) == CivilTime(-2, 30, 0.0)
    t = time_from_decimal_hours(-0.001)
    assert (t.hour, t.minute) == (0, 0)
    assert t.second == pytest.approx(-3.6)


def test_time_from_decimal_hours_rounds_seconds() -> None:
    """2h10m does not come back as 2h09m59.999999."""
    assert time_from_decimal_hours(2 + 10 / 60) == CivilTime(2, 10, 0.0)


@pytest.mark.parametrize('value', [-23.75, -0.001, 0.0, 5.5, 12.345678])
def test_decimal_hours_round_trip(value: float) -> None:
    """decimal -> h:m:s -> decimal is the identity."""
    assert decimal_hours_from_time(time_from_decimal_hours(value)) == pytest.approx(value, abs=1e-9)


def test_normalize_time_carries_days() -> None:
    """Out-of-range components carry into the next unit."""
    time, days = normalize_time(CivilTime(23, 61, -2.0))
    assert time == CivilTime(0, 0, 58.0)
    assert days == 1
    time, days = normalize_time(CivilTime(0, 0, -30.0))
    assert time == CivilTime(23, 59, 30.0)
    assert days == -1


def test_normalize_datetime() -> None:
    """2021-01-31 23:61:-2 becomes 2021-02-01 00:00:58."""
    result = normalize_datetime(CivilDateTime(2021, 1, 31, 23, 61, -2.0))
    assert result == CivilDateTime(2021, 2, 1, 0, 0, 58.0)


def test_ut_from_local_wraps_midnight() -> None:
    """02:37 in zone +4 is 22:37 UT the previous day."""
    ut = ut_from_local(CivilDateTime(2021, 1, 1, 2, 37, 0.0), 4.0)
    assert (ut.year, ut.month, ut.day, ut.hour, ut.minute) == (2020, 12, 31, 22, 37)
    assert ut.second == pytest.approx(0.0, abs=1e-6)


def test_local_from_ut_inverse() -> None:
    """local_from_ut undoes ut_from_local."""
    local = CivilDateTime(2021, 6, 30, 21, 15, 0.0)
    back = local_from_ut(ut_from_local(local, -5.0), -5.0)
    assert (back.year, back.month, back.day, back.hour, back.minute) == (2021, 6, 30, 21, 15)


def test_ensure_leapsecs_falls_back_to_bundled_lsk(monkeypatch: pytest.MonkeyPatch) -> None:
    """An unreadable configured LSK falls back to the one bundled with rms-julian."""
    calls: list[str | None] = []

    def _load_lsk(path: str | None = None) -> None:
        calls.append(path)
        if path is not None:
            raise OSError('missing')

    monkeypatch.setattr('julian.load_lsk', _load_lsk)
    monkeypatch.setattr('skypos.time_utils.get_leapsecs_path', lambda: 'dummy.tls')
    monkeypatch.setattr(time_utils, '_leapsecs_loaded', False)

    time_utils._ensure_leapsecs()
    time_utils._ensure_leapsecs()

    assert calls == ['dummy.tls', None]


def test_parse_datetime_components() -> None:
    """A full UT string parses to its calendar and clock components."""
    dt = time_utils.parse_datetime('1980-04-22 14:36:51.67')
    assert dt is not None
    assert (dt.year, dt.month, dt.day, dt.hour, dt.minute) == (1980, 4, 22, 14, 36)
    assert dt.second == pytest.approx(51.67, abs=1e-6)


def test_parse_datetime_accepts_iso_z_suffix() -> None:
    """ISO-8601 trailing Z parses like the same timestamp without Z."""
    with_z = time_utils.parse_datetime('2022-08-18T00:01:47Z')
    without_z = time_utils.parse_datetime('2022-08-18T00:01:47')

    assert with_z is not None
    assert without_z is not None
    assert with_z == without_z


def test_parse_datetime_accepts_year_hms_form() -> None:
    """'YYYY HH:MM:SS' parses as January 1 at the given time."""
    compact = time_utils.parse_datetime('1700 01:01:01')
    explicit = time_utils.parse_datetime('1700-01-01 01:01:01')

    assert compact is not None
    assert explicit is not None
    assert compact == explicit


def test_parse_datetime_rejects_garbage() -> None:
    """Unparseable strings give None."""
    assert time_utils.parse_datetime('not a date') is None
