"""Civil date/time value types and the duck-typed time capability protocols.

Every conversion in skypos reads its inputs through ``DateLike`` /
``TimeLike``: anything exposing ``year``, ``month``, ``day`` (and ``hour``,
``minute``, ``second``, optionally ``microsecond``) is accepted, so the
standard library ``datetime`` types work as well as the types defined here.
The skypos types exist because the astronomical algorithms need what
``datetime`` cannot hold: years before 1 AD, fractional days, and signed
sexagesimal components for angles.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Protocol, runtime_checkable

from skypos.errors import InvalidDateError

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@runtime_checkable
class DateLike(Protocol):
    """Anything with calendar components (year, month 1-12, day)."""

    @property
    def year(self) -> int: ...

    @property
    def month(self) -> int: ...

    @property
    def day(self) -> float: ...


@runtime_checkable
class TimeLike(Protocol):
    """Anything with clock components (hour, minute, second)."""

    @property
    def hour(self) -> int: ...

    @property
    def minute(self) -> int: ...

    @property
    def second(self) -> float: ...


@runtime_checkable
class DateTimeLike(DateLike, TimeLike, Protocol):
    """Calendar and clock components together."""


class Weekday(IntEnum):
    """Day of the week, numbered from Sunday as in the reference algorithm."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class Direction(Enum):
    """Compass direction qualifying an observer longitude."""

    NORTH = 'north'
    EAST = 'east'
    SOUTH = 'south'
    WEST = 'west'

    @classmethod
    def parse(cls, text: str) -> Direction:
        """Parse 'east', 'E', 'West', ... into a Direction.

        Raises:
            ValueError: If the text names no direction.
        """
        key = text.strip().lower()
        for member in cls:
            if key in (member.value, member.value[0]):
                return member
        raise ValueError(f'Unknown direction {text!r}; expected north, east, south or west')


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule (divisible by 4, not by 100 unless by 400)."""
    if year % 4 != 0:
        return False
    if year % 100 != 0:
        return True
    return year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """Number of days in the month, Julian leap rule before 1583."""
    if month == 2:
        leap = year % 4 == 0 if year < 1583 else is_leap_year(year)
        return 29 if leap else 28
    return _DAYS_IN_MONTH[month - 1]


def validate_date(year: int, month: int, day: float) -> None:
    """Check calendar components.

    Day 0 is allowed ("January 0" is the day before January 1 in the
    reference tables), and the day may carry a fraction up to the end of the
    last day of the month. 1582 October 5-14 do not exist: the Julian
    calendar ends on October 4 and the Gregorian starts on October 15.

    Raises:
        InvalidDateError: If month or day is out of range, or the date was
            skipped by the Gregorian reform.
    """
    if month < 1 or month > 12:
        raise InvalidDateError(year, month, day, 'month must be 1-12')
    limit = days_in_month(year, month) + 1
    if day < 0 or day >= limit:
        raise InvalidDateError(year, month, day, f'day must be in [0, {limit})')
    if (year, month) == (1582, 10) and 5 <= day < 15:
        raise InvalidDateError(year, month, day, 'date skipped by the Gregorian reform')


def date_parts(date: DateLike) -> tuple[int, int, float]:
    """Read and validate (year, month, day) from any DateLike."""
    year, month, day = int(date.year), int(date.month), float(date.day)
    validate_date(year, month, day)
    return (year, month, day)


def time_parts(time: TimeLike) -> tuple[int, int, float]:
    """Read (hour, minute, second) from any TimeLike, folding in microseconds."""
    second = float(time.second) + getattr(time, 'microsecond', 0) / 1e6
    return (int(time.hour), int(time.minute), second)


@dataclass(frozen=True)
class CivilDate:
    """Calendar date; ``day`` may carry a fraction of a day."""

    year: int
    month: int
    day: float

    def __post_init__(self) -> None:
        validate_date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, date: DateLike) -> CivilDate:
        """Copy the calendar components of any DateLike."""
        return cls(*date_parts(date))


@dataclass(frozen=True)
class CivilTime:
    """Hours (or degrees), minutes, seconds with a single carried sign.

    The sign sits on the most significant non-zero component, so -0h 30m is
    ``CivilTime(0, -30, 0.0)``. Components are not range checked.
    """

    hour: int
    minute: int
    second: float

    @property
    def is_negative(self) -> bool:
        """True when any component carries a minus sign."""
        return self.hour < 0 or self.minute < 0 or self.second < 0


# Sexagesimal angle (degrees or hours depending on context).
Angle = CivilTime


@dataclass(frozen=True)
class CivilDateTime:
    """A CivilDate and a CivilTime in one value."""

    year: int
    month: int
    day: float
    hour: int = 0
    minute: int = 0
    second: float = 0.0

    def __post_init__(self) -> None:
        validate_date(self.year, self.month, self.day)

    @classmethod
    def combine(cls, date: DateLike, time: TimeLike) -> CivilDateTime:
        """Compose from separate date and time values."""
        return cls(*date_parts(date), *time_parts(time))

    @classmethod
    def from_datetime(cls, value: DateTimeLike) -> CivilDateTime:
        """Copy the components of any DateTimeLike (e.g. ``datetime.datetime``)."""
        return cls.combine(value, value)

    def date(self) -> CivilDate:
        return CivilDate(self.year, self.month, self.day)

    def time(self) -> CivilTime:
        return CivilTime(self.hour, self.minute, self.second)

    def iso_8601(self) -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS`` (whole day and second)."""
        return (
            f'{self.year:04d}-{self.month:02d}-{int(self.day):02d}'
            f'T{self.hour:02d}:{self.minute:02d}:{int(self.second):02d}'
        )
