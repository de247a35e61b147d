"""Tests for angle reduction, carry and sexagesimal text."""

from __future__ import annotations

import pytest

from skypos.angle_utils import (
    carry_over,
    clamp_unit,
    dms_string,
    normalize_degrees,
    normalize_hours,
    parse_angle,
)


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        (121.0, (1.0, 2)),
        (59.0, (59.0, 0)),
        (-61.0, (59.0, -2)),
        (-60.0, (0.0, -1)),
        (-1.0, (59.0, -1)),
    ],
)
def test_carry_over_borrows_for_negative_values(
    value: float, expected: tuple[float, int]
) -> None:
    """Remainder is always in [0, modulus); the quotient carries the sign."""
    assert carry_over(value, 60.0) == expected


def test_carry_over_reconstructs_value() -> None:
    """quotient * modulus + remainder equals the input."""
    for value in (-1000.25, -0.5, 0.0, 23.999, 86400.5):
        remainder, quotient = carry_over(value, 24.0)
        assert 0.0 <= remainder < 24.0
        assert quotient * 24.0 + remainder == pytest.approx(value)


def test_normalize_degrees_and_hours() -> None:
    """Angles reduce into [0, 360), hours into [0, 24)."""
    assert normalize_degrees(-30.0) == pytest.approx(330.0)
    assert normalize_degrees(720.0) == 0.0
    assert normalize_hours(25.5) == pytest.approx(1.5)
    assert normalize_hours(-1.0) == pytest.approx(23.0)


def test_clamp_unit() -> None:
    """Round-off just outside [-1, 1] is clamped."""
    assert clamp_unit(1.0000000002) == 1.0
    assert clamp_unit(-1.0000000002) == -1.0
    assert clamp_unit(0.25) == 0.25


@pytest.mark.parametrize(
    ('text', 'expected'),
    [
        ('5h13m31.7s', 5 + 13 / 60 + 31.7 / 3600),
        ('-8:13:30', -8.225),
        ('-0 30', -0.5),
        ('12.5', 12.5),
        ('139d41\'10"', 139 + 41 / 60 + 10 / 3600),
        ('+23 13', 23 + 13 / 60),
    ],
)
def test_parse_angle(text: str, expected: float) -> None:
    """Sexagesimal and decimal forms parse; a leading sign applies to the whole value."""
    assert parse_angle(text) == pytest.approx(expected)


@pytest.mark.parametrize('text', ['', '   ', 'abc', '1 2 3 4', '10 -5'])
def test_parse_angle_rejects_garbage(text: str) -> None:
    """Unparseable text gives None."""
    assert parse_angle(text) is None


def test_dms_string_degrees() -> None:
    """Degrees carry an explicit sign."""
    assert dms_string(19 + 12 / 60 + 42.52 / 3600) == '+19d12m42.52s'
    assert dms_string(-0.5) == '-00d30m00.00s'
    assert dms_string(10.5, 'dms', 0) == '+10d30m00s'


def test_dms_string_hours() -> None:
    """Hour separators suppress the plus sign."""
    assert dms_string(8 + 26 / 60 + 3.81 / 3600, 'hms') == '08h26m03.81s'


def test_dms_string_colon_separators() -> None:
    """Trailing blank separators are stripped."""
    assert dms_string(12.5, '::') == '+12:30:00.00'
