import pytest

from src.store_attendance.store_attendance.shifts.clock import (
    from_linear_minutes,
    is_clock,
    parse_clock,
    to_linear_minutes,
)


def test_reset_hour_is_zero_point():
    assert to_linear_minutes("03:00") == 0
    assert to_linear_minutes("07:00") == 240
    assert to_linear_minutes("23:00") == 1200


def test_times_before_reset_hour_belong_to_previous_business_day():
    assert to_linear_minutes("00:00") == 1260
    assert to_linear_minutes("02:59") == 1439
    assert to_linear_minutes("02:59") > to_linear_minutes("23:59")


def test_custom_reset_hour():
    assert to_linear_minutes("01:00", day_reset_hour=0) == 60
    assert to_linear_minutes("04:00", day_reset_hour=5) == 23 * 60


def test_round_trip_for_every_clock_value():
    for hours in range(24):
        for minutes in range(60):
            value = f"{hours:02d}:{minutes:02d}"
            assert from_linear_minutes(to_linear_minutes(value)) == value


def test_from_linear_wraps_modulo_one_day():
    assert from_linear_minutes(0) == "03:00"
    assert from_linear_minutes(1440) == "03:00"
    assert from_linear_minutes(-60) == "02:00"


@pytest.mark.parametrize("value", ["7:00", "24:00", "12:60", "", "12:00:00", None, 700])
def test_is_clock_rejects_malformed_values(value):
    assert is_clock(value) is False


def test_parse_clock_raises_on_malformed_value():
    assert parse_clock("23:45") == (23, 45)
    with pytest.raises(ValueError):
        parse_clock("bad")
