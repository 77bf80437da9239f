"""Tests for local day and time helpers."""

from datetime import date, datetime

import pytest

from caltrack.clock import day_key, local_clock, parse_day, time_of_day, time_slot_for
from caltrack.domain.ledger import TimeSlot


def test_day_key_round_trips() -> None:
    assert day_key(date(2024, 1, 5)) == "2024-01-05"
    assert parse_day("2024-01-05") == date(2024, 1, 5)
    assert parse_day("2024-01-05T00:00:00+00:00") == date(2024, 1, 5)


def test_time_of_day_is_24_hour() -> None:
    assert time_of_day(datetime(2024, 1, 5, 7, 3)) == "07:03"
    assert time_of_day(datetime(2024, 1, 5, 19, 45)) == "19:45"


@pytest.mark.parametrize(
    ("hour", "expected"),
    [
        (0, TimeSlot.NIGHT),
        (5, TimeSlot.MORNING),
        (12, TimeSlot.AFTERNOON),
        (17, TimeSlot.EVENING),
        (21, TimeSlot.NIGHT),
    ],
)
def test_time_slot_buckets(hour: int, expected: TimeSlot) -> None:
    assert time_slot_for(datetime(2024, 1, 5, hour)) is expected


def test_local_clock_defaults_to_system_zone() -> None:
    assert local_clock()().tzinfo is not None
