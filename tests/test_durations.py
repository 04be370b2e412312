import math

import pytest

from flightsearch.core.durations import (
    format_currency,
    format_date,
    format_duration,
    format_stops,
    format_time,
    minutes_to_iso_duration,
    parse_iso_duration_to_minutes,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("PT6H30M", 390),
        ("PT6H", 360),
        ("PT45M", 45),
        ("PT", 0),
        ("", 0),
        (None, 0),
        ("garbage", 0),
        ("P1D", 0),
    ],
)
def test_parse_iso_duration_to_minutes(raw, expected):
    assert parse_iso_duration_to_minutes(raw) == expected


def test_parse_is_stable_on_its_own_output():
    for minutes in (0, 5, 60, 61, 390, 1439, 2000):
        encoded = minutes_to_iso_duration(minutes)
        assert parse_iso_duration_to_minutes(encoded) == minutes
        assert parse_iso_duration_to_minutes(
            minutes_to_iso_duration(parse_iso_duration_to_minutes(encoded))) == minutes


def test_format_duration():
    assert format_duration(0) == "0m"
    assert format_duration(45) == "45m"
    assert format_duration(120) == "2h"
    assert format_duration(390) == "6h 30m"
    assert format_duration(-10) == "0m"
    assert format_duration(math.nan) == "0m"
    assert format_duration(None) == "0m"


def test_format_time_and_date():
    assert format_time("2026-01-01T08:05:00") == "08:05 AM"
    assert format_time("2026-01-01T18:40:00Z") == "06:40 PM"
    assert format_time("not a date") == ""
    assert format_date("2026-01-01T08:05:00") == "Thu, Jan 1"
    assert format_date("") == ""


def test_format_currency_and_stops():
    assert format_currency(1234.6, "USD") == "$1,235"
    assert format_currency(99, "PLN") == "PLN 99"
    assert format_stops(0) == "Nonstop"
    assert format_stops(1) == "1 stop"
    assert format_stops(3) == "3 stops"
