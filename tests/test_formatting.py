"""Tests for the from/until timestamp helpers."""

import re
from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from oaiweave.formatting import format_datetime

WIRE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")


@pytest.mark.parametrize("value", [None, ""])
def test_unset_values_are_omitted(value):
    assert format_datetime(value) is None


def test_naive_datetime_is_treated_as_utc():
    assert format_datetime(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05Z"


def test_aware_datetime_is_converted_to_utc():
    tz = timezone(timedelta(hours=2))

    assert format_datetime(datetime(2024, 1, 2, 1, 0, 0, tzinfo=tz)) == (
        "2024-01-01T23:00:00Z"
    )


def test_microseconds_are_dropped():
    value = datetime(2024, 6, 30, 23, 59, 59, 999999, tzinfo=UTC)

    assert format_datetime(value) == "2024-06-30T23:59:59Z"


def test_date_is_midnight_utc():
    assert format_datetime(date(2020, 2, 29)) == "2020-02-29T00:00:00Z"


def test_strings_pass_through():
    assert format_datetime("2024-01-31") == "2024-01-31"


@pytest.mark.parametrize(
    "value",
    [
        datetime(1, 1, 1),
        datetime(999, 12, 31, 23, 59, 59, tzinfo=UTC),
        date(2024, 12, 31),
    ],
)
def test_output_matches_wire_pattern(value):
    """Test that concrete values always produce YYYY-MM-DDThh:mm:ssZ."""
    assert WIRE_PATTERN.match(format_datetime(value))
