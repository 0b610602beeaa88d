import datetime

import pytest

from blogfeed.utils import calculate_reading_time, format_date, parse_published_at


def test_format_date_one_year_ago():
    now = datetime.datetime(2025, 1, 1)
    assert format_date("2024-01-01", True, now=now) == "January 1, 2024 (1y ago)"


def test_format_date_without_relative():
    assert format_date("2024-03-05") == "March 5, 2024"


@pytest.mark.parametrize(
    ("date", "now", "label"),
    [
        ("2024-01-15", datetime.datetime(2024, 4, 1), "3mo ago"),
        ("2024-04-01", datetime.datetime(2024, 4, 11), "10d ago"),
        ("2024-04-11", datetime.datetime(2024, 4, 11, 23, 59), "Today"),
        # calendar fields, not elapsed time: Dec 31 -> Jan 1 is already a year
        ("2023-12-31", datetime.datetime(2024, 1, 1), "1y ago"),
        ("2024-04-11T08:30:00", datetime.datetime(2024, 4, 11, 9), "Today"),
    ],
)
def test_format_date_relative_labels(date, now, label):
    assert format_date(date, include_relative=True, now=now).endswith(f"({label})")


def test_parse_published_at_treats_naive_as_utc():
    assert parse_published_at("2024-01-01") == datetime.datetime(
        2024, 1, 1, tzinfo=datetime.timezone.utc
    )
    assert parse_published_at("2024-01-01T09:00:00.000Z") == datetime.datetime(
        2024, 1, 1, 9, tzinfo=datetime.timezone.utc
    )
    assert parse_published_at("2024-01-01T09:00:00+09:00") == datetime.datetime(
        2024, 1, 1, tzinfo=datetime.timezone.utc
    )


@pytest.mark.parametrize("value", ["", "   ", "yesterday", "2024-13-01"])
def test_parse_published_at_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_published_at(value)


def test_calculate_reading_time():
    assert calculate_reading_time("") == "1 min"
    assert calculate_reading_time("word " * 200) == "1 min"
    assert calculate_reading_time("word " * 201) == "2 min"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-01-01 10:00", "January 1, 2024"),
        ("2024-01-01T10:00", "January 1, 2024"),
        ("2024-02-29", "February 29, 2024"),
    ],
)
def test_format_date_accepts_every_parseable_published_at(value, expected):
    parse_published_at(value)
    assert format_date(value) == expected


def test_format_date_space_separated_relative():
    now = datetime.datetime(2024, 1, 3)
    assert format_date("2024-01-01 10:00", True, now=now) == "January 1, 2024 (2d ago)"
