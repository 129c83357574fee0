"""Tests for natural-language date parsing.

"Now" is pinned to Sunday 2024-12-29 10:00 UTC by the fixed_now fixture.
"""

import pytest

from app.core.errors import DateParseError, ErrorCategory
from app.utils.date_parser import (
    get_days_ahead_range,
    get_days_back_range,
    get_today,
    get_today_in_timezone,
    parse_date_range,
    parse_date_string,
    parse_date_string_in_timezone,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-12-25", "2024-12-25"),
        ("today", "2024-12-29"),
        ("Yesterday", "2024-12-28"),
        ("tomorrow", "2024-12-30"),
        ("3 days ago", "2024-12-26"),
        ("1 day ago", "2024-12-28"),
        ("2 weeks ago", "2024-12-15"),
        ("1 month ago", "2024-11-29"),
        ("3 DAYS AGO", "2024-12-26"),
        ("last week", "2024-12-16"),
        ("last month", "2024-11-01"),
        ("2024-12-25T10:00:00Z", "2024-12-25"),
    ],
)
def test_parse_date_string(fixed_now, raw, expected):
    assert parse_date_string(raw) == expected


def test_invalid_calendar_date_is_rejected(fixed_now):
    with pytest.raises(DateParseError):
        parse_date_string("2024-02-30")


def test_unknown_phrase_names_input_and_parameter(fixed_now):
    with pytest.raises(DateParseError) as exc_info:
        parse_date_string("next fortnight", "start_date")

    error = exc_info.value
    assert error.category == ErrorCategory.DATE_PARSE
    assert error.is_retryable is False
    assert "next fortnight" in error.message
    assert "start_date" in error.message
    assert error.context.parameters == {"start_date": "next fortnight"}


@pytest.mark.parametrize(
    ("raw", "start", "end"),
    [
        ("today", "2024-12-29", "2024-12-29"),
        ("this week", "2024-12-23", "2024-12-29"),
        ("last week", "2024-12-16", "2024-12-22"),
        ("this month", "2024-12-01", "2024-12-31"),
        ("last month", "2024-11-01", "2024-11-30"),
        ("last 7 days", "2024-12-22", "2024-12-29"),
        ("last 2 weeks", "2024-12-15", "2024-12-29"),
        ("Last 1 Month", "2024-11-29", "2024-12-29"),
    ],
)
def test_parse_date_range(fixed_now, raw, start, end):
    result = parse_date_range(raw)
    assert (result.start, result.end) == (start, end)


@pytest.mark.parametrize("raw", ["next week", "yesterday", "2024-12-01"])
def test_parse_date_range_has_no_fallback(fixed_now, raw):
    with pytest.raises(DateParseError):
        parse_date_range(raw)


def test_last_n_days_range_ends_today_while_ago_is_single_day(fixed_now):
    assert parse_date_range("last 3 days").end == "2024-12-29"
    assert parse_date_string("3 days ago") == parse_date_range("last 3 days").start


@pytest.mark.parametrize(("days", "start"), [(7, "2024-12-23"), (1, "2024-12-29"), (0, "2024-12-29")])
def test_get_days_back_range(fixed_now, days, start):
    window = get_days_back_range(days)
    assert window.start == start
    assert window.end == "2024-12-29"


def test_get_days_ahead_range(fixed_now):
    window = get_days_ahead_range(7)
    assert (window.start, window.end) == ("2024-12-29", "2025-01-05")


def test_today_in_timezone_uses_local_date(fixed_now):
    assert get_today() == "2024-12-29"
    # 10:00 UTC is already 00:00 the next day at UTC+14
    assert get_today_in_timezone("Pacific/Kiritimati") == "2024-12-30"
    assert get_today_in_timezone("America/Los_Angeles") == "2024-12-29"


def test_relative_dates_in_timezone(fixed_now):
    assert parse_date_string_in_timezone("yesterday", "Pacific/Kiritimati", "oldest") == "2024-12-29"
    assert parse_date_string_in_timezone("2024-12-01", "Pacific/Kiritimati") == "2024-12-01"
