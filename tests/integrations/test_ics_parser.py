"""Tests for the iCalendar feed reader."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from app.integrations.trainerroad.ics import ics_unescape, parse_ics_datetime, parse_ics_events, unfold_ics_lines

FEED = (
    "BEGIN:VCALENDAR\r\n"
    "VERSION:2.0\r\n"
    "BEGIN:VEVENT\r\n"
    "UID:tr-100\r\n"
    "DTSTART:20241229T113000Z\r\n"
    "DTEND:20241229T130000Z\r\n"
    "SUMMARY:1:30 - Gibbs\r\n"
    "DESCRIPTION:Sweet Spot\\nTSS 85\\, IF 0.82\\n\\nIntervals:\\n3x12 @ 9\r\n"
    " 0%\r\n"
    "END:VEVENT\r\n"
    "BEGIN:VEVENT\r\n"
    "UID:tr-101\r\n"
    "DTSTART;VALUE=DATE:20241230\r\n"
    "DTEND;VALUE=DATE:20241231\r\n"
    "SUMMARY:Rest Day\r\n"
    "END:VEVENT\r\n"
    "BEGIN:VEVENT\r\n"
    "DTSTART;TZID=Europe/Paris:20241231T070000\r\n"
    "DTEND;TZID=Europe/Paris:20241231T080000\r\n"
    "SUMMARY:Easy Run\r\n"
    "END:VEVENT\r\n"
    "BEGIN:VEVENT\r\n"
    "UID:no-summary\r\n"
    "DTSTART:20241229T113000Z\r\n"
    "END:VEVENT\r\n"
    "END:VCALENDAR\r\n"
)


def test_unfold_joins_continuation_lines():
    assert unfold_ics_lines("SUMMARY:Long\r\n  name\r\nUID:1") == ["SUMMARY:Long name", "UID:1"]


def test_ics_unescape():
    assert ics_unescape("a\\, b\\; c\\nd\\\\e") == "a, b; c\nd\\e"


def test_ics_unescape_escaped_backslash_before_n():
    assert ics_unescape("a\\\\nb") == "a\\nb"
    assert ics_unescape("C:\\\\new") == "C:\\new"


def test_parse_ics_datetime_forms():
    assert parse_ics_datetime("20241229T063000Z") == (datetime(2024, 12, 29, 6, 30, tzinfo=timezone.utc), False)
    assert parse_ics_datetime("20241229", {"VALUE": "DATE"}) == (datetime(2024, 12, 29), True)
    assert parse_ics_datetime("20241229") == (datetime(2024, 12, 29), True)

    local, all_day = parse_ics_datetime("20241229T063000", {"TZID": "America/New_York"})
    assert local.tzinfo == ZoneInfo("America/New_York")
    assert not all_day

    floating, _ = parse_ics_datetime("20241229T063000")
    assert floating.tzinfo is None


def test_parse_ics_datetime_rejects_garbage():
    with pytest.raises(ValueError):
        parse_ics_datetime("tomorrow")


def test_parse_ics_events():
    events = parse_ics_events(FEED)

    assert [e.uid for e in events[:2]] == ["tr-100", "tr-101"]
    assert len(events) == 3

    workout = events[0]
    assert workout.summary == "1:30 - Gibbs"
    assert workout.description == "Sweet Spot\nTSS 85, IF 0.82\n\nIntervals:\n3x12 @ 90%"
    assert workout.start == datetime(2024, 12, 29, 11, 30, tzinfo=timezone.utc)
    assert not workout.all_day

    rest = events[1]
    assert rest.all_day
    assert rest.description is None


def test_missing_uid_gets_a_generated_one():
    run = parse_ics_events(FEED)[2]
    assert run.uid.startswith("trainerroad-")
    assert run.start.utcoffset().total_seconds() == 3600


def test_parse_ics_datetime_without_seconds():
    assert parse_ics_datetime("20241229T0630") == (datetime(2024, 12, 29, 6, 30), False)
    assert parse_ics_datetime("20241229T0630Z")[0] == datetime(2024, 12, 29, 6, 30, tzinfo=timezone.utc)


def test_parse_ics_events_skips_event_with_bad_date():
    feed = (
        "BEGIN:VCALENDAR\n"
        "BEGIN:VEVENT\nUID:bad-start\nDTSTART:20241329T063000\nSUMMARY:Gibbs\nEND:VEVENT\n"
        "BEGIN:VEVENT\nUID:bad-end\nDTSTART:20241229T063000Z\nDTEND:not-a-date\nSUMMARY:Pettit\nEND:VEVENT\n"
        "BEGIN:VEVENT\nUID:good\nDTSTART:20241230T063000Z\nDTEND:20241230T073000Z\nSUMMARY:Baxter\nEND:VEVENT\n"
        "END:VCALENDAR\n"
    )
    events = parse_ics_events(feed)

    assert [e.uid for e in events] == ["good"]
