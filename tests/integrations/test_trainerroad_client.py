"""Tests for the TrainerRoad calendar client."""

import httpx
import pytest

from app.core.errors import ErrorCategory, TrainerRoadApiError
from app.integrations.trainerroad.client import TrainerRoadClient
from app.models.planned import Discipline

CALENDAR_URL = "https://www.trainerroad.com/app/career/athlete/calendar.ics"

FEED = "\n".join(
    [
        "BEGIN:VCALENDAR",
        "BEGIN:VEVENT",
        "UID:tr-1",
        "DTSTART:20241229T113000Z",
        "DTEND:20241229T130000Z",
        "SUMMARY:1:30 - Gibbs",
        "DESCRIPTION:TSS 85",
        "END:VEVENT",
        "BEGIN:VEVENT",
        "UID:tr-2",
        "DTSTART;VALUE=DATE:20241229",
        "SUMMARY:Rest Day",
        "END:VEVENT",
        "BEGIN:VEVENT",
        "UID:tr-3",
        "DTSTART;VALUE=DATE:20241231",
        "SUMMARY:0:45 - Easy Run",
        "END:VEVENT",
        "BEGIN:VEVENT",
        "UID:tr-4",
        "DTSTART:20250115T113000Z",
        "DTEND:20250115T123000Z",
        "SUMMARY:Pettit",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
)


def _client(mock_http, handler) -> TrainerRoadClient:
    return TrainerRoadClient(CALENDAR_URL, http_client=mock_http(handler))


@pytest.mark.asyncio
async def test_get_planned_workouts_filters_range_and_annotations(mock_http):
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, text=FEED)

    client = _client(mock_http, handler)
    workouts = await client.get_planned_workouts("2024-12-29", "2024-12-31")

    assert requested == [CALENDAR_URL]
    assert [w.id for w in workouts] == ["tr-1", "tr-3"]
    assert workouts[0].expected_tss == 85
    assert workouts[1].discipline == Discipline.RUN
    assert workouts[1].scheduled_for == "2024-12-31T00:00:00.000Z"


@pytest.mark.asyncio
async def test_every_call_fetches_the_feed(mock_http):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, text=FEED)

    client = _client(mock_http, handler)
    await client.get_planned_workouts("2024-12-29", "2024-12-29")
    await client.get_planned_workouts("2024-12-29", "2024-12-29")
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_today_and_upcoming_use_pinned_clock(fixed_now, mock_http):
    client = _client(mock_http, lambda request: httpx.Response(200, text=FEED))

    today = await client.get_today_workouts()
    assert [w.id for w in today] == ["tr-1"]

    upcoming = await client.get_upcoming_workouts(7, "America/New_York")
    assert [w.id for w in upcoming] == ["tr-1", "tr-3"]
    assert upcoming[0].scheduled_for == "2024-12-29T06:30:00-05:00"


@pytest.mark.asyncio
async def test_http_error_status_raises_platform_error(mock_http):
    client = _client(mock_http, lambda request: httpx.Response(404))

    with pytest.raises(TrainerRoadApiError) as exc_info:
        await client.fetch_calendar()

    assert exc_info.value.status_code == 404
    assert exc_info.value.category == ErrorCategory.NOT_FOUND
    assert "Not Found" in exc_info.value.message


@pytest.mark.asyncio
async def test_server_error_is_retryable(mock_http):
    client = _client(mock_http, lambda request: httpx.Response(503))

    with pytest.raises(TrainerRoadApiError) as exc_info:
        await client.fetch_calendar()
    assert exc_info.value.is_retryable


@pytest.mark.asyncio
async def test_network_failure_raises_network_error(mock_http):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(mock_http, handler)
    with pytest.raises(TrainerRoadApiError) as exc_info:
        await client.fetch_calendar()
    assert exc_info.value.category == ErrorCategory.NETWORK
    assert exc_info.value.is_retryable


@pytest.mark.asyncio
async def test_non_calendar_body_raises_parse_error(mock_http):
    page = "<html><body>Sign in to TrainerRoad</body></html>"
    client = _client(mock_http, lambda request: httpx.Response(200, text=page))

    with pytest.raises(TrainerRoadApiError) as exc_info:
        await client.fetch_calendar()
    assert exc_info.value.category == ErrorCategory.VALIDATION


@pytest.mark.asyncio
async def test_event_with_unreadable_date_is_skipped(mock_http):
    feed = FEED.replace("DTSTART:20241229T113000Z", "DTSTART:garbage")
    client = _client(mock_http, lambda request: httpx.Response(200, text=feed))

    events = await client.fetch_calendar()

    assert [e.uid for e in events] == ["tr-2", "tr-3", "tr-4"]
