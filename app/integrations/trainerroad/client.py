"""TrainerRoad calendar client.

TrainerRoad publishes planned workouts as a private iCalendar feed. The
feed is fetched fresh on every call (no caching) and converted to
PlannedWorkout records.
"""

from __future__ import annotations

import httpx
from loguru import logger

from app.core.errors import ErrorContext, TrainerRoadApiError
from app.integrations.trainerroad.ics import parse_ics_events
from app.integrations.trainerroad.normalize import event_in_range, is_workout, normalize_event
from app.models.planned import CalendarEvent, PlannedWorkout
from app.utils.date_parser import get_days_ahead_range, get_today, get_today_in_timezone

HTTP_TIMEOUT = 30.0


class TrainerRoadClient:
    """Read-only client for a TrainerRoad ICS calendar feed.

    - One HTTP GET per call
    - No retries
    - Annotations (notes, rest days) are filtered out
    """

    def __init__(
        self,
        calendar_url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = HTTP_TIMEOUT,
    ):
        self._calendar_url = calendar_url
        self._client = http_client
        self._timeout = timeout

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def fetch_calendar(self) -> list[CalendarEvent]:
        """Fetch and parse the calendar feed.

        Raises:
            TrainerRoadApiError: On network failure, non-2xx status, or an
                body that is not an iCalendar document
        """
        context = ErrorContext(operation="fetch planned workouts", resource="TrainerRoad calendar")
        logger.info("[TRAINERROAD_CLIENT] Fetching calendar")

        try:
            resp = await self._get_client().get(self._calendar_url)
        except httpx.RequestError as e:
            logger.error(f"[TRAINERROAD_CLIENT] Network error fetching calendar: {e}")
            raise TrainerRoadApiError.network_error(context, e) from e

        if not resp.is_success:
            logger.error(f"[TRAINERROAD_CLIENT] Calendar fetch failed: {resp.status_code} {resp.reason_phrase}")
            raise TrainerRoadApiError.from_http_status(resp.status_code, context, resp.reason_phrase)

        if "BEGIN:VCALENDAR" not in resp.text:
            logger.error("[TRAINERROAD_CLIENT] Calendar response is not an iCalendar document")
            raise TrainerRoadApiError.parse_error(context, ValueError("missing BEGIN:VCALENDAR"))

        return parse_ics_events(resp.text)

    async def get_planned_workouts(
        self,
        start_date: str,
        end_date: str,
        timezone: str | None = None,
    ) -> list[PlannedWorkout]:
        """Get planned workouts between two dates (inclusive).

        Args:
            start_date: Start date (YYYY-MM-DD)
            end_date: End date (YYYY-MM-DD)
            timezone: Athlete IANA timezone used for date comparison and output

        Returns:
            Normalized planned workouts, in feed order
        """
        events = await self.fetch_calendar()
        in_range = [event for event in events if event_in_range(event, start_date, end_date, timezone)]
        workouts = [normalize_event(event, timezone) for event in in_range if is_workout(event)]
        logger.info(
            f"[TRAINERROAD_CLIENT] {len(workouts)} workouts between {start_date} and {end_date} "
            f"({len(events)} events in feed)"
        )
        return workouts

    async def get_today_workouts(self, timezone: str | None = None) -> list[PlannedWorkout]:
        today = get_today_in_timezone(timezone) if timezone else get_today()
        return await self.get_planned_workouts(today, today, timezone)

    async def get_upcoming_workouts(self, days: int, timezone: str | None = None) -> list[PlannedWorkout]:
        """Get workouts from today through ``days`` days ahead."""
        window = get_days_ahead_range(days)
        return await self.get_planned_workouts(window.start, window.end, timezone)
