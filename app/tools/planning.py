"""Tools over the planned calendar."""

from __future__ import annotations

import asyncio

from loguru import logger

from app.integrations.intervals.client import IntervalsClient
from app.integrations.trainerroad.client import TrainerRoadClient
from app.models.planned import PlannedWorkout, WorkoutSource
from app.tools.interfaces import PlannedWorkoutsResult
from app.tools.sources import fetch_planned_workouts, resolve_timezone
from app.utils.date_parser import get_days_ahead_range, parse_date_string_in_timezone
from app.utils.sport_utils import discipline_for_activity_type

DETAILS_LOOKAHEAD_DAYS = 30

_TRAINERROAD_SOURCES = {WorkoutSource.TRAINERROAD.value, WorkoutSource.ZWIFT.value}


class PlanningTools:
    def __init__(self, intervals: IntervalsClient | None, trainerroad: TrainerRoadClient | None):
        self.intervals = intervals
        self.trainerroad = trainerroad

    async def get_upcoming_workouts(self, days: int = 7, sport: str | None = None) -> PlannedWorkoutsResult:
        """Planned workouts from today through ``days`` days ahead.

        A sport filter keeps only workouts of the matching discipline;
        sports with no discipline (e.g. strength) match nothing.
        """
        timezone = await resolve_timezone(self.intervals)
        window = get_days_ahead_range(days)
        workouts = await fetch_planned_workouts(self.intervals, self.trainerroad, window.start, window.end, timezone)

        if sport:
            discipline = discipline_for_activity_type(sport)
            workouts = [w for w in workouts if w.discipline == discipline]

        return PlannedWorkoutsResult(start_date=window.start, end_date=window.end, workouts=workouts)

    def _sources_for(self, source: str | None) -> tuple[TrainerRoadClient | None, IntervalsClient | None]:
        if source in _TRAINERROAD_SOURCES:
            return self.trainerroad, None
        if source == WorkoutSource.INTERVALS.value:
            return None, self.intervals
        return self.trainerroad, self.intervals

    async def _fetch_both(
        self,
        trainerroad: TrainerRoadClient | None,
        intervals: IntervalsClient | None,
        start_date: str,
        end_date: str,
        timezone: str,
    ) -> tuple[list[PlannedWorkout], list[PlannedWorkout]]:
        async def _none() -> list[PlannedWorkout]:
            return []

        return await asyncio.gather(
            trainerroad.get_planned_workouts(start_date, end_date, timezone) if trainerroad else _none(),
            intervals.get_planned_events(start_date, end_date) if intervals else _none(),
        )

    async def get_planned_workout_details(
        self,
        workout_id: str | None = None,
        date: str | None = None,
        source: str | None = None,
    ) -> PlannedWorkout | None:
        """Look up one planned workout by id or by date.

        By id, the next 30 days are searched. By date, the first workout of
        that day is returned, TrainerRoad first. ``source`` restricts the
        calendars that are searched.

        Raises:
            DateParseError: If ``date`` cannot be understood
            ApiError: If a searched calendar fails
        """
        timezone = await resolve_timezone(self.intervals)
        trainerroad, intervals = self._sources_for(source)

        if workout_id:
            window = get_days_ahead_range(DETAILS_LOOKAHEAD_DAYS)
            tr_workouts, icu_workouts = await self._fetch_both(trainerroad, intervals, window.start, window.end, timezone)
            match = next((w for w in [*tr_workouts, *icu_workouts] if w.id == workout_id), None)
            logger.info(f"[TOOLS] Planned workout lookup id={workout_id} found={match is not None}")
            return match

        if date:
            day = parse_date_string_in_timezone(date, timezone, "date")
            tr_workouts, icu_workouts = await self._fetch_both(trainerroad, intervals, day, day, timezone)
            candidates = [*tr_workouts, *icu_workouts]
            return candidates[0] if candidates else None

        return None
