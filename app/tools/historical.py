"""Tools over a date range in the past."""

from __future__ import annotations

from datetime import date

from loguru import logger

from app.core.errors import ApiError
from app.integrations.intervals.client import IntervalsClient
from app.integrations.whoop.client import WhoopClient
from app.models.activity import WorkoutHeatZones, WorkoutIntervals, WorkoutNotes, WorkoutWeather
from app.models.recovery import RecoveryData, RecoverySummary, RecoveryTrends
from app.models.training_load import TrainingLoadSummary, TrainingLoadTrends
from app.models.wellness import WellnessTrends
from app.tools.interfaces import CompletedWorkoutsResult
from app.tools.sources import attach_whoop_data, resolve_date_range


def calculate_recovery_summary(data: list[RecoveryData]) -> RecoverySummary:
    """Averages rounded to one decimal; an empty series is all zeros."""
    if not data:
        return RecoverySummary()

    scores = [entry.recovery_score for entry in data]
    return RecoverySummary(
        avg_recovery=round(sum(scores) / len(scores), 1),
        avg_hrv=round(sum(entry.hrv_rmssd for entry in data) / len(data), 1),
        avg_sleep_hours=round(sum(entry.sleep_hours for entry in data) / len(data), 1),
        min_recovery=min(scores),
        max_recovery=max(scores),
    )


class HistoricalTools:
    def __init__(self, intervals: IntervalsClient | None, whoop: WhoopClient | None):
        self.intervals = intervals
        self.whoop = whoop

    async def _resolve_range(self, start_date: str, end_date: str | None) -> tuple[str, str]:
        return await resolve_date_range(self.intervals, start_date, end_date)

    async def get_workout_history(
        self,
        start_date: str,
        end_date: str | None = None,
        sport: str | None = None,
    ) -> CompletedWorkoutsResult:
        """Completed workouts in a date range, matched to Whoop activities.

        Args:
            start_date: ISO date or natural language ("30 days ago")
            end_date: Same formats; defaults to today
            sport: Optional sport filter

        Raises:
            DateParseError: If either date cannot be understood
            IntervalsApiError: If the activity fetch fails
        """
        start, end = await self._resolve_range(start_date, end_date)
        if self.intervals is None:
            return CompletedWorkoutsResult(start_date=start, end_date=end, workouts=[])

        try:
            workouts = await self.intervals.get_activities(start, end, sport)
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching workout history: {e}")
            raise

        workouts = await attach_whoop_data(workouts, self.whoop, start, end)
        return CompletedWorkoutsResult(start_date=start, end_date=end, workouts=workouts)

    async def get_recovery_trends(self, start_date: str, end_date: str | None = None) -> RecoveryTrends:
        if self.whoop is None:
            return RecoveryTrends(data=[], summary=RecoverySummary())

        start, end = await self._resolve_range(start_date, end_date)
        try:
            data = await self.whoop.get_recoveries(start, end)
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching recovery trends: {e}")
            raise
        return RecoveryTrends(data=data, summary=calculate_recovery_summary(data))

    async def get_training_load_trends(self, days: int = 42) -> TrainingLoadTrends:
        if self.intervals is None:
            return TrainingLoadTrends(period_days=days, data=[], summary=TrainingLoadSummary())

        try:
            return await self.intervals.get_training_load_trends(days)
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching training load trends: {e}")
            raise

    async def get_wellness_trends(self, start_date: str, end_date: str | None = None) -> WellnessTrends:
        """Intervals.icu wellness entries in a date range.

        Fields Whoop measures are dropped when Whoop is configured, and days
        left with nothing else are skipped.
        """
        start, end = await self._resolve_range(start_date, end_date)
        if self.intervals is None:
            period_days = (date.fromisoformat(end) - date.fromisoformat(start)).days + 1
            return WellnessTrends(period_days=period_days, start_date=start, end_date=end, data=[])

        try:
            trends = await self.intervals.get_wellness_trends(start, end)
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching wellness trends: {e}")
            raise
        return trends.without_whoop_duplicates() if self.whoop is not None else trends

    async def get_workout_intervals(self, activity_id: str) -> WorkoutIntervals:
        if self.intervals is None:
            return WorkoutIntervals(activity_id=activity_id, intervals=[], groups=[])

        try:
            return await self.intervals.get_activity_intervals(activity_id)
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching intervals for {activity_id}: {e}")
            raise

    async def get_workout_notes(self, activity_id: str) -> WorkoutNotes:
        if self.intervals is None:
            return WorkoutNotes(activity_id=activity_id, notes=[])

        try:
            return await self.intervals.get_activity_notes(activity_id)
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching notes for {activity_id}: {e}")
            raise

    async def get_workout_weather(self, activity_id: str) -> WorkoutWeather:
        if self.intervals is None:
            return WorkoutWeather(activity_id=activity_id)
        return await self.intervals.get_activity_weather(activity_id)

    async def get_workout_heat_zones(self, activity_id: str) -> WorkoutHeatZones:
        """Time in each heat strain zone plus ambient temperature for one activity.

        Either part is left out when the activity did not record it.
        """
        if self.intervals is None:
            return WorkoutHeatZones(activity_id=activity_id)

        heat = await self.intervals.get_activity_heat_metrics(activity_id)
        temperature = await self.intervals.get_activity_temperature_metrics(activity_id)
        if heat is None:
            return WorkoutHeatZones(activity_id=activity_id, temperature=temperature)
        return WorkoutHeatZones(
            activity_id=activity_id,
            heat_zones=heat.zones,
            max_heat_strain_index=heat.max_heat_strain_index,
            median_heat_strain_index=heat.median_heat_strain_index,
            temperature=temperature,
        )
