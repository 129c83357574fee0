"""Tools about today and the recent past."""

from __future__ import annotations

from loguru import logger

from app.core.errors import ApiError
from app.integrations.intervals.client import IntervalsClient
from app.integrations.trainerroad.client import TrainerRoadClient
from app.integrations.whoop.client import WhoopClient
from app.tools.interfaces import (
    AthleteProfileResult,
    CompletedWorkoutsResult,
    PlannedWorkoutsResult,
    RecentStrainResult,
    TodaysRecoveryResult,
    TodaysStrainResult,
    TodaysWellnessResult,
)
from app.tools.sources import attach_whoop_data, fetch_planned_workouts, resolve_timezone
from app.utils.date_parser import get_days_back_range, get_today_in_timezone


class CurrentTools:
    def __init__(
        self,
        intervals: IntervalsClient | None,
        whoop: WhoopClient | None,
        trainerroad: TrainerRoadClient | None,
    ):
        self.intervals = intervals
        self.whoop = whoop
        self.trainerroad = trainerroad

    async def get_todays_recovery(self) -> TodaysRecoveryResult:
        timezone = await resolve_timezone(self.intervals)
        today = get_today_in_timezone(timezone)
        if self.whoop is None:
            return TodaysRecoveryResult(date=today)

        try:
            recovery = await self.whoop.get_today_recovery()
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching today's recovery: {e}")
            raise
        return TodaysRecoveryResult(date=today, recovery=recovery)

    async def get_recent_workouts(self, days: int = 7, sport: str | None = None) -> CompletedWorkoutsResult:
        """Completed workouts from the last ``days`` days, with Whoop data when matched."""
        window = get_days_back_range(days)
        if self.intervals is None:
            return CompletedWorkoutsResult(start_date=window.start, end_date=window.end, workouts=[])

        try:
            workouts = await self.intervals.get_activities(window.start, window.end, sport)
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching recent workouts: {e}")
            raise

        workouts = await attach_whoop_data(workouts, self.whoop, window.start, window.end)
        return CompletedWorkoutsResult(start_date=window.start, end_date=window.end, workouts=workouts)

    async def get_todays_planned_workouts(self) -> PlannedWorkoutsResult:
        """Today's workouts from TrainerRoad and Intervals.icu, de-duplicated."""
        timezone = await resolve_timezone(self.intervals)
        today = get_today_in_timezone(timezone)
        workouts = await fetch_planned_workouts(self.intervals, self.trainerroad, today, today, timezone)
        return PlannedWorkoutsResult(start_date=today, end_date=today, workouts=workouts)

    async def get_athlete_profile(self) -> AthleteProfileResult:
        if self.intervals is None:
            return AthleteProfileResult()

        try:
            profile = await self.intervals.get_athlete_profile()
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching athlete profile: {e}")
            raise
        return AthleteProfileResult(profile=profile)

    async def get_recent_strain(self, days: int = 7) -> RecentStrainResult:
        """Whoop day strain for the last ``days`` days, with the workouts of each day."""
        window = get_days_back_range(days)
        if self.whoop is None:
            return RecentStrainResult(start_date=window.start, end_date=window.end, data=[])

        try:
            data = await self.whoop.get_strain_data(window.start, window.end)
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching recent strain: {e}")
            raise
        return RecentStrainResult(start_date=window.start, end_date=window.end, data=data)

    async def get_todays_strain(self) -> TodaysStrainResult:
        timezone = await resolve_timezone(self.intervals)
        today = get_today_in_timezone(timezone)
        if self.whoop is None:
            return TodaysStrainResult(date=today)

        try:
            strain = await self.whoop.get_today_strain()
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching today's strain: {e}")
            raise
        return TodaysStrainResult(date=today, strain=strain)

    async def get_todays_wellness(self) -> TodaysWellnessResult:
        """Today's Intervals.icu wellness entry.

        When Whoop is configured, the fields Whoop measures (HRV, resting
        HR, sleep) are dropped so the two sources do not disagree.
        """
        timezone = await resolve_timezone(self.intervals)
        today = get_today_in_timezone(timezone)
        if self.intervals is None:
            return TodaysWellnessResult(date=today)

        wellness = await self.intervals.get_today_wellness()
        if wellness is not None and self.whoop is not None:
            wellness = wellness.without_whoop_duplicates()
        return TodaysWellnessResult(date=today, wellness=wellness)
