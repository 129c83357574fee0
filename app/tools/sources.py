"""Fetch helpers shared by the tool classes.

Clients are optional: a platform without credentials is passed as None
and contributes nothing.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable

from loguru import logger

from app.core.errors import ApiError
from app.integrations.intervals.client import IntervalsClient
from app.integrations.trainerroad.client import TrainerRoadClient
from app.integrations.whoop.client import WhoopClient
from app.models.activity import CompletedWorkout
from app.models.planned import PlannedWorkout
from app.models.recovery import StrainActivity
from app.utils.activity_matcher import match_whoop_activity
from app.utils.date_parser import get_today_in_timezone, parse_date_string_in_timezone
from app.utils.workout_utils import merge_planned_workouts


async def resolve_timezone(intervals: IntervalsClient | None) -> str:
    """Athlete timezone from Intervals.icu, UTC when it is not configured."""
    if intervals is None:
        return "UTC"
    return await intervals.get_athlete_timezone()


async def resolve_date_range(
    intervals: IntervalsClient | None, start_date: str, end_date: str | None, prefix: str = ""
) -> tuple[str, str]:
    """Parse a start/end pair in the athlete's timezone; a missing end is today."""
    timezone = await resolve_timezone(intervals)
    start = parse_date_string_in_timezone(start_date, timezone, f"{prefix}start_date")
    end = parse_date_string_in_timezone(end_date, timezone, f"{prefix}end_date") if end_date else get_today_in_timezone(timezone)
    return start, end


async def _planned_or_empty(fetch: Awaitable[list[PlannedWorkout]] | None, label: str) -> list[PlannedWorkout]:
    if fetch is None:
        return []
    try:
        return await fetch
    except ApiError as e:
        logger.error(f"[TOOLS] Error fetching {label} workouts, continuing without them: {e}")
        return []


async def fetch_planned_workouts(
    intervals: IntervalsClient | None,
    trainerroad: TrainerRoadClient | None,
    start_date: str,
    end_date: str,
    timezone: str | None = None,
) -> list[PlannedWorkout]:
    """Planned workouts from both calendars, merged and sorted by start.

    TrainerRoad entries win over Intervals.icu entries describing the same
    session. A failing calendar is logged and treated as empty.
    """
    trainerroad_workouts, intervals_workouts = await asyncio.gather(
        _planned_or_empty(
            trainerroad.get_planned_workouts(start_date, end_date, timezone) if trainerroad else None,
            "TrainerRoad",
        ),
        _planned_or_empty(
            intervals.get_planned_events(start_date, end_date) if intervals else None,
            "Intervals.icu",
        ),
    )
    merged = merge_planned_workouts(trainerroad_workouts, intervals_workouts)
    logger.info(
        f"[TOOLS] Planned workouts {start_date}..{end_date}: trainerroad={len(trainerroad_workouts)} "
        f"intervals={len(intervals_workouts)} merged={len(merged)}"
    )
    return merged


async def attach_whoop_data(
    workouts: list[CompletedWorkout],
    whoop: WhoopClient | None,
    start_date: str,
    end_date: str,
) -> list[CompletedWorkout]:
    """Attach matching Whoop metrics to each workout.

    Whoop failures are logged and leave the workouts without Whoop data.
    """
    if whoop is None or not workouts:
        return workouts

    whoop_activities: list[StrainActivity] = []
    try:
        whoop_activities = await whoop.get_workouts(start_date, end_date)
    except ApiError as e:
        logger.warning(f"[TOOLS] Whoop activities unavailable for matching: {e}")

    matched = 0
    for workout in workouts:
        workout.whoop = match_whoop_activity(workout, whoop_activities)
        matched += workout.whoop is not None
    logger.debug(f"[TOOLS] Matched {matched}/{len(workouts)} workouts to Whoop activities")
    return workouts
