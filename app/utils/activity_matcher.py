"""Cross-platform matching of completed workouts.

An Intervals.icu activity and a Whoop activity are the same session when
their start times are within five minutes of each other and their
normalized activity types are compatible.
"""

from __future__ import annotations

from datetime import datetime, timezone

from dateutil import parser as date_parser

from app.models.activity import CompletedWorkout
from app.models.recovery import StrainActivity, WhoopMatchedData
from app.utils.sport_utils import are_activity_types_compatible

MATCH_WINDOW_MINUTES = 5


def _to_utc(value: str) -> datetime:
    parsed = date_parser.isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _minutes_apart(first: str, second: str) -> float:
    return abs((_to_utc(first) - _to_utc(second)).total_seconds()) / 60


def find_matching_whoop_activity(
    workout: CompletedWorkout,
    whoop_activities: list[StrainActivity],
) -> StrainActivity | None:
    """Return the first Whoop activity that matches ``workout``, if any.

    Prefers the UTC start time of the workout when the platform reported one.
    """
    workout_start = workout.start_date_utc or workout.start_time
    for activity in whoop_activities:
        if _minutes_apart(workout_start, activity.start_time_utc) > MATCH_WINDOW_MINUTES:
            continue
        if are_activity_types_compatible(workout.activity_type, activity.activity_type):
            return activity
    return None


def match_whoop_activity(
    workout: CompletedWorkout,
    whoop_activities: list[StrainActivity],
) -> WhoopMatchedData | None:
    match = find_matching_whoop_activity(workout, whoop_activities)
    if match is None:
        return None
    return WhoopMatchedData(
        strain_score=match.strain_score,
        average_heart_rate=match.average_heart_rate,
        max_heart_rate=match.max_heart_rate,
        calories=match.calories,
        distance=match.distance,
        elevation_gain=match.elevation_gain,
        zone_durations=match.zone_durations,
    )
