"""De-duplication of planned workouts coming from several calendars."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from dateutil import parser as date_parser

from app.models.planned import PlannedWorkout

TSS_SIMILARITY_THRESHOLD = 5
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def _squash(name: str) -> str:
    return _NON_ALNUM.sub("", name.lower())


def _start_key(workout: PlannedWorkout) -> datetime:
    start = date_parser.isoparse(workout.scheduled_for)
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    return start


def are_workouts_similar(first: PlannedWorkout, second: PlannedWorkout) -> bool:
    """Check whether two planned workouts are probably the same session.

    Same day is required. Then any of: linked external id, one squashed
    name containing the other, or expected TSS within 5 points.
    """
    if first.scheduled_date != second.scheduled_date:
        return False

    if first.external_id and first.external_id == second.external_id:
        return True
    if second.external_id == first.id or first.external_id == second.id:
        return True

    name_a = _squash(first.name)
    name_b = _squash(second.name)
    if name_a in name_b or name_b in name_a:
        return True

    if first.expected_tss and second.expected_tss:
        return abs(first.expected_tss - second.expected_tss) < TSS_SIMILARITY_THRESHOLD

    return False


def merge_planned_workouts(
    preferred: list[PlannedWorkout],
    others: list[PlannedWorkout],
) -> list[PlannedWorkout]:
    """Merge two lists, dropping entries of ``others`` that duplicate ``preferred``.

    Result is sorted by scheduled start.
    """
    merged = list(preferred)
    for candidate in others:
        if not any(are_workouts_similar(existing, candidate) for existing in preferred):
            merged.append(candidate)
    return sorted(merged, key=_start_key)
