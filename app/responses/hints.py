"""Contextual follow-up hints for tool responses.

A hint generator looks at a tool result and returns a hint, a list of
hints, or None. Hints end up under SUGGESTED NEXT ACTIONS.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from app.models.planned import Discipline, PlannedWorkout, WorkoutSource
from app.models.training_load import AcwrStatus, TrainingLoadTrends
from app.tools.interfaces import CompletedWorkoutsResult, PlannedWorkoutsResult, TodaysRecoveryResult
from app.utils.workout_utils import are_workouts_similar

HintGenerator = Callable[[Any], str | list[str] | None]

# TSB below this is deep fatigue for most athletes
DEEP_FATIGUE_TSB = -30


def generate_hints(data: Any, generators: Sequence[HintGenerator]) -> list[str] | None:
    """Run every generator and flatten the non-empty results."""
    hints: list[str] = []
    for generator in generators:
        hint = generator(data)
        if not hint:
            continue
        if isinstance(hint, list):
            hints.extend(hint)
        else:
            hints.append(hint)
    return hints or None


def recovery_planning_hint(data: TodaysRecoveryResult) -> str | None:
    if data.recovery is None:
        return None
    return (
        "To relate this recovery to today's training, use get_todays_planned_workouts to see what is scheduled. "
        "For historical context, use get_recovery_trends to compare today with recent days."
    )


def low_recovery_hint(data: TodaysRecoveryResult) -> str | None:
    if data.recovery is None or data.recovery.recovery_level != "LOW":
        return None
    return (
        "Recovery is LOW. Use get_training_load_trends to check whether accumulated fatigue (TSB, ACWR) "
        "explains it before suggesting changes to today's plan."
    )


def _unlinked_trainerroad_runs(workouts: list[PlannedWorkout]) -> list[PlannedWorkout]:
    runs = [w for w in workouts if w.source == WorkoutSource.TRAINERROAD and w.discipline == Discipline.RUN]
    intervals = [w for w in workouts if w.source == WorkoutSource.INTERVALS]
    return [run for run in runs if not any(are_workouts_similar(run, other) for other in intervals)]


def planned_workout_details_hint(data: PlannedWorkoutsResult) -> str | None:
    if not data.workouts:
        return None
    ids = ", ".join(w.id for w in data.workouts)
    return f"For the full description and interval structure, use get_planned_workout_details with workout_id. Available IDs: {ids}"


def unlinked_runs_hint(data: PlannedWorkoutsResult) -> str | None:
    runs = _unlinked_trainerroad_runs(data.workouts)
    if not runs:
        return None
    return (
        f"Found {len(runs)} TrainerRoad running workout(s) with no matching Intervals.icu calendar entry. "
        "These will not appear on devices synced from Intervals.icu."
    )


def planned_readiness_hint(data: PlannedWorkoutsResult) -> str | None:
    if not data.workouts:
        return None
    return "To check readiness for these workouts, use get_todays_recovery and get_training_load_trends."


def completed_workouts_hint(data: CompletedWorkoutsResult) -> str | None:
    if not data.workouts:
        return None
    return (
        "To see how these sessions affected fitness and fatigue, use get_training_load_trends. "
        "For older sessions, use get_workout_history with a start_date."
    )


def training_load_risk_hint(data: TrainingLoadTrends) -> str | None:
    status = data.summary.acwr_status
    if status not in (AcwrStatus.CAUTION, AcwrStatus.HIGH_RISK):
        return None
    return (
        f"ACWR is {data.summary.acwr} ({status.value}). Use get_recovery_trends over the same period "
        "to see whether recovery is keeping up with the load."
    )


def training_load_fatigue_hint(data: TrainingLoadTrends) -> str | None:
    if not data.data or data.summary.current_tsb >= DEEP_FATIGUE_TSB:
        return None
    return "TSB is very negative. Use get_upcoming_workouts to review whether the next days include recovery."


RECOVERY_HINTS: list[HintGenerator] = [recovery_planning_hint, low_recovery_hint]
PLANNED_WORKOUT_HINTS: list[HintGenerator] = [planned_workout_details_hint, unlinked_runs_hint, planned_readiness_hint]
COMPLETED_WORKOUT_HINTS: list[HintGenerator] = [completed_workouts_hint]
TRAINING_LOAD_HINTS: list[HintGenerator] = [training_load_risk_hint, training_load_fatigue_hint]
