"""Tool catalog - single source of truth for the tools exposed to callers."""

from dataclasses import dataclass, field
from typing import Literal

from app.responses.field_descriptions import FieldCategory
from app.responses.hints import (
    COMPLETED_WORKOUT_HINTS,
    PLANNED_WORKOUT_HINTS,
    RECOVERY_HINTS,
    TRAINING_LOAD_HINTS,
    HintGenerator,
)
from app.tools.interfaces import (
    ActivityTotalsInput,
    HrCurveInput,
    NoInput,
    PaceCurveInput,
    PlannedWorkoutDetailsInput,
    PowerCurveInput,
    RecentStrainInput,
    RecentWorkoutsInput,
    RecoveryTrendsInput,
    ToolInput,
    TrainingLoadTrendsInput,
    UpcomingWorkoutsInput,
    WellnessTrendsInput,
    WorkoutHistoryInput,
    WorkoutIdInput,
)

Platform = Literal["intervals", "whoop", "trainerroad"]


@dataclass(frozen=True)
class ToolSpec:
    """Specification for a tool."""

    name: str
    description: str
    input_model: type[ToolInput]
    field_categories: tuple[FieldCategory, ...]
    platforms: tuple[Platform, ...]
    hints: list[HintGenerator] = field(default_factory=list)


CANONICAL_TOOLS: dict[str, ToolSpec] = {
    # Current
    "get_todays_recovery": ToolSpec(
        name="get_todays_recovery",
        description="Today's Whoop recovery: recovery score, HRV, resting heart rate and last night's sleep",
        input_model=NoInput,
        field_categories=("recovery", "sleep"),
        platforms=("whoop",),
        hints=RECOVERY_HINTS,
    ),
    "get_recent_workouts": ToolSpec(
        name="get_recent_workouts",
        description="Completed workouts from Intervals.icu over the last N days, with matching Whoop strain data",
        input_model=RecentWorkoutsInput,
        field_categories=("workout", "whoop"),
        platforms=("intervals", "whoop"),
        hints=COMPLETED_WORKOUT_HINTS,
    ),
    "get_todays_planned_workouts": ToolSpec(
        name="get_todays_planned_workouts",
        description="Workouts scheduled for today in TrainerRoad and Intervals.icu, de-duplicated",
        input_model=NoInput,
        field_categories=("planned",),
        platforms=("trainerroad", "intervals"),
        hints=PLANNED_WORKOUT_HINTS,
    ),
    "get_athlete_profile": ToolSpec(
        name="get_athlete_profile",
        description="Athlete profile from Intervals.icu: name, location, timezone, unit preferences and age",
        input_model=NoInput,
        field_categories=("athlete",),
        platforms=("intervals",),
    ),
    "get_recent_strain": ToolSpec(
        name="get_recent_strain",
        description="Whoop day strain for the last N days with the workouts recorded each day",
        input_model=RecentStrainInput,
        field_categories=("whoop", "strain"),
        platforms=("whoop",),
    ),
    "get_todays_strain": ToolSpec(
        name="get_todays_strain",
        description="Whoop strain accumulated so far today, with today's Whoop workouts",
        input_model=NoInput,
        field_categories=("whoop", "strain"),
        platforms=("whoop",),
    ),
    "get_todays_wellness": ToolSpec(
        name="get_todays_wellness",
        description=(
            "Today's wellness entries from Intervals.icu (weight, soreness, fatigue, mood, etc.); "
            "fields Whoop measures are left out when Whoop is configured"
        ),
        input_model=NoInput,
        field_categories=("wellness",),
        platforms=("intervals",),
    ),
    # Historical
    "get_workout_history": ToolSpec(
        name="get_workout_history",
        description="Completed workouts in a date range; dates accept ISO format or phrases like '30 days ago'",
        input_model=WorkoutHistoryInput,
        field_categories=("workout", "whoop"),
        platforms=("intervals", "whoop"),
        hints=COMPLETED_WORKOUT_HINTS,
    ),
    "get_recovery_trends": ToolSpec(
        name="get_recovery_trends",
        description="Daily Whoop recovery over a date range with averages and min/max",
        input_model=RecoveryTrendsInput,
        field_categories=("recovery_trends", "recovery", "sleep"),
        platforms=("whoop",),
    ),
    "get_training_load_trends": ToolSpec(
        name="get_training_load_trends",
        description="CTL (fitness), ATL (fatigue) and TSB (form) from Intervals.icu with trend, ramp rate and ACWR",
        input_model=TrainingLoadTrendsInput,
        field_categories=("fitness",),
        platforms=("intervals",),
        hints=TRAINING_LOAD_HINTS,
    ),
    "get_wellness_trends": ToolSpec(
        name="get_wellness_trends",
        description="Daily Intervals.icu wellness entries over a date range",
        input_model=WellnessTrendsInput,
        field_categories=("wellness",),
        platforms=("intervals",),
    ),
    "get_workout_intervals": ToolSpec(
        name="get_workout_intervals",
        description="Detected intervals of a completed workout with power, HR, pace and heat per interval",
        input_model=WorkoutIdInput,
        field_categories=("intervals",),
        platforms=("intervals",),
    ),
    "get_workout_notes": ToolSpec(
        name="get_workout_notes",
        description="Notes and comments written on a completed workout in Intervals.icu",
        input_model=WorkoutIdInput,
        field_categories=("notes",),
        platforms=("intervals",),
    ),
    "get_workout_weather": ToolSpec(
        name="get_workout_weather",
        description="Weather during an outdoor workout, as summarized by Intervals.icu",
        input_model=WorkoutIdInput,
        field_categories=("notes",),
        platforms=("intervals",),
    ),
    "get_workout_heat_zones": ToolSpec(
        name="get_workout_heat_zones",
        description="Time in each heat strain zone and ambient temperature for a completed workout",
        input_model=WorkoutIdInput,
        field_categories=("heat",),
        platforms=("intervals",),
    ),
    # Planning
    "get_upcoming_workouts": ToolSpec(
        name="get_upcoming_workouts",
        description="Planned workouts for the next N days from TrainerRoad and Intervals.icu",
        input_model=UpcomingWorkoutsInput,
        field_categories=("planned",),
        platforms=("trainerroad", "intervals"),
        hints=PLANNED_WORKOUT_HINTS,
    ),
    "get_planned_workout_details": ToolSpec(
        name="get_planned_workout_details",
        description="Details of one planned workout, looked up by workout_id or by date",
        input_model=PlannedWorkoutDetailsInput,
        field_categories=("planned",),
        platforms=("trainerroad", "intervals"),
    ),
    # Performance
    "get_power_curve": ToolSpec(
        name="get_power_curve",
        description=(
            "Best cycling power for durations from 5s to 2hr over a date range, with an FTP estimate "
            "and an optional comparison to an earlier period"
        ),
        input_model=PowerCurveInput,
        field_categories=("curves",),
        platforms=("intervals",),
    ),
    "get_pace_curve": ToolSpec(
        name="get_pace_curve",
        description="Best running or swimming times per distance, optionally gradient adjusted and compared to an earlier period",
        input_model=PaceCurveInput,
        field_categories=("curves",),
        platforms=("intervals",),
    ),
    "get_hr_curve": ToolSpec(
        name="get_hr_curve",
        description="Highest sustained heart rate per duration over a date range, optionally for one sport",
        input_model=HrCurveInput,
        field_categories=("curves",),
        platforms=("intervals",),
    ),
    "get_activity_totals": ToolSpec(
        name="get_activity_totals",
        description="Totals of time, distance, climbing, load and calories over a date range, overall and per sport",
        input_model=ActivityTotalsInput,
        field_categories=("totals",),
        platforms=("intervals",),
    ),
}


def get_tool_spec(tool_name: str) -> ToolSpec | None:
    return CANONICAL_TOOLS.get(tool_name)
