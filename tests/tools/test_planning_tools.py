"""Tests for upcoming workouts and planned workout lookup."""

import pytest

from app.core.errors import ErrorContext, TrainerRoadApiError
from app.models.planned import Discipline, WorkoutSource
from app.tools.planning import PlanningTools


@pytest.fixture
def calendars(intervals, trainerroad, builders):
    trainerroad.planned = [
        builders.planned("tr-1", "Gibbs", "2024-12-30T06:00:00Z", tss=85),
        builders.planned("tr-2", "Easy Run", "2024-12-31T00:00:00.000Z", discipline=Discipline.RUN),
        builders.planned("tr-9", "Pettit", "2025-01-20T06:00:00Z"),
    ]
    intervals.planned = [
        builders.planned("77", "Gibbs", "2024-12-30T00:00:00Z", source=WorkoutSource.INTERVALS, tss=84),
        builders.planned("78", "Swim drills", "2024-12-31T00:00:00Z", source=WorkoutSource.INTERVALS, discipline=Discipline.SWIM),
    ]
    return intervals, trainerroad


@pytest.mark.asyncio
async def test_upcoming_workouts_merges_and_sorts(fixed_now, calendars):
    intervals, trainerroad = calendars

    result = await PlanningTools(intervals, trainerroad).get_upcoming_workouts(days=7)

    assert (result.start_date, result.end_date) == ("2024-12-29", "2025-01-05")
    assert [w.id for w in result.workouts] == ["tr-1", "tr-2", "78"]


@pytest.mark.asyncio
async def test_upcoming_workouts_sport_filter(fixed_now, calendars):
    tools = PlanningTools(*calendars)

    runs = await tools.get_upcoming_workouts(days=7, sport="running")
    assert [w.id for w in runs.workouts] == ["tr-2"]

    strength = await tools.get_upcoming_workouts(days=7, sport="strength")
    assert strength.workouts == []


@pytest.mark.asyncio
async def test_upcoming_workouts_with_trainerroad_only(fixed_now, trainerroad, builders):
    trainerroad.planned = [builders.planned("tr-1", "Gibbs", "2024-12-30T06:00:00Z")]

    result = await PlanningTools(None, trainerroad).get_upcoming_workouts(days=3)

    assert trainerroad.calls == [("2024-12-29", "2025-01-01", "UTC")]
    assert [w.id for w in result.workouts] == ["tr-1"]


@pytest.mark.asyncio
async def test_details_by_id_searches_thirty_days(fixed_now, calendars):
    intervals, trainerroad = calendars

    workout = await PlanningTools(intervals, trainerroad).get_planned_workout_details(workout_id="tr-9")

    assert workout.name == "Pettit"
    assert trainerroad.calls == [("2024-12-29", "2025-01-28", "UTC")]


@pytest.mark.asyncio
async def test_details_by_id_finds_intervals_event(fixed_now, calendars):
    workout = await PlanningTools(*calendars).get_planned_workout_details(workout_id="77")
    assert workout.source == WorkoutSource.INTERVALS


@pytest.mark.asyncio
async def test_details_by_id_not_found(fixed_now, calendars):
    assert await PlanningTools(*calendars).get_planned_workout_details(workout_id="nope") is None


@pytest.mark.asyncio
async def test_details_by_date_prefers_trainerroad(fixed_now, calendars):
    workout = await PlanningTools(*calendars).get_planned_workout_details(date="tomorrow")
    assert workout.id == "tr-1"


@pytest.mark.asyncio
async def test_details_source_restricts_calendars(fixed_now, calendars):
    intervals, trainerroad = calendars
    tools = PlanningTools(intervals, trainerroad)

    workout = await tools.get_planned_workout_details(date="2024-12-30", source="intervals.icu")
    assert workout.id == "77"
    assert trainerroad.calls == []

    assert await tools.get_planned_workout_details(workout_id="78", source="zwift") is None


@pytest.mark.asyncio
async def test_details_lookup_propagates_calendar_errors(fixed_now, calendars):
    intervals, trainerroad = calendars
    trainerroad.error = TrainerRoadApiError.from_http_status(500, ErrorContext(operation="fetch calendar"))

    with pytest.raises(TrainerRoadApiError):
        await PlanningTools(intervals, trainerroad).get_planned_workout_details(workout_id="77")


@pytest.mark.asyncio
async def test_details_without_id_or_date(fixed_now, calendars):
    assert await PlanningTools(*calendars).get_planned_workout_details() is None
