"""Tests for workout history, recovery trends and training load trends."""

import pytest

from app.core.errors import DateParseError, ErrorContext, WhoopApiError
from app.models.activity import HeatMetrics, HeatZone, TemperatureMetrics, WorkoutIntervals, WorkoutNotes
from app.models.recovery import RecoverySummary
from app.models.wellness import WellnessData
from app.tools.historical import HistoricalTools, calculate_recovery_summary


def test_recovery_summary_rounds_and_bounds(builders):
    data = [
        builders.recovery("2024-12-27", 50, hrv=55.5, sleep_hours=6.5),
        builders.recovery("2024-12-28", 81, hrv=60.2, sleep_hours=7.5),
        builders.recovery("2024-12-29", 33, hrv=48, sleep_hours=8),
    ]

    summary = calculate_recovery_summary(data)

    assert summary.avg_recovery == 54.7
    assert summary.avg_hrv == 54.6
    assert summary.avg_sleep_hours == 7.3
    assert summary.min_recovery == 33
    assert summary.max_recovery == 81


def test_recovery_summary_of_empty_series_is_zero():
    assert calculate_recovery_summary([]) == RecoverySummary()


@pytest.mark.asyncio
async def test_workout_history_parses_natural_language_dates(fixed_now, intervals, builders):
    intervals.activities = [builders.activity("i1", "2024-12-20T12:00:00Z")]

    result = await HistoricalTools(intervals, None).get_workout_history("2 weeks ago", "yesterday", "running")

    assert (result.start_date, result.end_date) == ("2024-12-15", "2024-12-28")
    assert intervals.calls == [("activities", "2024-12-15", "2024-12-28", "running")]
    assert [w.id for w in result.workouts] == ["i1"]


@pytest.mark.asyncio
async def test_workout_history_end_defaults_to_today_in_athlete_timezone(fixed_now, intervals):
    intervals.timezone = "Pacific/Kiritimati"

    result = await HistoricalTools(intervals, None).get_workout_history("2024-12-01")

    assert (result.start_date, result.end_date) == ("2024-12-01", "2024-12-30")


@pytest.mark.asyncio
async def test_workout_history_rejects_unparseable_dates(fixed_now, intervals):
    with pytest.raises(DateParseError) as exc_info:
        await HistoricalTools(intervals, None).get_workout_history("sometime soon")
    assert exc_info.value.parameter_name == "start_date"
    assert intervals.calls == []


@pytest.mark.asyncio
async def test_workout_history_matches_whoop(fixed_now, intervals, whoop, builders):
    intervals.activities = [builders.activity("i1", "2024-12-20T12:00:00Z")]
    whoop.workouts = [builders.strain("2024-12-20T11:58:00.000Z", strain=15.0)]

    result = await HistoricalTools(intervals, whoop).get_workout_history("2024-12-15", "2024-12-21")

    assert whoop.calls == [("workouts", "2024-12-15", "2024-12-21")]
    assert result.workouts[0].whoop.strain_score == 15.0


@pytest.mark.asyncio
async def test_recovery_trends(fixed_now, intervals, whoop, builders):
    whoop.recoveries = [builders.recovery("2024-12-28", 40), builders.recovery("2024-12-29", 80)]

    trends = await HistoricalTools(intervals, whoop).get_recovery_trends("last week")

    assert whoop.calls == [("recoveries", "2024-12-16", "2024-12-29")]
    assert trends.summary.avg_recovery == 60
    assert len(trends.data) == 2


@pytest.mark.asyncio
async def test_recovery_trends_without_whoop(fixed_now, intervals):
    trends = await HistoricalTools(intervals, None).get_recovery_trends("2024-12-01", "2024-12-29")
    assert trends.data == []
    assert trends.summary == RecoverySummary()


@pytest.mark.asyncio
async def test_recovery_trends_propagate_errors(fixed_now, whoop):
    whoop.error = WhoopApiError.from_http_status(429, ErrorContext(operation="fetch recovery"))
    with pytest.raises(WhoopApiError) as exc_info:
        await HistoricalTools(None, whoop).get_recovery_trends("2024-12-01")
    assert exc_info.value.is_retryable


@pytest.mark.asyncio
async def test_training_load_trends(intervals, builders):
    intervals.trends = builders.load(28, tsb=-12)

    trends = await HistoricalTools(intervals, None).get_training_load_trends(28)

    assert intervals.calls == [("trends", 28)]
    assert trends.summary.current_tsb == -12


@pytest.mark.asyncio
async def test_training_load_trends_without_intervals():
    trends = await HistoricalTools(None, None).get_training_load_trends(14)
    assert trends.period_days == 14
    assert trends.data == []
    assert trends.summary.current_ctl == 0


@pytest.mark.asyncio
async def test_wellness_trends_resolve_dates_and_drop_whoop_fields(fixed_now, intervals, whoop):
    intervals.wellness_days = [
        WellnessData(date="2024-12-28", hrv=60),
        WellnessData(date="2024-12-29", hrv=58, soreness=3),
    ]

    trends = await HistoricalTools(intervals, whoop).get_wellness_trends("7 days ago")

    assert intervals.calls == [("wellness", "2024-12-22", "2024-12-29")]
    assert [(entry.date, entry.hrv, entry.soreness) for entry in trends.data] == [("2024-12-29", None, 3)]


@pytest.mark.asyncio
async def test_wellness_trends_without_intervals(fixed_now):
    trends = await HistoricalTools(None, None).get_wellness_trends("2024-12-23", "2024-12-29")
    assert (trends.period_days, trends.data) == (7, [])


@pytest.mark.asyncio
async def test_workout_details_without_intervals():
    tools = HistoricalTools(None, None)

    assert (await tools.get_workout_intervals("i1")).intervals == []
    assert (await tools.get_workout_notes("i1")).notes == []
    assert (await tools.get_workout_weather("i1")).weather_description is None
    assert (await tools.get_workout_heat_zones("i1")).heat_zones is None


@pytest.mark.asyncio
async def test_workout_intervals_and_notes_pass_through(intervals):
    intervals.workout_intervals = WorkoutIntervals(activity_id="i1", intervals=[], groups=[])
    intervals.notes = WorkoutNotes(activity_id="i1", notes=[])
    tools = HistoricalTools(intervals, None)

    assert (await tools.get_workout_intervals("i1")).activity_id == "i1"
    assert (await tools.get_workout_notes("i1")).activity_id == "i1"


@pytest.mark.asyncio
async def test_workout_heat_zones_combine_heat_and_temperature(intervals):
    intervals.heat = HeatMetrics(
        zones=[
            HeatZone(
                name="Zone 1: No Heat Strain", low_heat_strain_index=0, high_heat_strain_index=0.9, time_in_zone="0:10:00"
            )
        ],
        max_heat_strain_index=0.8,
        median_heat_strain_index=0.4,
    )
    intervals.temperature = TemperatureMetrics(
        min_ambient_temperature=18,
        max_ambient_temperature=24,
        avg_ambient_temperature=21,
        start_ambient_temperature=18,
        end_ambient_temperature=24,
    )

    result = await HistoricalTools(intervals, None).get_workout_heat_zones("i1")

    assert result.heat_zones[0].time_in_zone == "0:10:00"
    assert result.max_heat_strain_index == 0.8
    assert result.temperature.avg_ambient_temperature == 21


@pytest.mark.asyncio
async def test_workout_heat_zones_temperature_only(intervals):
    intervals.temperature = TemperatureMetrics(
        min_ambient_temperature=5,
        max_ambient_temperature=7,
        avg_ambient_temperature=6,
        start_ambient_temperature=5,
        end_ambient_temperature=7,
    )

    result = await HistoricalTools(intervals, None).get_workout_heat_zones("i1")

    assert result.heat_zones is None
    assert result.temperature.max_ambient_temperature == 7
