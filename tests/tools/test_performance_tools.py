"""Tests for power, pace and HR curves and activity totals."""

import pytest

from app.models.activity import CompletedWorkout
from app.models.curves import (
    ActivityPaceCurve,
    ActivityPowerCurve,
    PaceCurvePoint,
    PaceCurveSet,
    PowerCurvePoint,
    PowerCurveSet,
)
from app.tools.performance import PerformanceTools, calculate_activity_totals
from app.utils.curve_utils import DEFAULT_SWIMMING_DISTANCES


def _power_set(watts_5s: float, watts_20min: float) -> PowerCurveSet:
    return PowerCurveSet(
        durations=[5, 1200],
        activities=[
            ActivityPowerCurve(
                activity_id="i1",
                date="2024-12-14",
                weight_kg=70,
                curve=[
                    PowerCurvePoint(duration_seconds=5, duration_label="5s", watts=watts_5s, watts_per_kg=0),
                    PowerCurvePoint(duration_seconds=1200, duration_label="20min", watts=watts_20min, watts_per_kg=0),
                ],
            )
        ],
    )


def _pace_set(seconds_1km: float, seconds_5km: float) -> PaceCurveSet:
    return PaceCurveSet(
        distances=[1000, 5000],
        activities=[
            ActivityPaceCurve(
                activity_id="i2",
                date="2024-12-15",
                curve=[
                    PaceCurvePoint(distance_meters=1000, distance_label="1km", time_seconds=seconds_1km, pace=""),
                    PaceCurvePoint(distance_meters=5000, distance_label="5km", time_seconds=seconds_5km, pace=""),
                ],
            )
        ],
    )


@pytest.mark.asyncio
async def test_power_curve_with_comparison(fixed_now, intervals):
    intervals.power_curves = {"2024-12-01": _power_set(900, 280), "2024-11-01": _power_set(950, 260)}

    result = await PerformanceTools(intervals).get_power_curve(
        "2024-12-01", durations=[5, 1200], compare_to_start="2024-11-01", compare_to_end="2024-11-30"
    )

    assert intervals.calls[0] == ("power", "2024-12-01", "2024-12-29", "Ride", [5, 1200])
    assert result.durations_analyzed == ["5s", "20min"]
    assert result.summary["best_20min"].watts == 280
    assert result.summary["best_60min"] is None
    assert result.estimated_ftp == 266

    changes = {change.label: change for change in result.comparison.changes}
    assert changes["5s"].change == -50
    assert changes["5s"].change_percent == -5.3
    assert not changes["5s"].improved
    assert changes["20min"].change_percent == 7.7
    assert changes["20min"].improved
    assert result.comparison.previous_activity_count == 1


@pytest.mark.asyncio
async def test_power_curve_without_intervals(fixed_now):
    result = await PerformanceTools(None).get_power_curve("2024-12-01")

    assert result.activity_count == 0
    assert result.summary == {}
    assert result.durations_analyzed[-1] == "2hr"


@pytest.mark.asyncio
async def test_pace_curve_lower_time_is_improvement(fixed_now, intervals):
    intervals.pace_curves = {"2024-12-01": _pace_set(220, 1200), "2024-11-01": _pace_set(230, 1260)}

    result = await PerformanceTools(intervals).get_pace_curve(
        "2024-12-01", sport="running", distances=[1000, 5000], gap=True, compare_to_start="2024-11-01"
    )

    assert intervals.calls[0] == ("pace", "2024-12-01", "2024-12-29", "Run", [1000, 5000], True)
    assert result.gap_adjusted
    assert result.summary["best_5km"].time_seconds == 1200
    changes = {change.label: change for change in result.comparison.changes}
    assert changes["5km"].change == -60
    assert changes["5km"].change_percent == -4.8
    assert changes["5km"].improved


@pytest.mark.asyncio
async def test_pace_curve_swimming_ignores_gap(fixed_now, intervals):
    result = await PerformanceTools(intervals).get_pace_curve("2024-12-01", sport="swimming", gap=True)

    assert intervals.calls == [("pace", "2024-12-01", "2024-12-29", "Swim", DEFAULT_SWIMMING_DISTANCES, None)]
    assert not result.gap_adjusted
    assert "half_iron_swim" in result.distances_analyzed


@pytest.mark.asyncio
async def test_hr_curve_maps_sport_to_activity_type(fixed_now, intervals):
    result = await PerformanceTools(intervals).get_hr_curve("2024-12-01", sport="cycling", durations=[60])

    assert intervals.calls == [("hr", "2024-12-01", "2024-12-29", "Ride", [60])]
    assert result.sport == "cycling"
    assert result.summary["max_1min"] is None


def _workout(workout_id, activity_type, start, duration, distance, elevation=None, tss=None, calories=None, work=None):
    return CompletedWorkout(
        id=workout_id,
        activity_type=activity_type,
        start_time=start,
        duration=duration,
        distance=distance,
        elevation_gain=elevation,
        tss=tss,
        calories=calories,
        work_kj=work,
    )


WORKOUTS = [
    _workout("r1", "Cycling", "2024-12-28T07:00:00-05:00", "1:00:00", "32.4 km", "310 m", 72, 800, 774),
    _workout("s1", "Swimming", "2024-12-27T18:00:00-05:00", "0:30:00", "2000 m", tss=30),
    _workout("r2", "Cycling", "2024-12-28T17:00:00-05:00", "0:45:00", "20.0 km", "90 m", 40, 500, 500),
]


def test_calculate_activity_totals():
    totals = calculate_activity_totals(WORKOUTS, "2024-12-23", "2024-12-29")

    assert totals.period.days == 7
    assert totals.period.weeks == 1
    assert totals.period.active_days == 2

    assert totals.totals.activities == 3
    assert totals.totals.duration == "2:15:00"
    assert totals.totals.distance == "54 km"
    assert totals.totals.climbing == "400 m"
    assert totals.totals.load == 142
    assert totals.totals.kcal == 1300
    assert totals.totals.work == "1274 kJ"

    cycling = totals.by_sport["cycling"]
    assert (cycling.activities, cycling.duration, cycling.distance) == (2, "1:45:00", "52 km")
    swimming = totals.by_sport["swimming"]
    assert swimming.distance == "2 km"
    assert swimming.climbing is None
    assert swimming.work is None


def test_calculate_activity_totals_partial_week():
    totals = calculate_activity_totals([], "2024-12-01", "2024-12-10")

    assert (totals.period.days, totals.period.weeks, totals.period.active_days) == (10, 2, 0)
    assert totals.totals.duration == "0:00:00"
    assert totals.by_sport == {}


@pytest.mark.asyncio
async def test_activity_totals_sport_filter(fixed_now, intervals):
    intervals.activities = WORKOUTS

    totals = await PerformanceTools(intervals).get_activity_totals("7 days ago", sports=["swimming"])

    assert intervals.calls == [("activities", "2024-12-22", "2024-12-29", None)]
    assert list(totals.by_sport) == ["swimming"]
    assert totals.totals.activities == 1
