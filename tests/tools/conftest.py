"""In-memory platform clients for tool and registry tests."""

from __future__ import annotations

import pytest

from app.core.errors import ApiError
from app.models.activity import (
    CompletedWorkout,
    HeatMetrics,
    TemperatureMetrics,
    WorkoutIntervals,
    WorkoutNotes,
    WorkoutWeather,
)
from app.models.athlete import AthleteProfile
from app.models.curves import HrCurveSet, PaceCurveSet, PowerCurveSet
from app.models.planned import Discipline, PlannedWorkout, WorkoutSource
from app.models.recovery import RecoveryData, StrainActivity, StrainData
from app.models.training_load import DailyTrainingLoad, TrainingLoadSummary, TrainingLoadTrends
from app.models.wellness import WellnessData, WellnessTrends


class FakeIntervals:
    def __init__(self) -> None:
        self.timezone = "UTC"
        self.activities: list[CompletedWorkout] = []
        self.planned: list[PlannedWorkout] = []
        self.trends = TrainingLoadTrends(period_days=42, data=[], summary=TrainingLoadSummary())
        self.profile: AthleteProfile | None = None
        self.wellness: WellnessData | None = None
        self.wellness_days: list[WellnessData] = []
        self.workout_intervals: WorkoutIntervals | None = None
        self.notes: WorkoutNotes | None = None
        self.weather: WorkoutWeather | None = None
        self.heat: HeatMetrics | None = None
        self.temperature: TemperatureMetrics | None = None
        self.power_curves: dict[str, PowerCurveSet] = {}
        self.hr_curves: dict[str, HrCurveSet] = {}
        self.pace_curves: dict[str, PaceCurveSet] = {}
        self.error: ApiError | None = None
        self.calls: list[tuple] = []
        self.closed = False

    async def get_athlete_timezone(self) -> str:
        return self.timezone

    async def get_activities(self, start_date: str, end_date: str, sport: str | None = None) -> list[CompletedWorkout]:
        self.calls.append(("activities", start_date, end_date, sport))
        if self.error:
            raise self.error
        return [w.model_copy() for w in self.activities]

    async def get_planned_events(self, start_date: str, end_date: str) -> list[PlannedWorkout]:
        self.calls.append(("events", start_date, end_date))
        if self.error:
            raise self.error
        return [w for w in self.planned if start_date <= w.scheduled_date <= end_date]

    async def get_training_load_trends(self, days: int = 42) -> TrainingLoadTrends:
        self.calls.append(("trends", days))
        if self.error:
            raise self.error
        return self.trends

    async def get_athlete_profile(self) -> AthleteProfile:
        if self.error:
            raise self.error
        return self.profile

    async def get_today_wellness(self) -> WellnessData | None:
        return self.wellness

    async def get_wellness_trends(self, start_date: str, end_date: str) -> WellnessTrends:
        self.calls.append(("wellness", start_date, end_date))
        if self.error:
            raise self.error
        return WellnessTrends(period_days=7, start_date=start_date, end_date=end_date, data=self.wellness_days)

    async def get_activity_intervals(self, activity_id: str) -> WorkoutIntervals:
        if self.error:
            raise self.error
        return self.workout_intervals

    async def get_activity_notes(self, activity_id: str) -> WorkoutNotes:
        if self.error:
            raise self.error
        return self.notes

    async def get_activity_weather(self, activity_id: str) -> WorkoutWeather:
        return self.weather or WorkoutWeather(activity_id=activity_id)

    async def get_activity_heat_metrics(self, activity_id: str) -> HeatMetrics | None:
        return self.heat

    async def get_activity_temperature_metrics(self, activity_id: str) -> TemperatureMetrics | None:
        return self.temperature

    async def get_power_curves(self, start_date, end_date, activity_type=None, durations=None) -> PowerCurveSet:
        self.calls.append(("power", start_date, end_date, activity_type, durations))
        if self.error:
            raise self.error
        return self.power_curves.get(start_date, PowerCurveSet(durations=durations or [], activities=[]))

    async def get_hr_curves(self, start_date, end_date, activity_type=None, durations=None) -> HrCurveSet:
        self.calls.append(("hr", start_date, end_date, activity_type, durations))
        return self.hr_curves.get(start_date, HrCurveSet(durations=durations or [], activities=[]))

    async def get_pace_curves(self, start_date, end_date, activity_type, distances, gap=None) -> PaceCurveSet:
        self.calls.append(("pace", start_date, end_date, activity_type, distances, gap))
        return self.pace_curves.get(start_date, PaceCurveSet(distances=distances, activities=[]))

    async def aclose(self) -> None:
        self.closed = True


class FakeWhoop:
    def __init__(self) -> None:
        self.recovery: RecoveryData | None = None
        self.recoveries: list[RecoveryData] = []
        self.workouts: list[StrainActivity] = []
        self.strain: StrainData | None = None
        self.strain_days: list[StrainData] = []
        self.error: ApiError | None = None
        self.timezone_getter = None
        self.calls: list[tuple] = []
        self.closed = False

    def set_timezone_getter(self, getter) -> None:
        self.timezone_getter = getter

    async def get_today_recovery(self) -> RecoveryData | None:
        if self.error:
            raise self.error
        return self.recovery

    async def get_recoveries(self, start_date: str, end_date: str) -> list[RecoveryData]:
        self.calls.append(("recoveries", start_date, end_date))
        if self.error:
            raise self.error
        return self.recoveries

    async def get_workouts(self, start_date: str, end_date: str) -> list[StrainActivity]:
        self.calls.append(("workouts", start_date, end_date))
        if self.error:
            raise self.error
        return self.workouts

    async def get_strain_data(self, start_date: str, end_date: str) -> list[StrainData]:
        self.calls.append(("strain", start_date, end_date))
        if self.error:
            raise self.error
        return self.strain_days

    async def get_today_strain(self) -> StrainData | None:
        if self.error:
            raise self.error
        return self.strain

    async def aclose(self) -> None:
        self.closed = True


class FakeTrainerRoad:
    def __init__(self) -> None:
        self.planned: list[PlannedWorkout] = []
        self.error: ApiError | None = None
        self.calls: list[tuple] = []
        self.closed = False

    async def get_planned_workouts(
        self, start_date: str, end_date: str, timezone: str | None = None
    ) -> list[PlannedWorkout]:
        self.calls.append((start_date, end_date, timezone))
        if self.error:
            raise self.error
        return [w for w in self.planned if start_date <= w.scheduled_date <= end_date]

    async def aclose(self) -> None:
        self.closed = True


def make_recovery(day: str, score: float, hrv: float = 60, sleep_hours: float = 7.5, level: str = "SUFFICIENT"):
    return RecoveryData(
        date=day,
        recovery_score=score,
        recovery_level=level,
        recovery_level_description="",
        hrv_rmssd=hrv,
        resting_heart_rate=50,
        sleep_performance_percentage=88,
        sleep_hours=sleep_hours,
    )


def make_planned(
    workout_id: str,
    name: str,
    scheduled_for: str,
    source: WorkoutSource = WorkoutSource.TRAINERROAD,
    discipline: Discipline = Discipline.BIKE,
    tss: float | None = None,
) -> PlannedWorkout:
    return PlannedWorkout(
        id=workout_id,
        name=name,
        scheduled_for=scheduled_for,
        source=source,
        discipline=discipline,
        expected_tss=tss,
    )


def make_activity(activity_id: str, start_utc: str, activity_type: str = "Cycling") -> CompletedWorkout:
    return CompletedWorkout(
        id=activity_id,
        start_time=start_utc,
        start_date_utc=start_utc,
        activity_type=activity_type,
        tss=60,
    )


def make_strain(start_utc: str, activity_type: str = "Cycling", strain: float = 12.0) -> StrainActivity:
    return StrainActivity(
        id=f"whoop-{start_utc}",
        activity_type=activity_type,
        start_time=start_utc,
        start_time_utc=start_utc,
        end_time=start_utc,
        duration="1:00:00",
        strain_score=strain,
    )


def make_load(days: int, tsb: float) -> TrainingLoadTrends:
    return TrainingLoadTrends(
        period_days=days,
        data=[DailyTrainingLoad(date="2024-12-29", ctl=60, atl=60 - tsb, tsb=tsb)],
        summary=TrainingLoadSummary(current_ctl=60, current_atl=60 - tsb, current_tsb=tsb),
    )


@pytest.fixture
def intervals() -> FakeIntervals:
    return FakeIntervals()


@pytest.fixture
def whoop() -> FakeWhoop:
    return FakeWhoop()


@pytest.fixture
def trainerroad() -> FakeTrainerRoad:
    return FakeTrainerRoad()


@pytest.fixture
def builders():
    """Model builders, exposed as a fixture so test modules need no helper imports."""

    class Builders:
        recovery = staticmethod(make_recovery)
        planned = staticmethod(make_planned)
        activity = staticmethod(make_activity)
        strain = staticmethod(make_strain)
        load = staticmethod(make_load)

    return Builders
