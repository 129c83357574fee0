"""Input and result models for the aggregation tools.

Inputs are validated before a tool runs; results are what the response
builder serializes.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.activity import CompletedWorkout
from app.models.athlete import AthleteProfile
from app.models.planned import PlannedWorkout
from app.models.recovery import RecoveryData, StrainData
from app.models.wellness import WellnessData

Sport = Literal["cycling", "running", "swimming", "skiing", "hiking", "rowing", "strength"]
PlannedSource = Literal["trainerroad", "zwift", "intervals.icu"]
CurveSport = Literal["cycling", "running", "swimming"]
PaceSport = Literal["running", "swimming"]


class ToolInput(BaseModel):
    model_config = ConfigDict(extra="forbid")


class NoInput(ToolInput):
    pass


class RecentWorkoutsInput(ToolInput):
    days: int = Field(default=7, ge=1, le=90, description="Number of days to look back, including today")
    sport: Sport | None = None


class WorkoutHistoryInput(ToolInput):
    start_date: str = Field(description="ISO date or natural language, e.g. '30 days ago'")
    end_date: str | None = Field(default=None, description="Defaults to today")
    sport: Sport | None = None


class RecoveryTrendsInput(ToolInput):
    start_date: str
    end_date: str | None = None


class TrainingLoadTrendsInput(ToolInput):
    days: int = Field(default=42, ge=1, le=365)


class UpcomingWorkoutsInput(ToolInput):
    days: int = Field(default=7, ge=1, le=60)
    sport: Sport | None = None


class PlannedWorkoutDetailsInput(ToolInput):
    workout_id: str | None = None
    date: str | None = None
    source: PlannedSource | None = None

    @model_validator(mode="after")
    def require_lookup_key(self) -> PlannedWorkoutDetailsInput:
        if not self.workout_id and not self.date:
            raise ValueError("Provide either workout_id or date")
        return self


class RecentStrainInput(ToolInput):
    days: int = Field(default=7, ge=1, le=30, description="Number of days to look back, including today")


class WellnessTrendsInput(ToolInput):
    start_date: str = Field(description="ISO date or natural language, e.g. '30 days ago'")
    end_date: str | None = Field(default=None, description="Defaults to today")


class WorkoutIdInput(ToolInput):
    activity_id: str = Field(min_length=1, description="Intervals.icu activity ID, e.g. 'i12345678'")


class _ComparisonInput(ToolInput):
    start_date: str
    end_date: str | None = None
    compare_to_start: str | None = Field(default=None, description="Start of a previous period to compare against")
    compare_to_end: str | None = None

    @model_validator(mode="after")
    def require_complete_comparison(self) -> _ComparisonInput:
        if self.compare_to_end and not self.compare_to_start:
            raise ValueError("compare_to_end needs compare_to_start")
        return self


class PowerCurveInput(_ComparisonInput):
    durations: list[int] | None = Field(default=None, description="Durations in seconds")


class HrCurveInput(_ComparisonInput):
    sport: CurveSport | None = None
    durations: list[int] | None = Field(default=None, description="Durations in seconds")


class PaceCurveInput(_ComparisonInput):
    sport: PaceSport
    distances: list[int] | None = Field(default=None, description="Distances in meters")
    gap: bool | None = Field(default=None, description="Gradient adjusted pace, running only")


class ActivityTotalsInput(ToolInput):
    start_date: str
    end_date: str | None = None
    sports: list[Sport] | None = None


class TodaysRecoveryResult(BaseModel):
    date: str
    recovery: RecoveryData | None = None


class CompletedWorkoutsResult(BaseModel):
    start_date: str
    end_date: str
    workouts: list[CompletedWorkout]


class PlannedWorkoutsResult(BaseModel):
    start_date: str
    end_date: str
    workouts: list[PlannedWorkout]


class AthleteProfileResult(BaseModel):
    profile: AthleteProfile | None = None


class RecentStrainResult(BaseModel):
    start_date: str
    end_date: str
    data: list[StrainData]


class TodaysStrainResult(BaseModel):
    date: str
    strain: StrainData | None = None


class TodaysWellnessResult(BaseModel):
    date: str
    wellness: WellnessData | None = None
