from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class Discipline(StrEnum):
    BIKE = "Bike"
    RUN = "Run"
    SWIM = "Swim"


class WorkoutSource(StrEnum):
    TRAINERROAD = "trainerroad"
    ZWIFT = "zwift"
    INTERVALS = "intervals.icu"


class CalendarEvent(BaseModel):
    """One VEVENT from a calendar feed, before normalization.

    All-day events carry a naive midnight ``start``; timed events carry an
    aware ``start`` unless the feed used floating local times.
    """

    uid: str
    start: datetime
    end: datetime
    summary: str
    description: str | None = None
    all_day: bool = False


class PlannedWorkout(BaseModel):
    """A scheduled workout, built fresh for every query."""

    id: str
    scheduled_for: str = Field(description="ISO 8601 start, with offset when a timezone is known")
    name: str
    description: str | None = None
    expected_tss: float | None = None
    expected_if: float | None = Field(default=None, description="Intensity factor as a 0-1 fraction")
    expected_duration: str | None = Field(default=None, description="H:MM:SS")
    discipline: Discipline = Discipline.BIKE
    workout_type: str | None = None
    intervals: str | None = None
    source: WorkoutSource
    tags: list[str] | None = None
    external_id: str | None = None

    @property
    def scheduled_date(self) -> str:
        return self.scheduled_for.split("T")[0]
