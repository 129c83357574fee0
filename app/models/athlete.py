from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class UnitPreferences(BaseModel):
    system: Literal["metric", "imperial"]
    weight: Literal["kg", "lb"]
    temperature: Literal["celsius", "fahrenheit"]


class AthleteProfile(BaseModel):
    """Athlete identity and preferences from Intervals.icu."""

    id: str
    name: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    timezone: str | None = None
    sex: str | None = None
    unit_preferences: UnitPreferences
    date_of_birth: str | None = None
    age: int | None = None
