from __future__ import annotations

from pydantic import BaseModel


class TotalsPeriod(BaseModel):
    start_date: str
    end_date: str
    weeks: int
    days: int
    active_days: int


class SportTotals(BaseModel):
    activities: int
    duration: str
    distance: str
    climbing: str | None = None
    load: int
    kcal: int
    work: str | None = None


class ActivityTotals(BaseModel):
    period: TotalsPeriod
    totals: SportTotals
    by_sport: dict[str, SportTotals]
