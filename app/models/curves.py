"""Best-effort curves (power, heart rate, pace) and their period summaries."""

from __future__ import annotations

from pydantic import BaseModel


class PowerCurvePoint(BaseModel):
    duration_seconds: int
    duration_label: str
    watts: float
    watts_per_kg: float


class ActivityPowerCurve(BaseModel):
    activity_id: str
    date: str
    weight_kg: float | None = None
    curve: list[PowerCurvePoint]


class PowerCurveSet(BaseModel):
    durations: list[int]
    activities: list[ActivityPowerCurve]


class HrCurvePoint(BaseModel):
    duration_seconds: int
    duration_label: str
    bpm: float


class ActivityHrCurve(BaseModel):
    activity_id: str
    date: str
    curve: list[HrCurvePoint]


class HrCurveSet(BaseModel):
    durations: list[int]
    activities: list[ActivityHrCurve]


class PaceCurvePoint(BaseModel):
    distance_meters: float
    distance_label: str
    time_seconds: float
    pace: str


class ActivityPaceCurve(BaseModel):
    activity_id: str
    date: str
    curve: list[PaceCurvePoint]


class PaceCurveSet(BaseModel):
    distances: list[float]
    gap_adjusted: bool = False
    activities: list[ActivityPaceCurve]


class PowerBest(BaseModel):
    watts: float
    watts_per_kg: float
    activity_id: str
    date: str


class HrBest(BaseModel):
    bpm: float
    activity_id: str
    date: str


class PaceBest(BaseModel):
    time_seconds: float
    pace: str
    activity_id: str
    date: str


class CurveChange(BaseModel):
    """Change of one best effort against a previous period."""

    label: str
    current: float
    previous: float
    change: float
    change_percent: float
    improved: bool


class CurveComparison(BaseModel):
    previous_period_start: str
    previous_period_end: str
    previous_activity_count: int
    changes: list[CurveChange]


class PowerCurveResult(BaseModel):
    period_start: str
    period_end: str
    sport: str = "cycling"
    activity_count: int
    durations_analyzed: list[str]
    summary: dict[str, PowerBest | None]
    estimated_ftp: int | None = None
    comparison: CurveComparison | None = None


class HrCurveResult(BaseModel):
    period_start: str
    period_end: str
    sport: str | None = None
    activity_count: int
    durations_analyzed: list[str]
    summary: dict[str, HrBest | None]
    comparison: CurveComparison | None = None


class PaceCurveResult(BaseModel):
    period_start: str
    period_end: str
    sport: str
    gap_adjusted: bool
    activity_count: int
    distances_analyzed: list[str]
    summary: dict[str, PaceBest | None]
    comparison: CurveComparison | None = None
