from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class CtlTrend(StrEnum):
    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"


class AcwrStatus(StrEnum):
    LOW_RISK = "low_risk"
    OPTIMAL = "optimal"
    CAUTION = "caution"
    HIGH_RISK = "high_risk"


class DailyTrainingLoad(BaseModel):
    date: str
    ctl: float
    atl: float
    tsb: float
    ramp_rate: float | None = None
    ctl_load: float | None = None
    atl_load: float | None = None


class TrainingLoadSummary(BaseModel):
    current_ctl: float = 0
    current_atl: float = 0
    current_tsb: float = 0
    ctl_trend: CtlTrend = CtlTrend.STABLE
    avg_ramp_rate: float = 0
    peak_ctl: float = 0
    peak_ctl_date: str = ""
    acwr: float = 0
    acwr_status: AcwrStatus = AcwrStatus.LOW_RISK


class TrainingLoadTrends(BaseModel):
    period_days: int
    sport: str = "all"
    data: list[DailyTrainingLoad]
    summary: TrainingLoadSummary
