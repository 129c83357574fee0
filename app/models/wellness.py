from __future__ import annotations

from pydantic import BaseModel

# Intervals.icu wellness fields Whoop measures in more detail
WHOOP_DUPLICATE_FIELDS = (
    "resting_hr",
    "hrv",
    "hrv_sdnn",
    "sleep_duration",
    "sleep_score",
    "sleep_quality",
    "avg_sleeping_hr",
    "readiness",
    "respiration",
    "spo2",
)


class BloodPressure(BaseModel):
    systolic: float
    diastolic: float


class WellnessData(BaseModel):
    """One day of Intervals.icu wellness entries; unset fields are None."""

    date: str | None = None
    weight: str | None = None
    resting_hr: float | None = None
    hrv: float | None = None
    hrv_sdnn: float | None = None
    menstrual_phase: str | None = None
    menstrual_phase_predicted: str | None = None
    kcal_consumed: float | None = None
    sleep_duration: str | None = None
    sleep_score: float | None = None
    sleep_quality: int | None = None
    avg_sleeping_hr: float | None = None
    soreness: int | None = None
    fatigue: int | None = None
    stress: int | None = None
    mood: int | None = None
    motivation: int | None = None
    injury: int | None = None
    hydration: int | None = None
    spo2: float | None = None
    blood_pressure: BloodPressure | None = None
    hydration_volume: float | None = None
    respiration: float | None = None
    readiness: float | None = None
    baevsky_si: float | None = None
    blood_glucose: float | None = None
    lactate: float | None = None
    body_fat: float | None = None
    abdomen: float | None = None
    vo2max: float | None = None
    steps: int | None = None
    comments: str | None = None

    def has_data(self) -> bool:
        return bool(self.model_dump(exclude_none=True, exclude={"date"}))

    def without_whoop_duplicates(self) -> WellnessData | None:
        """Copy with the Whoop-measured fields cleared, or None if nothing else is left."""
        trimmed = self.model_copy(update={name: None for name in WHOOP_DUPLICATE_FIELDS})
        return trimmed if trimmed.has_data() else None


class WellnessTrends(BaseModel):
    period_days: int
    start_date: str
    end_date: str
    data: list[WellnessData]

    def without_whoop_duplicates(self) -> WellnessTrends:
        kept = [entry for entry in (e.without_whoop_duplicates() for e in self.data) if entry is not None]
        return self.model_copy(update={"data": kept})
