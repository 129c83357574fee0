from __future__ import annotations

from pydantic import BaseModel


class SleepSummary(BaseModel):
    """Sleep stage durations, each formatted as H:MM:SS."""

    total_in_bed_time: str
    total_awake_time: str
    total_light_sleep_time: str
    total_slow_wave_sleep_time: str
    total_rem_sleep_time: str
    total_restorative_sleep: str
    sleep_cycle_count: int | None = None
    disturbance_count: int | None = None


class SleepNeeded(BaseModel):
    """Sleep need before a sleep, broken into Whoop's components (H:MM:SS)."""

    total_sleep_needed: str
    baseline: str
    need_from_sleep_debt: str
    need_from_recent_strain: str
    need_from_recent_nap: str


class NapData(BaseModel):
    nap_summary: SleepSummary
    respiratory_rate: float | None = None
    nap_start: str | None = None
    nap_end: str | None = None


class RecoveryData(BaseModel):
    date: str
    recovery_score: float
    recovery_level: str
    recovery_level_description: str
    hrv_rmssd: float
    resting_heart_rate: float
    spo2_percentage: float | None = None
    skin_temp_celsius: float | None = None
    sleep_performance_percentage: float
    sleep_performance_level: str | None = None
    sleep_performance_level_description: str | None = None
    sleep_consistency_percentage: float | None = None
    sleep_efficiency_percentage: float | None = None
    sleep_hours: float
    respiratory_rate: float | None = None
    sleep_start: str | None = None
    sleep_end: str | None = None
    sleep_summary: SleepSummary | None = None
    sleep_needed: SleepNeeded | None = None
    naps: list[NapData] = []


class RecoverySummary(BaseModel):
    avg_recovery: float = 0
    avg_hrv: float = 0
    avg_sleep_hours: float = 0
    min_recovery: float = 0
    max_recovery: float = 0


class RecoveryTrends(BaseModel):
    data: list[RecoveryData]
    summary: RecoverySummary


class ZoneDurations(BaseModel):
    zone_0: str
    zone_1: str
    zone_2: str
    zone_3: str
    zone_4: str
    zone_5: str


class StrainActivity(BaseModel):
    """A Whoop-recorded workout."""

    id: str
    activity_type: str
    sport_name: str | None = None
    start_time: str
    start_time_utc: str
    end_time: str
    duration: str
    strain_score: float | None = None
    strain_level: str | None = None
    strain_level_description: str | None = None
    average_heart_rate: float | None = None
    max_heart_rate: float | None = None
    calories: int | None = None
    distance: str | None = None
    elevation_gain: str | None = None
    zone_durations: ZoneDurations | None = None


class WhoopMatchedData(BaseModel):
    """Whoop metrics attached to a completed workout from another platform."""

    strain_score: float | None = None
    average_heart_rate: float | None = None
    max_heart_rate: float | None = None
    calories: int | None = None
    distance: str | None = None
    elevation_gain: str | None = None
    zone_durations: ZoneDurations | None = None


class StrainData(BaseModel):
    """Day strain of one Whoop physiological cycle."""

    date: str
    strain_score: float
    strain_level: str
    strain_level_description: str
    average_heart_rate: float | None = None
    max_heart_rate: float | None = None
    calories: int | None = None
    activities: list[StrainActivity] = []
