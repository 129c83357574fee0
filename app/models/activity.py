from __future__ import annotations

from pydantic import BaseModel

from app.models.recovery import WhoopMatchedData


class CompletedWorkout(BaseModel):
    """A completed Intervals.icu activity with units already converted."""

    id: str
    start_time: str
    start_date_utc: str | None = None
    activity_type: str
    name: str | None = None
    description: str | None = None
    duration: str | None = None
    distance: str | None = None
    tss: float | None = None
    normalized_power: float | None = None
    average_power: float | None = None
    intensity_factor: float | None = None
    average_heart_rate: float | None = None
    max_heart_rate: float | None = None
    average_speed: str | None = None
    max_speed: str | None = None
    average_cadence: float | None = None
    elevation_gain: str | None = None
    calories: float | None = None
    work_kj: float | None = None
    rpe: float | None = None
    feel: int | None = None
    ctl_at_activity: float | None = None
    atl_at_activity: float | None = None
    tsb_at_activity: float | None = None
    is_indoor: bool | None = None
    is_race: bool | None = None
    source: str = "intervals.icu"
    intervals_icu_url: str | None = None
    strava_url: str | None = None
    whoop: WhoopMatchedData | None = None


class WorkoutInterval(BaseModel):
    """One interval of a completed activity as detected by Intervals.icu."""

    type: str | None = None
    label: str | None = None
    group_id: str | None = None
    start_seconds: int | None = None
    duration: str | None = None
    distance: str | None = None
    average_watts: float | None = None
    max_watts: float | None = None
    normalized_power: float | None = None
    watts_per_kg: float | None = None
    power_zone: int | None = None
    intensity_factor: float | None = None
    interval_tss: float | None = None
    average_hr: int | None = None
    max_hr: int | None = None
    hr_decoupling: float | None = None
    average_cadence: int | None = None
    stride_length_m: float | None = None
    average_speed: str | None = None
    elevation_gain: str | None = None
    average_gradient: str | None = None
    wbal_start_j: float | None = None
    wbal_end_j: float | None = None
    joules_above_ftp: float | None = None
    min_heat_strain_index: float | None = None
    max_heat_strain_index: float | None = None
    median_heat_strain_index: float | None = None
    start_heat_strain_index: float | None = None
    end_heat_strain_index: float | None = None
    min_ambient_temperature: float | None = None
    max_ambient_temperature: float | None = None
    median_ambient_temperature: float | None = None
    start_ambient_temperature: float | None = None
    end_ambient_temperature: float | None = None


class IntervalGroup(BaseModel):
    """Repeated intervals grouped together, e.g. "5 x 3min"."""

    id: str
    count: int | None = None
    average_watts: float | None = None
    average_hr: int | None = None
    average_cadence: int | None = None
    average_speed: str | None = None
    distance: str | None = None
    duration: str | None = None
    elevation_gain: str | None = None


class WorkoutIntervals(BaseModel):
    activity_id: str
    intervals: list[WorkoutInterval]
    groups: list[IntervalGroup]


class WorkoutNote(BaseModel):
    author: str | None = None
    created: str
    type: str | None = None
    content: str | None = None
    attachment_url: str | None = None
    attachment_mime_type: str | None = None


class WorkoutNotes(BaseModel):
    activity_id: str
    notes: list[WorkoutNote]


class WorkoutWeather(BaseModel):
    activity_id: str
    weather_description: str | None = None


class HeatZone(BaseModel):
    name: str
    low_heat_strain_index: float
    high_heat_strain_index: float | None = None
    time_in_zone: str


class HeatMetrics(BaseModel):
    zones: list[HeatZone]
    max_heat_strain_index: float
    median_heat_strain_index: float


class TemperatureMetrics(BaseModel):
    min_ambient_temperature: float
    max_ambient_temperature: float
    avg_ambient_temperature: float
    start_ambient_temperature: float
    end_ambient_temperature: float


class WorkoutHeatZones(BaseModel):
    activity_id: str
    heat_zones: list[HeatZone] | None = None
    max_heat_strain_index: float | None = None
    median_heat_strain_index: float | None = None
    temperature: TemperatureMetrics | None = None
