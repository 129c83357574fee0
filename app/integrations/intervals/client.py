"""Intervals.icu API client.

Authenticates with HTTP Basic auth where the username is the literal
string ``API_KEY`` and the password is the athlete's API key. Athlete
endpoints are scoped to ``/athlete/{athlete_id}``; per-activity detail
(intervals, notes, weather, streams) lives under ``/activity/{activity_id}``.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any

import httpx
from loguru import logger

from app.core.errors import ErrorContext, IntervalsApiError
from app.integrations.trainerroad.normalize import detect_discipline, normalize_intensity_factor
from app.models.activity import (
    CompletedWorkout,
    HeatMetrics,
    IntervalGroup,
    TemperatureMetrics,
    WorkoutInterval,
    WorkoutIntervals,
    WorkoutNote,
    WorkoutNotes,
    WorkoutWeather,
)
from app.models.athlete import AthleteProfile, UnitPreferences
from app.models.curves import (
    ActivityHrCurve,
    ActivityPaceCurve,
    ActivityPowerCurve,
    HrCurvePoint,
    HrCurveSet,
    PaceCurvePoint,
    PaceCurveSet,
    PowerCurvePoint,
    PowerCurveSet,
)
from app.models.planned import PlannedWorkout, WorkoutSource
from app.models.training_load import (
    AcwrStatus,
    CtlTrend,
    DailyTrainingLoad,
    TrainingLoadSummary,
    TrainingLoadTrends,
)
from app.models.wellness import BloodPressure, WellnessData, WellnessTrends
from app.utils.curve_utils import format_distance_label, format_duration_label, format_pace_from_time
from app.utils.date_formatting import local_string_to_iso8601_with_timezone
from app.utils.date_parser import get_days_back_range, get_today, get_today_in_timezone
from app.utils.format_units import format_distance, format_duration, format_speed, is_swimming_activity
from app.utils.sport_utils import discipline_for_activity_type, normalize_activity_type
from app.utils.stream_metrics import (
    calculate_heat_metrics,
    calculate_temperature_metrics,
    parse_stream,
    window_summary,
)

INTERVALS_API_BASE = "https://intervals.icu/api/v1"
INTERVALS_WEB_BASE = "https://intervals.icu"
HTTP_TIMEOUT = 30.0

# CTL trend needs two full weeks to compare
TREND_WINDOW_DAYS = 7
TREND_THRESHOLD = 2

WINDOW_STATS = ("min", "max", "median", "start", "end")
WEATHER_PREFIX = re.compile(r"^-- Intervals icu --\n", re.IGNORECASE)
STREAM_TYPES = ["heat_strain_index", "time", "temp"]


def _acwr_status(acwr: float) -> AcwrStatus:
    if acwr < 0.8:
        return AcwrStatus.LOW_RISK
    if acwr <= 1.3:
        return AcwrStatus.OPTIMAL
    if acwr <= 1.5:
        return AcwrStatus.CAUTION
    return AcwrStatus.HIGH_RISK


def _average(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0


def _highest_rpe(*values: float | None) -> float | None:
    present = [v for v in values if v is not None]
    return max(present) if present else None


def calculate_training_load_summary(data: list[DailyTrainingLoad]) -> TrainingLoadSummary:
    """Summarize a CTL/ATL/TSB series.

    Args:
        data: Daily training load, oldest first

    Returns:
        Summary with current values, CTL trend (last 7 days vs the 7
        before), average ramp rate, peak CTL and the acute:chronic
        workload ratio. An empty series yields an all-zero summary.
    """
    if not data:
        return TrainingLoadSummary()

    latest = data[-1]

    ctl_trend = CtlTrend.STABLE
    if len(data) >= TREND_WINDOW_DAYS * 2:
        recent = _average([d.ctl for d in data[-TREND_WINDOW_DAYS:]])
        previous = _average([d.ctl for d in data[-TREND_WINDOW_DAYS * 2 : -TREND_WINDOW_DAYS]])
        diff = recent - previous
        if diff > TREND_THRESHOLD:
            ctl_trend = CtlTrend.INCREASING
        elif diff < -TREND_THRESHOLD:
            ctl_trend = CtlTrend.DECREASING

    avg_ramp_rate = _average([d.ramp_rate for d in data if d.ramp_rate is not None])

    peak_ctl = 0.0
    peak_ctl_date = ""
    for day in data:
        if day.ctl > peak_ctl:
            peak_ctl = day.ctl
            peak_ctl_date = day.date

    acwr = latest.atl / latest.ctl if latest.ctl > 0 else 0

    return TrainingLoadSummary(
        current_ctl=round(latest.ctl, 1),
        current_atl=round(latest.atl, 1),
        current_tsb=round(latest.tsb, 1),
        ctl_trend=ctl_trend,
        avg_ramp_rate=round(avg_ramp_rate, 1),
        peak_ctl=round(peak_ctl, 1),
        peak_ctl_date=peak_ctl_date,
        acwr=round(acwr, 2),
        acwr_status=_acwr_status(acwr),
    )


def compute_unit_preferences(
    measurement_preference: str | None, weight_pref_lb: bool | None, fahrenheit: bool | None
) -> UnitPreferences:
    """Metric unless the athlete measures in feet; weight and temperature flags override the system."""
    metric = measurement_preference != "feet"
    return UnitPreferences(
        system="metric" if metric else "imperial",
        weight="lb" if weight_pref_lb or not metric else "kg",
        temperature="fahrenheit" if fahrenheit or not metric else "celsius",
    )


def calculate_age(date_of_birth: str, today: date) -> int:
    born = date.fromisoformat(date_of_birth[:10])
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


def format_sleep_duration(seconds: float) -> str:
    """8h 5m, 7h or 45m."""
    hours = int(seconds // 3600)
    minutes = round((seconds % 3600) / 60)
    if minutes == 60:
        hours, minutes = hours + 1, 0
    if hours == 0:
        return f"{minutes}m"
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}m"


# Intervals.icu wellness key -> WellnessData field, for values passed through unchanged
WELLNESS_FIELD_MAP: dict[str, str] = {
    "restingHR": "resting_hr",
    "hrv": "hrv",
    "hrvSDNN": "hrv_sdnn",
    "menstrualPhase": "menstrual_phase",
    "menstrualPhasePredicted": "menstrual_phase_predicted",
    "kcalConsumed": "kcal_consumed",
    "sleepScore": "sleep_score",
    "sleepQuality": "sleep_quality",
    "avgSleepingHR": "avg_sleeping_hr",
    "soreness": "soreness",
    "fatigue": "fatigue",
    "stress": "stress",
    "mood": "mood",
    "motivation": "motivation",
    "injury": "injury",
    "hydration": "hydration",
    "spO2": "spo2",
    "hydrationVolume": "hydration_volume",
    "respiration": "respiration",
    "readiness": "readiness",
    "baevskySI": "baevsky_si",
    "bloodGlucose": "blood_glucose",
    "lactate": "lactate",
    "bodyFat": "body_fat",
    "abdomen": "abdomen",
    "vo2max": "vo2max",
    "steps": "steps",
    "comments": "comments",
}


def normalize_wellness(raw: dict[str, Any]) -> WellnessData:
    fields: dict[str, Any] = {
        name: raw[key] for key, name in WELLNESS_FIELD_MAP.items() if raw.get(key) is not None
    }
    if raw.get("weight") is not None:
        fields["weight"] = f"{raw['weight']} kg"
    if raw.get("sleepSecs") is not None:
        fields["sleep_duration"] = format_sleep_duration(raw["sleepSecs"])
    if raw.get("systolic") is not None and raw.get("diastolic") is not None:
        fields["blood_pressure"] = BloodPressure(systolic=raw["systolic"], diastolic=raw["diastolic"])
    return WellnessData(**fields)


def _round_or_none(value: float | None, digits: int | None = None) -> float | int | None:
    if not value:
        return None
    return round(value, digits) if digits is not None else round(value)


def normalize_interval(
    raw: dict[str, Any],
    heat: tuple[list[float], list[float]] | None = None,
    temperature: tuple[list[float], list[float]] | None = None,
) -> WorkoutInterval:
    """Map a detected interval, adding heat and temperature over its time window."""
    distance = raw.get("distance")
    speed = raw.get("average_speed")
    elevation = raw.get("total_elevation_gain")
    gradient = raw.get("average_gradient")
    intensity = raw.get("intensity")
    group_id = raw.get("group_id")

    window_fields: dict[str, float] = {}
    start_time = raw.get("start_time")
    end_time = raw.get("end_time")
    if start_time is not None and end_time is not None:
        for suffix, stream in (("heat_strain_index", heat), ("ambient_temperature", temperature)):
            window = window_summary(*stream, start_time, end_time) if stream else None
            if window:
                window_fields.update({f"{stat}_{suffix}": value for stat, value in zip(WINDOW_STATS, window)})

    return WorkoutInterval(
        type=raw.get("type"),
        label=raw.get("label"),
        group_id=str(group_id) if group_id is not None else None,
        start_seconds=start_time,
        duration=format_duration(raw["moving_time"]) if raw.get("moving_time") is not None else None,
        distance=format_distance(distance / 1000, False) if distance else None,
        average_watts=raw.get("average_watts"),
        max_watts=raw.get("max_watts"),
        normalized_power=raw.get("weighted_average_watts"),
        watts_per_kg=raw.get("average_watts_kg"),
        power_zone=raw.get("zone"),
        intensity_factor=intensity / 100 if intensity else None,
        interval_tss=_round_or_none(raw.get("training_load"), 1),
        average_hr=_round_or_none(raw.get("average_heartrate")),
        max_hr=_round_or_none(raw.get("max_heartrate")),
        hr_decoupling=raw.get("decoupling"),
        average_cadence=_round_or_none(raw.get("average_cadence")),
        stride_length_m=raw.get("average_stride"),
        average_speed=format_speed(speed * 3.6) if speed else None,
        elevation_gain=f"{round(elevation)} m" if elevation else None,
        average_gradient=f"{gradient * 100:.1f}%" if gradient is not None else None,
        wbal_start_j=raw.get("wbal_start"),
        wbal_end_j=raw.get("wbal_end"),
        joules_above_ftp=raw.get("joules_above_ftp"),
        **window_fields,
    )


def normalize_interval_group(raw: dict[str, Any]) -> IntervalGroup:
    distance = raw.get("distance")
    speed = raw.get("average_speed")
    elevation = raw.get("total_elevation_gain")
    return IntervalGroup(
        id=str(raw["id"]),
        count=raw.get("count"),
        average_watts=raw.get("average_watts"),
        average_hr=_round_or_none(raw.get("average_heartrate")),
        average_cadence=_round_or_none(raw.get("average_cadence")),
        average_speed=format_speed(speed * 3.6) if speed else None,
        distance=format_distance(distance / 1000, False) if distance else None,
        duration=format_duration(raw["moving_time"]) if raw.get("moving_time") is not None else None,
        elevation_gain=f"{round(elevation)} m" if elevation else None,
    )


def normalize_note(raw: dict[str, Any]) -> WorkoutNote:
    return WorkoutNote(
        author=raw.get("name"),
        created=raw["created"],
        type=raw.get("type"),
        content=raw.get("content"),
        attachment_url=raw.get("attachment_url"),
        attachment_mime_type=raw.get("attachment_mime_type"),
    )


class IntervalsClient:
    """Async client for the Intervals.icu REST API.

    One request per operation, no retries. The athlete timezone is fetched
    once and cached on the instance.
    """

    def __init__(
        self,
        api_key: str,
        athlete_id: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = HTTP_TIMEOUT,
    ):
        self._api_key = api_key
        self._athlete_id = athlete_id
        self._client = http_client
        self._timeout = timeout
        self._cached_timezone: str | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any] | None, context: ErrorContext) -> Any:
        if params:
            context = ErrorContext(operation=context.operation, resource=context.resource, parameters=params)

        logger.debug(f"[INTERVALS_CLIENT] GET {path} params={params}")
        try:
            resp = await self._get_client().get(
                f"{INTERVALS_API_BASE}{path}",
                params=params,
                auth=("API_KEY", self._api_key),
                headers={"Accept": "application/json"},
            )
        except httpx.RequestError as e:
            logger.error(f"[INTERVALS_CLIENT] Network error on {path}: {e}")
            raise IntervalsApiError.network_error(context, e) from e

        if not resp.is_success:
            logger.error(f"[INTERVALS_CLIENT] {path} failed: {resp.status_code} {resp.reason_phrase}")
            raise IntervalsApiError.from_http_status(resp.status_code, context, resp.reason_phrase)

        return resp.json()

    async def _fetch(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        context: ErrorContext | None = None,
    ) -> Any:
        context = context or ErrorContext(operation=f"fetch {endpoint}")
        return await self._get(f"/athlete/{self._athlete_id}{endpoint}", params, context)

    async def _fetch_activity(
        self,
        activity_id: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        operation: str | None = None,
    ) -> Any:
        context = ErrorContext(operation=operation or f"fetch activity {endpoint}", resource=f"activity {activity_id}")
        return await self._get(f"/activity/{activity_id}{endpoint}", params, context)

    async def get_athlete_timezone(self) -> str:
        """Get the athlete's IANA timezone, defaulting to UTC on any failure."""
        if self._cached_timezone:
            return self._cached_timezone

        try:
            profile = await self._fetch("/profile", context=ErrorContext(operation="fetch athlete profile"))
        except IntervalsApiError as e:
            logger.warning(f"[INTERVALS_CLIENT] Could not fetch athlete timezone, defaulting to UTC: {e}")
            return "UTC"

        self._cached_timezone = (profile.get("athlete") or {}).get("timezone") or "UTC"
        logger.info(f"[INTERVALS_CLIENT] Athlete timezone: {self._cached_timezone}")
        return self._cached_timezone

    async def get_activities(
        self,
        start_date: str,
        end_date: str,
        sport: str | None = None,
    ) -> list[CompletedWorkout]:
        """Get completed activities between two dates (inclusive).

        Args:
            start_date: Start date (YYYY-MM-DD)
            end_date: End date (YYYY-MM-DD)
            sport: Optional sport filter, compared after normalization
                (e.g. "cycling" matches Ride and VirtualRide)

        Returns:
            Normalized completed workouts
        """
        activities = await self._fetch(
            "/activities",
            {"oldest": start_date, "newest": end_date},
            ErrorContext(operation="fetch activities", resource=f"activities from {start_date} to {end_date}"),
        )

        if sport:
            wanted = normalize_activity_type(sport)
            activities = [a for a in activities if normalize_activity_type(a.get("type")) == wanted]

        timezone = await self.get_athlete_timezone()
        return [self.normalize_activity(activity, timezone) for activity in activities]

    def normalize_activity(self, activity: dict[str, Any], timezone: str) -> CompletedWorkout:
        """Map a raw activity to CompletedWorkout, converting units.

        Meters become km (whole meters for swims), m/s becomes km/h and
        joules become kJ.
        """
        activity_type = activity.get("type") or ""
        is_swim = is_swimming_activity(activity_type)
        duration_seconds = activity.get("moving_time") or activity.get("elapsed_time") or 0
        distance = activity.get("distance")
        average_speed = activity.get("average_speed")
        max_speed = activity.get("max_speed")
        elevation = activity.get("total_elevation_gain")
        joules = activity.get("icu_joules") or activity.get("joules")
        ctl = activity.get("icu_ctl", activity.get("ctl"))
        atl = activity.get("icu_atl", activity.get("atl"))
        source = (activity.get("source") or "").lower()
        start_date_local = activity.get("start_date_local")

        return CompletedWorkout(
            id=str(activity["id"]),
            start_time=local_string_to_iso8601_with_timezone(start_date_local, timezone) if start_date_local else "",
            start_date_utc=activity.get("start_date"),
            activity_type=normalize_activity_type(activity_type),
            name=activity.get("name"),
            description=activity.get("description"),
            duration=format_duration(duration_seconds),
            distance=format_distance(distance / 1000, is_swim) if distance else None,
            tss=activity.get("icu_training_load"),
            normalized_power=activity.get("icu_weighted_avg_watts") or activity.get("weighted_avg_watts"),
            average_power=activity.get("icu_average_watts") or activity.get("average_watts"),
            intensity_factor=normalize_intensity_factor(activity.get("icu_intensity")),
            average_heart_rate=activity.get("average_heartrate"),
            max_heart_rate=activity.get("max_heartrate"),
            average_speed=format_speed(average_speed * 3.6) if average_speed else None,
            max_speed=format_speed(max_speed * 3.6) if max_speed else None,
            average_cadence=activity.get("average_cadence"),
            elevation_gain=f"{round(elevation)} m" if elevation is not None else None,
            calories=activity.get("calories"),
            work_kj=joules / 1000 if joules else None,
            rpe=_highest_rpe(activity.get("rpe"), activity.get("icu_rpe")),
            feel=activity.get("feel"),
            ctl_at_activity=ctl,
            atl_at_activity=atl,
            tsb_at_activity=ctl - atl if ctl is not None and atl is not None else None,
            is_indoor=bool(activity.get("trainer")) or "virtual" in activity_type.lower() or source == "zwift",
            is_race=activity.get("race"),
            intervals_icu_url=f"{INTERVALS_WEB_BASE}/activities/{activity['id']}",
            strava_url=f"https://www.strava.com/activities/{activity['strava_id']}" if activity.get("strava_id") else None,
        )

    async def get_planned_events(self, start_date: str, end_date: str) -> list[PlannedWorkout]:
        """Get planned WORKOUT events from the Intervals.icu calendar."""
        events = await self._fetch(
            "/events",
            {"oldest": start_date, "newest": end_date, "category": "WORKOUT"},
            ErrorContext(operation="fetch planned events", resource=f"events from {start_date} to {end_date}"),
        )
        timezone = await self.get_athlete_timezone()
        return [self.normalize_planned_event(event, timezone) for event in events]

    def normalize_planned_event(self, event: dict[str, Any], timezone: str) -> PlannedWorkout:
        name = event.get("name") or "Workout"
        duration_seconds = event.get("moving_time")
        if duration_seconds is None and event.get("duration") is not None:
            duration_seconds = event["duration"] * 60

        return PlannedWorkout(
            id=event.get("uid") or str(event["id"]),
            scheduled_for=local_string_to_iso8601_with_timezone(event["start_date_local"], timezone),
            name=name,
            description=event.get("description"),
            expected_tss=event.get("icu_training_load"),
            expected_if=normalize_intensity_factor(event.get("icu_intensity")),
            expected_duration=format_duration(duration_seconds) if duration_seconds is not None else None,
            discipline=discipline_for_activity_type(event.get("type")) or detect_discipline(name),
            source=WorkoutSource.INTERVALS,
            tags=event.get("tags"),
            external_id=event.get("external_id"),
        )

    async def get_fitness_metrics(self, start_date: str, end_date: str) -> list[DailyTrainingLoad]:
        """Get daily CTL/ATL/TSB from wellness records (TSB = CTL - ATL)."""
        wellness = await self._fetch(
            "/wellness",
            {"oldest": start_date, "newest": end_date},
            ErrorContext(operation="fetch fitness metrics", resource=f"wellness from {start_date} to {end_date}"),
        )
        return [
            DailyTrainingLoad(
                date=day["id"],
                ctl=day.get("ctl") or 0,
                atl=day.get("atl") or 0,
                tsb=(day.get("ctl") or 0) - (day.get("atl") or 0),
                ramp_rate=day.get("rampRate"),
                ctl_load=day.get("ctlLoad"),
                atl_load=day.get("atlLoad"),
            )
            for day in wellness
        ]

    async def get_training_load_trends(self, days: int = 42) -> TrainingLoadTrends:
        """Get CTL/ATL/TSB history for the last ``days`` days with a summary."""
        window = get_days_back_range(days + 1)
        data = await self.get_fitness_metrics(window.start, window.end)
        return TrainingLoadTrends(
            period_days=days,
            sport="all",
            data=data,
            summary=calculate_training_load_summary(data),
        )

    async def get_athlete_profile(self) -> AthleteProfile:
        """Athlete identity, unit preferences and, when set, date of birth and age."""
        athlete = await self._fetch("", context=ErrorContext(operation="fetch athlete profile"))
        date_of_birth = athlete.get("icu_date_of_birth")
        return AthleteProfile(
            id=str(athlete["id"]),
            name=athlete.get("name"),
            city=athlete.get("city"),
            state=athlete.get("state"),
            country=athlete.get("country"),
            timezone=athlete.get("timezone"),
            sex=athlete.get("sex"),
            unit_preferences=compute_unit_preferences(
                athlete.get("measurement_preference"), athlete.get("weight_pref_lb"), athlete.get("fahrenheit")
            ),
            date_of_birth=date_of_birth,
            age=calculate_age(date_of_birth, date.fromisoformat(get_today())) if date_of_birth else None,
        )

    async def get_today_wellness(self) -> WellnessData | None:
        """Today's wellness entry in the athlete's timezone, or None if nothing was logged."""
        timezone = await self.get_athlete_timezone()
        today = get_today_in_timezone(timezone)
        try:
            raw = await self._fetch(f"/wellness/{today}", context=ErrorContext(operation="fetch today's wellness"))
        except IntervalsApiError as e:
            logger.warning(f"[INTERVALS_CLIENT] No wellness for {today}: {e}")
            return None

        wellness = normalize_wellness(raw or {})
        if not wellness.has_data():
            return None
        wellness.date = today
        return wellness

    async def get_wellness_trends(self, start_date: str, end_date: str) -> WellnessTrends:
        """Wellness entries with at least one value, oldest first."""
        records = await self._fetch(
            "/wellness",
            {"oldest": start_date, "newest": end_date},
            ErrorContext(operation="fetch wellness trends", resource=f"wellness from {start_date} to {end_date}"),
        )
        data = []
        for record in records:
            wellness = normalize_wellness(record)
            if wellness.has_data():
                wellness.date = record["id"]
                data.append(wellness)

        return WellnessTrends(
            period_days=(date.fromisoformat(end_date) - date.fromisoformat(start_date)).days + 1,
            start_date=start_date,
            end_date=end_date,
            data=data,
        )

    async def _fetch_streams(self, activity_id: str, types: list[str]) -> list[dict[str, Any]] | None:
        try:
            return await self._fetch_activity(activity_id, "/streams", {"types": ",".join(types)}, "fetch activity streams")
        except IntervalsApiError as e:
            logger.warning(f"[INTERVALS_CLIENT] No streams for activity {activity_id}: {e}")
            return None

    async def get_activity_intervals(self, activity_id: str) -> WorkoutIntervals:
        """Detected intervals and interval groups of one activity.

        Heat strain and ambient temperature are added per interval when the
        activity recorded them; a failed stream fetch leaves them out.
        """
        response = await self._fetch_activity(activity_id, "/intervals", operation="fetch workout intervals")
        streams = await self._fetch_streams(activity_id, STREAM_TYPES) or []
        heat = parse_stream(streams, "heat_strain_index")
        temperature = parse_stream(streams, "temp")

        return WorkoutIntervals(
            activity_id=activity_id,
            intervals=[normalize_interval(raw, heat, temperature) for raw in response.get("icu_intervals") or []],
            groups=[normalize_interval_group(raw) for raw in response.get("icu_groups") or []],
        )

    async def get_activity_notes(self, activity_id: str) -> WorkoutNotes:
        """Comments on an activity, oldest first; deleted messages are skipped."""
        messages = await self._fetch_activity(activity_id, "/messages", operation="fetch workout notes")
        notes = [normalize_note(m) for m in messages or [] if m.get("deleted") is None]
        notes.sort(key=lambda note: note.created)
        return WorkoutNotes(activity_id=activity_id, notes=notes)

    async def get_activity_weather(self, activity_id: str) -> WorkoutWeather:
        """Weather summary text for an outdoor activity; None when Intervals.icu has none."""
        try:
            response = await self._fetch_activity(activity_id, "/weather-summary", operation="fetch workout weather")
        except IntervalsApiError as e:
            logger.warning(f"[INTERVALS_CLIENT] No weather for activity {activity_id}: {e}")
            return WorkoutWeather(activity_id=activity_id)

        description = (response or {}).get("description")
        if description:
            description = WEATHER_PREFIX.sub("", description).strip()
        return WorkoutWeather(activity_id=activity_id, weather_description=description or None)

    async def get_activity_heat_metrics(self, activity_id: str) -> HeatMetrics | None:
        streams = await self._fetch_streams(activity_id, ["heat_strain_index", "time"])
        parsed = parse_stream(streams or [], "heat_strain_index")
        if not parsed:
            return None
        try:
            return calculate_heat_metrics(*parsed)
        except ValueError as e:
            logger.warning(f"[INTERVALS_CLIENT] Unusable heat strain stream for activity {activity_id}: {e}")
            return None

    async def get_activity_temperature_metrics(self, activity_id: str) -> TemperatureMetrics | None:
        streams = await self._fetch_streams(activity_id, ["temp", "time"])
        parsed = parse_stream(streams or [], "temp")
        if not parsed:
            return None
        try:
            return calculate_temperature_metrics(*parsed)
        except ValueError as e:
            logger.warning(f"[INTERVALS_CLIENT] Unusable temperature stream for activity {activity_id}: {e}")
            return None

    async def get_power_curves(
        self,
        start_date: str,
        end_date: str,
        activity_type: str | None = None,
        durations: list[int] | None = None,
    ) -> PowerCurveSet:
        """Best power at each duration for every activity in the range."""
        params = {"oldest": start_date, "newest": end_date}
        if activity_type:
            params["type"] = activity_type
        if durations:
            params["secs"] = ",".join(str(secs) for secs in durations)

        response = await self._fetch(
            "/activity-power-curves", params, ErrorContext(operation="fetch power curves", resource="power curves")
        )
        secs = response.get("secs") or []
        activities = []
        for curve in response.get("curves") or []:
            weight = curve.get("weight") or 0
            activities.append(
                ActivityPowerCurve(
                    activity_id=str(curve["id"]),
                    date=curve.get("start_date_local") or "",
                    weight_kg=weight or None,
                    curve=[
                        PowerCurvePoint(
                            duration_seconds=secs[i],
                            duration_label=format_duration_label(secs[i]),
                            watts=watts,
                            watts_per_kg=round(watts / weight, 2) if weight > 0 else 0,
                        )
                        for i, watts in enumerate(curve.get("watts") or [])
                        if i < len(secs)
                    ],
                )
            )
        return PowerCurveSet(durations=secs, activities=activities)

    async def get_hr_curves(
        self,
        start_date: str,
        end_date: str,
        activity_type: str | None = None,
        durations: list[int] | None = None,
    ) -> HrCurveSet:
        """Highest sustained heart rate at each duration for every activity in the range."""
        params = {"oldest": start_date, "newest": end_date}
        if activity_type:
            params["type"] = activity_type
        if durations:
            params["secs"] = ",".join(str(secs) for secs in durations)

        response = await self._fetch(
            "/activity-hr-curves", params, ErrorContext(operation="fetch HR curves", resource="heart rate curves")
        )
        secs = response.get("secs") or []
        activities = [
            ActivityHrCurve(
                activity_id=str(curve["id"]),
                date=curve.get("start_date_local") or "",
                curve=[
                    HrCurvePoint(duration_seconds=secs[i], duration_label=format_duration_label(secs[i]), bpm=bpm)
                    for i, bpm in enumerate(curve.get("bpm") or [])
                    if i < len(secs)
                ],
            )
            for curve in response.get("curves") or []
        ]
        return HrCurveSet(durations=secs, activities=activities)

    async def get_pace_curves(
        self,
        start_date: str,
        end_date: str,
        activity_type: str,
        distances: list[int],
        gap: bool | None = None,
    ) -> PaceCurveSet:
        """Best time over each distance for every activity in the range.

        Args:
            activity_type: "Run" or "Swim"; swims report pace per 100m
            distances: Distances in meters
            gap: Ask for gradient adjusted pace (running only)
        """
        params = {
            "oldest": start_date,
            "newest": end_date,
            "type": activity_type,
            "distances": ",".join(str(d) for d in distances),
        }
        if gap is not None:
            params["gap"] = str(gap).lower()

        response = await self._fetch(
            "/activity-pace-curves", params, ErrorContext(operation="fetch pace curves", resource="pace curves")
        )
        is_swim = is_swimming_activity(activity_type)
        meters = response.get("distances") or []
        activities = [
            ActivityPaceCurve(
                activity_id=str(curve["id"]),
                date=curve.get("start_date_local") or "",
                curve=[
                    PaceCurvePoint(
                        distance_meters=meters[i],
                        distance_label=format_distance_label(meters[i]),
                        time_seconds=seconds,
                        pace=format_pace_from_time(seconds, meters[i], is_swim),
                    )
                    for i, seconds in enumerate(curve.get("secs") or [])
                    if i < len(meters) and seconds
                ],
            )
            for curve in response.get("curves") or []
        ]
        return PaceCurveSet(distances=meters, gap_adjusted=bool(response.get("gap")), activities=activities)
