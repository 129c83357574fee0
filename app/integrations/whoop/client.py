"""Whoop API client.

Uses OAuth bearer tokens. Access tokens are resolved in this order:

1. Cached access token (shared across processes through the token cache)
2. In-memory access token, if more than five minutes of validity remain
3. A refresh with the cached refresh token, falling back to the configured one

A refresh is attempted once; failures surface as WhoopApiError. Whoop
records are filtered to the athlete's local dates, so every range query
asks Whoop for one extra day on each side.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from datetime import date, timedelta
from typing import Any

import httpx
from dateutil import parser as date_parser
from loguru import logger

from app.core.errors import ErrorContext, WhoopApiError
from app.core.logger import mask_token
from app.integrations.whoop.tokens import AccessToken, WhoopTokenStore
from app.models.recovery import (
    NapData,
    RecoveryData,
    SleepNeeded,
    SleepSummary,
    StrainActivity,
    StrainData,
    ZoneDurations,
)
from app.utils.date_formatting import format_to_iso8601_with_timezone
from app.utils.date_parser import get_today_in_timezone
from app.utils.format_units import format_distance, format_duration, is_swimming_activity, parse_duration_to_hours
from app.utils.sport_utils import normalize_activity_type
from app.utils.whoop_insights import (
    RECOVERY_DESCRIPTIONS,
    SLEEP_PERFORMANCE_DESCRIPTIONS,
    STRAIN_DESCRIPTIONS,
    get_recovery_level,
    get_sleep_performance_level,
    get_strain_level,
)

WHOOP_API_BASE = "https://api.prod.whoop.com/developer/v2"
WHOOP_TOKEN_URL = "https://api.prod.whoop.com/oauth/oauth2/token"
HTTP_TIMEOUT = 30.0
KJ_PER_KCAL = 4.184

WHOOP_SPORT_NAME_MAP: dict[str, str] = {
    "running": "Running",
    "cycling": "Cycling",
    "swimming": "Swimming",
    "functional fitness": "Functional Fitness",
    "hiit": "HIIT",
    "skiing": "Skiing",
    "rowing": "Rowing",
    "weightlifting": "Strength",
    "strength trainer": "Strength",
}

ZONE_KEYS = ("zero", "one", "two", "three", "four", "five")

TimezoneGetter = Callable[[], Awaitable[str]]


def _round2(value: float | None) -> float | None:
    return round(value, 2) if value is not None else None


def _milli_to_clock(milli: float | None) -> str:
    return format_duration((milli or 0) / 1000)


def _shift_day(day: str, days: int) -> str:
    return (date.fromisoformat(day) + timedelta(days=days)).isoformat()


def _local_date(timestamp: str, tz_name: str) -> str:
    return format_to_iso8601_with_timezone(timestamp, tz_name)[:10]


def _range_params(start_date: str, end_date: str) -> dict[str, str]:
    return {
        "start": f"{_shift_day(start_date, -1)}T00:00:00.000Z",
        "end": f"{_shift_day(end_date, 1)}T23:59:59.999Z",
    }


def normalize_sleep_summary(stage_summary: dict[str, Any]) -> SleepSummary:
    """Convert Whoop stage durations (milliseconds) to H:MM:SS.

    Restorative sleep is slow wave (deep) plus REM.
    """
    slow_wave = stage_summary.get("total_slow_wave_sleep_time_milli") or 0
    rem = stage_summary.get("total_rem_sleep_time_milli") or 0
    return SleepSummary(
        total_in_bed_time=_milli_to_clock(stage_summary.get("total_in_bed_time_milli")),
        total_awake_time=_milli_to_clock(stage_summary.get("total_awake_time_milli")),
        total_light_sleep_time=_milli_to_clock(stage_summary.get("total_light_sleep_time_milli")),
        total_slow_wave_sleep_time=_milli_to_clock(slow_wave),
        total_rem_sleep_time=_milli_to_clock(rem),
        total_restorative_sleep=_milli_to_clock(slow_wave + rem),
        sleep_cycle_count=stage_summary.get("sleep_cycle_count"),
        disturbance_count=stage_summary.get("disturbance_count"),
    )


def normalize_sleep_needed(sleep_needed: dict[str, Any]) -> SleepNeeded:
    """Total sleep need is the baseline plus debt and strain, less the nap credit."""
    baseline = sleep_needed.get("baseline_milli") or 0
    debt = sleep_needed.get("need_from_sleep_debt_milli") or 0
    strain = sleep_needed.get("need_from_recent_strain_milli") or 0
    # Whoop reports the nap credit as zero or negative
    nap = abs(sleep_needed.get("need_from_recent_nap_milli") or 0)
    return SleepNeeded(
        total_sleep_needed=_milli_to_clock(max(baseline + debt + strain - nap, 0)),
        baseline=_milli_to_clock(baseline),
        need_from_sleep_debt=_milli_to_clock(debt),
        need_from_recent_strain=_milli_to_clock(strain),
        need_from_recent_nap=_milli_to_clock(nap),
    )


def normalize_nap(nap: dict[str, Any], tz_name: str) -> NapData:
    score = nap.get("score") or {}
    return NapData(
        nap_summary=normalize_sleep_summary(score.get("stage_summary") or {}),
        respiratory_rate=_round2(score.get("respiratory_rate")),
        nap_start=format_to_iso8601_with_timezone(nap["start"], tz_name) if nap.get("start") else None,
        nap_end=format_to_iso8601_with_timezone(nap["end"], tz_name) if nap.get("end") else None,
    )


def normalize_recovery(
    recovery: dict[str, Any],
    sleep: dict[str, Any],
    tz_name: str,
    naps: list[dict[str, Any]] | None = None,
) -> RecoveryData:
    """Combine a scored recovery with the sleep it was computed from.

    The date is the local date the recovery was created on, which is the
    morning the athlete woke up.
    """
    recovery_score = recovery.get("score") or {}
    sleep_score = sleep.get("score") or {}
    summary = normalize_sleep_summary(sleep_score.get("stage_summary") or {})

    score = recovery_score.get("recovery_score") or 0
    recovery_level = get_recovery_level(score)
    sleep_performance = _round2(sleep_score.get("sleep_performance_percentage")) or 0
    sleep_level = get_sleep_performance_level(sleep_performance)

    return RecoveryData(
        date=_local_date(recovery["created_at"], tz_name),
        recovery_score=score,
        recovery_level=recovery_level,
        recovery_level_description=RECOVERY_DESCRIPTIONS[recovery_level],
        hrv_rmssd=_round2(recovery_score.get("hrv_rmssd_milli")) or 0,
        resting_heart_rate=recovery_score.get("resting_heart_rate") or 0,
        spo2_percentage=_round2(recovery_score.get("spo2_percentage")),
        skin_temp_celsius=_round2(recovery_score.get("skin_temp_celsius")),
        sleep_performance_percentage=sleep_performance,
        sleep_performance_level=sleep_level,
        sleep_performance_level_description=SLEEP_PERFORMANCE_DESCRIPTIONS[sleep_level],
        sleep_consistency_percentage=_round2(sleep_score.get("sleep_consistency_percentage")),
        sleep_efficiency_percentage=_round2(sleep_score.get("sleep_efficiency_percentage")),
        sleep_hours=parse_duration_to_hours(summary.total_in_bed_time),
        respiratory_rate=_round2(sleep_score.get("respiratory_rate")),
        sleep_start=format_to_iso8601_with_timezone(sleep["start"], tz_name) if sleep.get("start") else None,
        sleep_end=format_to_iso8601_with_timezone(sleep["end"], tz_name) if sleep.get("end") else None,
        sleep_summary=summary,
        sleep_needed=normalize_sleep_needed(sleep_score["sleep_needed"]) if sleep_score.get("sleep_needed") else None,
        naps=[normalize_nap(nap, tz_name) for nap in naps or []],
    )


def normalize_workout(workout: dict[str, Any], tz_name: str) -> StrainActivity:
    """Map a Whoop workout record to StrainActivity (kJ to kcal, meters to km)."""
    sport_name = workout.get("sport_name") or ""
    activity_type = normalize_activity_type(WHOOP_SPORT_NAME_MAP.get(sport_name.lower(), sport_name))
    score = workout.get("score") or {}

    start = date_parser.isoparse(workout["start"])
    end = date_parser.isoparse(workout["end"])

    strain = score.get("strain")
    strain_level = get_strain_level(strain) if strain is not None else None
    kilojoule = score.get("kilojoule")
    distance_meter = score.get("distance_meter")
    altitude_gain = score.get("altitude_gain_meter")
    zones = score.get("zone_durations")

    return StrainActivity(
        id=str(workout["id"]),
        activity_type=activity_type,
        sport_name=sport_name or None,
        start_time=format_to_iso8601_with_timezone(start, tz_name),
        start_time_utc=workout["start"],
        end_time=format_to_iso8601_with_timezone(end, tz_name),
        duration=format_duration((end - start).total_seconds()),
        strain_score=strain,
        strain_level=strain_level,
        strain_level_description=STRAIN_DESCRIPTIONS[strain_level] if strain_level else None,
        average_heart_rate=score.get("average_heart_rate"),
        max_heart_rate=score.get("max_heart_rate"),
        calories=round(kilojoule / KJ_PER_KCAL) if kilojoule is not None else None,
        distance=format_distance(distance_meter / 1000, is_swimming_activity(activity_type)) if distance_meter else None,
        elevation_gain=f"{round(altitude_gain)} m" if altitude_gain is not None else None,
        zone_durations=(
            ZoneDurations(**{f"zone_{i}": _milli_to_clock(zones.get(f"zone_{key}_milli")) for i, key in enumerate(ZONE_KEYS)})
            if zones
            else None
        ),
    )


def normalize_strain(
    cycle: dict[str, Any], workouts: list[dict[str, Any]], cycle_date: str, tz_name: str
) -> StrainData:
    """Map a scored cycle and the workouts recorded during it to StrainData."""
    score = cycle.get("score") or {}
    strain = score.get("strain") or 0
    strain_level = get_strain_level(strain)
    kilojoule = score.get("kilojoule")
    return StrainData(
        date=cycle_date,
        strain_score=strain,
        strain_level=strain_level,
        strain_level_description=STRAIN_DESCRIPTIONS[strain_level],
        average_heart_rate=score.get("average_heart_rate"),
        max_heart_rate=score.get("max_heart_rate"),
        calories=round(kilojoule / KJ_PER_KCAL) if kilojoule is not None else None,
        activities=[normalize_workout(workout, tz_name) for workout in workouts],
    )


def _workouts_in_cycle(cycle: dict[str, Any], workouts: list[dict[str, Any]]) -> list[dict[str, Any]]:
    cycle_start = date_parser.isoparse(cycle["start"])
    cycle_end = date_parser.isoparse(cycle["end"]) if cycle.get("end") else None
    selected = []
    for workout in workouts:
        workout_start = date_parser.isoparse(workout["start"])
        if workout_start >= cycle_start and (cycle_end is None or workout_start <= cycle_end):
            selected.append(workout)
    return selected


def _naps_by_cycle(sleeps: list[dict[str, Any]]) -> dict[Any, list[dict[str, Any]]]:
    naps: dict[Any, list[dict[str, Any]]] = {}
    for sleep in sleeps:
        if sleep.get("nap") and sleep.get("score_state") == "SCORED":
            naps.setdefault(sleep.get("cycle_id"), []).append(sleep)
    return naps


class WhoopClient:
    """Async client for the Whoop developer API (v2)."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        access_token: str = "",
        refresh_token: str = "",
        token_store: WhoopTokenStore | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = HTTP_TIMEOUT,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._expires_at = 0.0
        self._token_store = token_store or WhoopTokenStore(None)
        self._client = http_client
        self._timeout = timeout
        self._timezone_getter: TimezoneGetter | None = None
        self._refresh_lock = asyncio.Lock()

    def set_timezone_getter(self, getter: TimezoneGetter) -> None:
        """Set the coroutine used to resolve the athlete's timezone."""
        self._timezone_getter = getter

    async def get_timezone(self) -> str:
        if self._timezone_getter is None:
            return "UTC"
        return await self._timezone_getter()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    def _in_memory_token_valid(self) -> bool:
        return bool(self._access_token) and AccessToken(self._access_token, self._expires_at).is_fresh()

    async def _ensure_valid_token(self) -> str:
        cached = await self._token_store.get_access_token()
        if cached is not None:
            logger.debug("[WHOOP_CLIENT] Using cached access token")
            self._access_token = cached.token
            self._expires_at = cached.expires_at
            return self._access_token

        if self._in_memory_token_valid():
            logger.debug("[WHOOP_CLIENT] Using in-memory access token")
            return self._access_token

        async with self._refresh_lock:
            # Another task may have refreshed while this one waited
            if self._in_memory_token_valid():
                return self._access_token
            await self._refresh_access_token()
        return self._access_token

    async def _refresh_access_token(self) -> None:
        stored_refresh = await self._token_store.get_refresh_token()
        refresh_token = stored_refresh or self._refresh_token
        if not refresh_token:
            if self._access_token:
                logger.warning("[WHOOP_CLIENT] No refresh token available, using configured access token as-is")
                # Expiry unknown; assume Whoop's default one-hour lifetime
                self._expires_at = time.time() + 3600
                return
            raise WhoopApiError.missing_credentials()

        token_source = "cache" if stored_refresh else "config"
        logger.info(f"[WHOOP_CLIENT] Refreshing access token using {token_source} refresh token {mask_token(refresh_token)}")

        try:
            resp = await self._get_client().post(
                WHOOP_TOKEN_URL,
                data={
                    "grant_type": "refresh_token",
                    "refresh_token": refresh_token,
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
            )
        except httpx.RequestError as e:
            logger.error(f"[WHOOP_CLIENT] Token refresh network error: {e}")
            raise WhoopApiError.token_refresh_error(original=e) from e

        if not resp.is_success:
            logger.error(f"[WHOOP_CLIENT] Token refresh failed: {resp.status_code} {resp.reason_phrase} {resp.text}")
            raise WhoopApiError.token_refresh_error(resp.status_code, resp.reason_phrase)

        data = resp.json()
        self._access_token = data["access_token"]
        self._refresh_token = data.get("refresh_token") or refresh_token
        self._expires_at = time.time() + data.get("expires_in", 3600)
        logger.info(
            f"[WHOOP_CLIENT] Token refreshed, new refresh token {mask_token(self._refresh_token)}, "
            f"expires in {data.get('expires_in', 3600)}s"
        )
        await self._token_store.store_tokens(self._access_token, self._refresh_token, self._expires_at)

    async def _fetch(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
        context: ErrorContext | None = None,
    ) -> Any:
        context = context or ErrorContext(operation=f"fetch {endpoint}")
        if params:
            context = ErrorContext(operation=context.operation, resource=context.resource, parameters=params)

        token = await self._ensure_valid_token()
        logger.debug(f"[WHOOP_CLIENT] GET {endpoint} params={params}")

        try:
            resp = await self._get_client().get(
                f"{WHOOP_API_BASE}{endpoint}",
                params=params,
                headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
            )
        except httpx.RequestError as e:
            logger.error(f"[WHOOP_CLIENT] Network error on {endpoint}: {e}")
            raise WhoopApiError.network_error(context, e) from e

        if resp.status_code == 401:
            # Force a refresh on the next call; this call still fails
            logger.warning(f"[WHOOP_CLIENT] 401 on {endpoint}, invalidating access token")
            self._expires_at = 0.0
            await self._token_store.invalidate_access_token()

        if not resp.is_success:
            logger.error(f"[WHOOP_CLIENT] {endpoint} failed: {resp.status_code} {resp.reason_phrase}")
            raise WhoopApiError.from_http_status(resp.status_code, context, resp.reason_phrase)

        return resp.json()

    async def _fetch_records(self, endpoint: str, params: dict[str, str] | None, context: ErrorContext) -> list[dict[str, Any]]:
        payload = await self._fetch(endpoint, params, context)
        return payload.get("records") or []

    async def _fetch_recovery_chain(
        self, params: dict[str, str] | None
    ) -> tuple[list[dict[str, Any]], list[dict[str, Any]], list[dict[str, Any]]]:
        return await asyncio.gather(
            self._fetch_records("/cycle", params, ErrorContext(operation="fetch cycles", resource="physiological cycles")),
            self._fetch_records("/activity/sleep", params, ErrorContext(operation="fetch sleep", resource="sleep records")),
            self._fetch_records("/recovery", params, ErrorContext(operation="fetch recovery", resource="recovery records")),
        )

    async def get_recoveries(self, start_date: str, end_date: str) -> list[RecoveryData]:
        """Get scored recoveries whose local date falls in the range.

        Follows cycle, then the cycle's main (non-nap) sleep, then the
        recovery computed from that sleep. Unscored records are skipped.
        """
        tz_name = await self.get_timezone()
        cycles, sleeps, recoveries = await self._fetch_recovery_chain(_range_params(start_date, end_date))

        sleep_by_cycle = {
            s["cycle_id"]: s for s in sleeps if s.get("score_state") == "SCORED" and not s.get("nap")
        }
        recovery_by_sleep = {r["sleep_id"]: r for r in recoveries if r.get("score_state") == "SCORED"}
        naps_by_cycle = _naps_by_cycle(sleeps)

        results: list[RecoveryData] = []
        for cycle in cycles:
            if cycle.get("score_state") != "SCORED":
                continue
            sleep = sleep_by_cycle.get(cycle["id"])
            if sleep is None:
                continue
            recovery = recovery_by_sleep.get(sleep["id"])
            if recovery is None:
                continue
            if not start_date <= _local_date(recovery["created_at"], tz_name) <= end_date:
                continue
            results.append(normalize_recovery(recovery, sleep, tz_name, naps_by_cycle.get(cycle["id"])))

        logger.info(f"[WHOOP_CLIENT] {len(results)} recoveries between {start_date} and {end_date}")
        return results

    async def get_today_recovery(self) -> RecoveryData | None:
        """Recovery of the most recent scored cycle (Whoop's physiological day)."""
        tz_name = await self.get_timezone()
        cycles, sleeps, recoveries = await self._fetch_recovery_chain(None)

        cycle = next((c for c in cycles if c.get("score_state") == "SCORED"), None)
        if cycle is None:
            return None
        sleep = next(
            (
                s
                for s in sleeps
                if s.get("cycle_id") == cycle["id"] and s.get("score_state") == "SCORED" and not s.get("nap")
            ),
            None,
        )
        if sleep is None:
            return None
        recovery = next(
            (r for r in recoveries if r.get("sleep_id") == sleep["id"] and r.get("score_state") == "SCORED"),
            None,
        )
        if recovery is None:
            return None
        return normalize_recovery(recovery, sleep, tz_name, _naps_by_cycle(sleeps).get(cycle["id"]))

    async def get_workouts(self, start_date: str, end_date: str) -> list[StrainActivity]:
        """Get Whoop workouts whose local start date falls in the range."""
        tz_name = await self.get_timezone()
        records = await self._fetch_records(
            "/activity/workout",
            _range_params(start_date, end_date),
            ErrorContext(operation="fetch workouts", resource=f"workouts from {start_date} to {end_date}"),
        )
        workouts = [normalize_workout(record, tz_name) for record in records]
        return [w for w in workouts if start_date <= w.start_time[:10] <= end_date]

    async def get_strain_data(self, start_date: str, end_date: str) -> list[StrainData]:
        """Day strain per scored cycle whose local date falls in the range.

        A cycle belongs to the local date it ended on; the cycle still in
        progress belongs to today.
        """
        tz_name = await self.get_timezone()
        today = get_today_in_timezone(tz_name)
        params = _range_params(start_date, end_date)
        cycles, workouts = await asyncio.gather(
            self._fetch_records("/cycle", params, ErrorContext(operation="fetch cycles", resource="physiological cycles")),
            self._fetch_records(
                "/activity/workout",
                params,
                ErrorContext(operation="fetch workouts", resource=f"workouts from {start_date} to {end_date}"),
            ),
        )

        results: list[StrainData] = []
        for cycle in cycles:
            if cycle.get("score_state") != "SCORED":
                continue
            cycle_date = _local_date(cycle["end"], tz_name) if cycle.get("end") else today
            if not start_date <= cycle_date <= end_date:
                continue
            results.append(normalize_strain(cycle, _workouts_in_cycle(cycle, workouts), cycle_date, tz_name))

        logger.info(f"[WHOOP_CLIENT] {len(results)} strain days between {start_date} and {end_date}")
        return results

    async def get_today_strain(self) -> StrainData | None:
        """Strain of the cycle in progress, or None until Whoop has scored it."""
        tz_name = await self.get_timezone()
        cycles, workouts = await asyncio.gather(
            self._fetch_records("/cycle", None, ErrorContext(operation="fetch cycles", resource="physiological cycles")),
            self._fetch_records("/activity/workout", None, ErrorContext(operation="fetch workouts", resource="recent workouts")),
        )

        cycle = next((c for c in cycles if not c.get("end")), None)
        if cycle is None or cycle.get("score_state") != "SCORED":
            return None
        return normalize_strain(cycle, _workouts_in_cycle(cycle, workouts), get_today_in_timezone(tz_name), tz_name)
