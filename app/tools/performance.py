"""Best-effort curves and activity totals over a date range.

Curve tools can compare the period against an earlier one; the
comparison lists the change of every summary best present in both.
"""

from __future__ import annotations

import math
from datetime import date

from loguru import logger

from app.core.errors import ApiError
from app.integrations.intervals.client import IntervalsClient
from app.models.activity import CompletedWorkout
from app.models.curves import CurveComparison, HrCurveResult, PaceCurveResult, PowerCurveResult
from app.models.totals import ActivityTotals, SportTotals, TotalsPeriod
from app.tools.sources import resolve_date_range
from app.utils.curve_utils import (
    DEFAULT_CURVE_DURATIONS,
    DEFAULT_RUNNING_DISTANCES,
    DEFAULT_SWIMMING_DISTANCES,
    compare_bests,
    estimate_ftp,
    format_distance_label,
    format_duration_label,
    summarize_hr,
    summarize_pace,
    summarize_power,
)
from app.utils.format_units import format_duration, parse_duration_to_seconds

# Intervals.icu activity type used for each curve sport
CURVE_ACTIVITY_TYPES = {"cycling": "Ride", "running": "Run", "swimming": "Swim"}


def _distance_meters(distance: str | None) -> float:
    """Meters from a rendered distance ("42.1 km" or "1500 m")."""
    if not distance:
        return 0
    value, _, unit = distance.partition(" ")
    try:
        amount = float(value)
    except ValueError:
        return 0
    return amount * 1000 if unit == "km" else amount


def _elevation_meters(elevation: str | None) -> float:
    return _distance_meters(elevation) if elevation else 0


def _sport_totals(workouts: list[CompletedWorkout]) -> SportTotals:
    seconds = sum(parse_duration_to_seconds(w.duration) for w in workouts if w.duration)
    meters = sum(_distance_meters(w.distance) for w in workouts)
    climbing = sum(_elevation_meters(w.elevation_gain) for w in workouts)
    work = sum(w.work_kj or 0 for w in workouts)
    return SportTotals(
        activities=len(workouts),
        duration=format_duration(seconds),
        distance=f"{round(meters / 1000)} km",
        climbing=f"{round(climbing)} m" if climbing > 0 else None,
        load=round(sum(w.tss or 0 for w in workouts)),
        kcal=round(sum(w.calories or 0 for w in workouts)),
        work=f"{round(work)} kJ" if work > 0 else None,
    )


def calculate_activity_totals(workouts: list[CompletedWorkout], start_date: str, end_date: str) -> ActivityTotals:
    """Totals over the period and per sport.

    Swim distances are kept in meters by the activity normalization, so
    everything is summed in meters before rounding to whole km.
    """
    days = (date.fromisoformat(end_date) - date.fromisoformat(start_date)).days + 1
    by_sport: dict[str, list[CompletedWorkout]] = {}
    for workout in workouts:
        by_sport.setdefault((workout.activity_type or "other").lower(), []).append(workout)

    return ActivityTotals(
        period=TotalsPeriod(
            start_date=start_date,
            end_date=end_date,
            weeks=math.ceil(days / 7),
            days=days,
            active_days=len({w.start_time[:10] for w in workouts if w.start_time}),
        ),
        totals=_sport_totals(workouts),
        by_sport={sport: _sport_totals(items) for sport, items in by_sport.items()},
    )


class PerformanceTools:
    def __init__(self, intervals: IntervalsClient | None):
        self.intervals = intervals

    async def _comparison_range(self, compare_to_start: str | None, compare_to_end: str | None) -> tuple[str, str] | None:
        if not compare_to_start:
            return None
        return await resolve_date_range(self.intervals, compare_to_start, compare_to_end, "compare_to_")

    async def get_power_curve(
        self,
        start_date: str,
        end_date: str | None = None,
        durations: list[int] | None = None,
        compare_to_start: str | None = None,
        compare_to_end: str | None = None,
    ) -> PowerCurveResult:
        """Best cycling power per duration with an FTP estimate from the 20 minute best.

        Raises:
            DateParseError: If a date cannot be understood
            IntervalsApiError: If a curve fetch fails
        """
        start, end = await resolve_date_range(self.intervals, start_date, end_date)
        durations = durations or DEFAULT_CURVE_DURATIONS
        labels = [format_duration_label(secs) for secs in durations]
        if self.intervals is None:
            return PowerCurveResult(period_start=start, period_end=end, activity_count=0, durations_analyzed=labels, summary={})

        previous_range = await self._comparison_range(compare_to_start, compare_to_end)
        try:
            curves = await self.intervals.get_power_curves(start, end, "Ride", durations)
            summary = summarize_power(curves.activities, curves.durations or durations)

            comparison = None
            if previous_range:
                previous = await self.intervals.get_power_curves(*previous_range, "Ride", durations)
                previous_summary = summarize_power(previous.activities, previous.durations or durations)
                comparison = CurveComparison(
                    previous_period_start=previous_range[0],
                    previous_period_end=previous_range[1],
                    previous_activity_count=len(previous.activities),
                    changes=compare_bests(
                        {key: best.watts if best else None for key, best in summary.items()},
                        {key: best.watts if best else None for key, best in previous_summary.items()},
                    ),
                )
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching power curves: {e}")
            raise

        return PowerCurveResult(
            period_start=start,
            period_end=end,
            activity_count=len(curves.activities),
            durations_analyzed=labels,
            summary=summary,
            estimated_ftp=estimate_ftp(summary),
            comparison=comparison,
        )

    async def get_hr_curve(
        self,
        start_date: str,
        end_date: str | None = None,
        sport: str | None = None,
        durations: list[int] | None = None,
        compare_to_start: str | None = None,
        compare_to_end: str | None = None,
    ) -> HrCurveResult:
        start, end = await resolve_date_range(self.intervals, start_date, end_date)
        durations = durations or DEFAULT_CURVE_DURATIONS
        labels = [format_duration_label(secs) for secs in durations]
        if self.intervals is None:
            return HrCurveResult(
                period_start=start, period_end=end, sport=sport, activity_count=0, durations_analyzed=labels, summary={}
            )

        activity_type = CURVE_ACTIVITY_TYPES.get(sport) if sport else None
        previous_range = await self._comparison_range(compare_to_start, compare_to_end)
        try:
            curves = await self.intervals.get_hr_curves(start, end, activity_type, durations)
            summary = summarize_hr(curves.activities, curves.durations or durations)

            comparison = None
            if previous_range:
                previous = await self.intervals.get_hr_curves(*previous_range, activity_type, durations)
                previous_summary = summarize_hr(previous.activities, previous.durations or durations)
                comparison = CurveComparison(
                    previous_period_start=previous_range[0],
                    previous_period_end=previous_range[1],
                    previous_activity_count=len(previous.activities),
                    changes=compare_bests(
                        {key: best.bpm if best else None for key, best in summary.items()},
                        {key: best.bpm if best else None for key, best in previous_summary.items()},
                    ),
                )
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching HR curves: {e}")
            raise

        return HrCurveResult(
            period_start=start,
            period_end=end,
            sport=sport,
            activity_count=len(curves.activities),
            durations_analyzed=labels,
            summary=summary,
            comparison=comparison,
        )

    async def get_pace_curve(
        self,
        start_date: str,
        end_date: str | None = None,
        sport: str = "running",
        distances: list[int] | None = None,
        gap: bool | None = None,
        compare_to_start: str | None = None,
        compare_to_end: str | None = None,
    ) -> PaceCurveResult:
        """Best times per distance for running or swimming.

        Gradient adjusted pace only applies to running and is ignored for
        swims.
        """
        start, end = await resolve_date_range(self.intervals, start_date, end_date)
        is_swim = sport == "swimming"
        distances = distances or (DEFAULT_SWIMMING_DISTANCES if is_swim else DEFAULT_RUNNING_DISTANCES)
        labels = [format_distance_label(meters) for meters in distances]
        gap = None if is_swim else gap
        if self.intervals is None:
            return PaceCurveResult(
                period_start=start,
                period_end=end,
                sport=sport,
                gap_adjusted=bool(gap),
                activity_count=0,
                distances_analyzed=labels,
                summary={},
            )

        activity_type = CURVE_ACTIVITY_TYPES[sport]
        previous_range = await self._comparison_range(compare_to_start, compare_to_end)
        try:
            curves = await self.intervals.get_pace_curves(start, end, activity_type, distances, gap)
            summary = summarize_pace(curves.activities, curves.distances or distances, is_swim)

            comparison = None
            if previous_range:
                previous = await self.intervals.get_pace_curves(*previous_range, activity_type, distances, gap)
                previous_summary = summarize_pace(previous.activities, previous.distances or distances, is_swim)
                comparison = CurveComparison(
                    previous_period_start=previous_range[0],
                    previous_period_end=previous_range[1],
                    previous_activity_count=len(previous.activities),
                    changes=compare_bests(
                        {key: best.time_seconds if best else None for key, best in summary.items()},
                        {key: best.time_seconds if best else None for key, best in previous_summary.items()},
                        lower_is_better=True,
                    ),
                )
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching pace curves: {e}")
            raise

        return PaceCurveResult(
            period_start=start,
            period_end=end,
            sport=sport,
            gap_adjusted=curves.gap_adjusted or bool(gap),
            activity_count=len(curves.activities),
            distances_analyzed=labels,
            summary=summary,
            comparison=comparison,
        )

    async def get_activity_totals(
        self,
        start_date: str,
        end_date: str | None = None,
        sports: list[str] | None = None,
    ) -> ActivityTotals:
        start, end = await resolve_date_range(self.intervals, start_date, end_date)
        if self.intervals is None:
            return calculate_activity_totals([], start, end)

        try:
            workouts = await self.intervals.get_activities(start, end)
        except ApiError as e:
            logger.error(f"[TOOLS] Error fetching activities for totals: {e}")
            raise

        if sports:
            wanted = {sport.lower() for sport in sports}
            workouts = [w for w in workouts if (w.activity_type or "other").lower() in wanted]
        logger.debug(f"[TOOLS] Totals over {len(workouts)} activities {start}..{end}")
        return calculate_activity_totals(workouts, start, end)
