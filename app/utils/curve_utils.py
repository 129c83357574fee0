"""Labels, best efforts and period comparisons for power, HR and pace curves."""

from __future__ import annotations

from app.models.curves import (
    ActivityHrCurve,
    ActivityPaceCurve,
    ActivityPowerCurve,
    CurveChange,
    HrBest,
    PaceBest,
    PowerBest,
)

DEFAULT_CURVE_DURATIONS = [5, 30, 60, 300, 1200, 3600, 7200]
DEFAULT_RUNNING_DISTANCES = [400, 1000, 1609, 5000, 10000, 21097, 42195]
DEFAULT_SWIMMING_DISTANCES = [100, 200, 400, 800, 1500, 1900, 3800]

POWER_SUMMARY_DURATIONS: dict[str, int] = {
    "best_5s": 5,
    "best_30s": 30,
    "best_1min": 60,
    "best_5min": 300,
    "best_20min": 1200,
    "best_60min": 3600,
    "best_2hr": 7200,
}
HR_SUMMARY_DURATIONS: dict[str, int] = {key.replace("best_", "max_"): secs for key, secs in POWER_SUMMARY_DURATIONS.items()}
RUNNING_SUMMARY_DISTANCES: dict[str, int] = {
    "best_400m": 400,
    "best_1km": 1000,
    "best_mile": 1609,
    "best_5km": 5000,
    "best_10km": 10000,
    "best_half_marathon": 21097,
    "best_marathon": 42195,
}
SWIMMING_SUMMARY_DISTANCES: dict[str, int] = {
    "best_100m": 100,
    "best_200m": 200,
    "best_1500m": 1500,
    "best_half_iron_swim": 1900,
    "best_iron_swim": 3800,
}

# Intervals.icu may round distances, e.g. 1600 for a mile
DISTANCE_TOLERANCE = 0.02
FTP_FROM_20MIN = 0.95


def format_duration_label(seconds: int) -> str:
    """5 -> "5s", 300 -> "5min", 7200 -> "2hr"."""
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}min"
    return f"{seconds // 3600}hr"


def format_distance_label(meters: float) -> str:
    if 1600 <= meters <= 1620:
        return "mile"
    if 21000 <= meters <= 21200:
        return "half_marathon"
    if 42000 <= meters <= 42300:
        return "marathon"
    if 1850 <= meters <= 1950:
        return "half_iron_swim"
    if 3750 <= meters <= 3850:
        return "iron_swim"
    if meters >= 1000:
        km = meters / 1000
        return f"{int(km)}km" if km.is_integer() else f"{km:.1f}km"
    return f"{int(meters)}m"


def format_pace_from_time(time_seconds: float, distance_meters: float, is_swim: bool) -> str:
    """Pace as min:ss per km, or per 100m for swims."""
    per_unit = time_seconds / distance_meters * (100 if is_swim else 1000)
    total = round(per_unit)
    unit = "/100m" if is_swim else "/km"
    return f"{total // 60}:{total % 60:02d}{unit}"


def summarize_power(activities: list[ActivityPowerCurve], durations: list[int]) -> dict[str, PowerBest | None]:
    """Highest watts at each summary duration across all activities."""
    summary: dict[str, PowerBest | None] = {}
    for key, secs in POWER_SUMMARY_DURATIONS.items():
        best: PowerBest | None = None
        if secs in durations:
            idx = durations.index(secs)
            for activity in activities:
                if idx >= len(activity.curve):
                    continue
                point = activity.curve[idx]
                if point.watts > 0 and (best is None or point.watts > best.watts):
                    best = PowerBest(
                        watts=point.watts,
                        watts_per_kg=point.watts_per_kg,
                        activity_id=activity.activity_id,
                        date=activity.date,
                    )
        summary[key] = best
    return summary


def estimate_ftp(summary: dict[str, PowerBest | None]) -> int | None:
    best_20min = summary.get("best_20min")
    return round(best_20min.watts * FTP_FROM_20MIN) if best_20min else None


def summarize_hr(activities: list[ActivityHrCurve], durations: list[int]) -> dict[str, HrBest | None]:
    summary: dict[str, HrBest | None] = {}
    for key, secs in HR_SUMMARY_DURATIONS.items():
        best: HrBest | None = None
        if secs in durations:
            idx = durations.index(secs)
            for activity in activities:
                if idx >= len(activity.curve):
                    continue
                point = activity.curve[idx]
                if point.bpm > 0 and (best is None or point.bpm > best.bpm):
                    best = HrBest(bpm=point.bpm, activity_id=activity.activity_id, date=activity.date)
        summary[key] = best
    return summary


def summarize_pace(
    activities: list[ActivityPaceCurve], distances: list[float], is_swim: bool
) -> dict[str, PaceBest | None]:
    """Lowest time at each summary distance; distances match within 2%."""
    targets = SWIMMING_SUMMARY_DISTANCES if is_swim else RUNNING_SUMMARY_DISTANCES
    summary: dict[str, PaceBest | None] = {}
    for key, meters in targets.items():
        best: PaceBest | None = None
        idx = next((i for i, d in enumerate(distances) if abs(d - meters) <= meters * DISTANCE_TOLERANCE), None)
        if idx is not None:
            for activity in activities:
                if idx >= len(activity.curve):
                    continue
                point = activity.curve[idx]
                if point.time_seconds > 0 and (best is None or point.time_seconds < best.time_seconds):
                    best = PaceBest(
                        time_seconds=point.time_seconds,
                        pace=point.pace,
                        activity_id=activity.activity_id,
                        date=activity.date,
                    )
        summary[key] = best
    return summary


def compare_bests(
    current: dict[str, float | None],
    previous: dict[str, float | None],
    lower_is_better: bool = False,
) -> list[CurveChange]:
    """Change per summary key present in both periods.

    Args:
        current: Summary key to value (watts, bpm or seconds) for this period
        previous: Same for the comparison period
        lower_is_better: True for times, where a drop is an improvement
    """
    changes: list[CurveChange] = []
    for key, value in current.items():
        before = previous.get(key)
        if value is None or before is None:
            continue
        change = value - before
        changes.append(
            CurveChange(
                label=key.split("_", 1)[1],
                current=value,
                previous=before,
                change=round(change, 1),
                change_percent=round(change / before * 100, 1) if before > 0 else 0,
                improved=change < 0 if lower_is_better else change > 0,
            )
        )
    return changes
