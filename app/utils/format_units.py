"""Unit formatting helpers for human-readable tool output.

All units are metric. Durations are always rendered as ``H:MM:SS`` so
"0:05:00" can never be read as five hours.
"""

from __future__ import annotations

SWIM_TYPES = ("swimming", "swim", "openwaterswim", "pool", "poolswim")


def _clock(hours: int, minutes: int, seconds: int) -> str:
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as ``H:MM:SS``.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string like "1:30:00" or "0:05:00"
    """
    total = round(seconds)
    return _clock(total // 3600, (total % 3600) // 60, total % 60)


def format_distance(km: float, is_swim: bool) -> str:
    """Format a distance in km; swims are reported in whole meters."""
    if is_swim:
        return f"{round(km * 1000)} m"
    return f"{km:.1f} km"


def format_speed(kph: float) -> str:
    return f"{kph:.1f} km/h"


def format_pace(sec_per_km: float, is_swim: bool) -> str:
    """Format a pace given in seconds per km.

    Swims are converted to seconds per 100m.
    """
    if is_swim:
        sec = round(sec_per_km / 10)
        return f"{sec // 60}:{sec % 60:02d}/100m"
    sec = round(sec_per_km)
    return f"{sec // 60}:{sec % 60:02d}/km"


def is_swimming_activity(activity_type: str | None) -> bool:
    if not activity_type:
        return False
    lowered = activity_type.lower()
    return any(swim_type in lowered for swim_type in SWIM_TYPES)


def _split_clock(duration: str) -> tuple[float, float, float] | None:
    parts = duration.split(":")
    if len(parts) != 3:
        return None
    try:
        hours, minutes, seconds = (float(part) for part in parts)
    except ValueError:
        return None
    return hours, minutes, seconds


def parse_duration_to_hours(duration: str) -> float:
    """Parse ``H:MM:SS`` into fractional hours. Malformed input yields 0."""
    parsed = _split_clock(duration)
    if parsed is None:
        return 0.0
    hours, minutes, seconds = parsed
    return hours + minutes / 60 + seconds / 3600


def parse_duration_to_seconds(duration: str) -> float:
    """Parse ``H:MM:SS`` into seconds. Malformed input yields 0."""
    parsed = _split_clock(duration)
    if parsed is None:
        return 0.0
    hours, minutes, seconds = parsed
    return hours * 3600 + minutes * 60 + seconds
