"""Heat strain and ambient temperature metrics from Intervals.icu activity streams.

Streams arrive as ``[{"type": "time", "data": [...]}, ...]`` with every
series aligned on the ``time`` series (seconds from the activity start).
"""

from __future__ import annotations

from statistics import median
from typing import Any

from app.models.activity import HeatMetrics, HeatZone, TemperatureMetrics
from app.utils.format_units import format_duration

# (name, low, displayed high); a zone runs up to the next zone's low
HEAT_ZONE_DEFINITIONS: tuple[tuple[str, float, float | None], ...] = (
    ("Zone 1: No Heat Strain", 0, 0.9),
    ("Zone 2: Moderate Heat Strain", 1, 2.9),
    ("Zone 3: High Heat Strain", 3, 6.9),
    ("Zone 4: Extremely High Heat Strain", 7, None),
)


def _round1(value: float) -> float:
    return round(value, 1)


def parse_stream(streams: list[dict[str, Any]], value_type: str) -> tuple[list[float], list[float]] | None:
    """Return ``(time, values)`` for one stream type, or None if either series is missing."""
    by_type = {stream.get("type"): stream.get("data") for stream in streams or []}
    times = by_type.get("time")
    values = by_type.get(value_type)
    if not times or not values:
        return None
    return times, values


def _check_aligned(times: list[float], values: list[float]) -> None:
    if len(times) != len(values):
        raise ValueError(f"Stream length mismatch: {len(times)} time points, {len(values)} values")


def _heat_zone_index(hsi: float) -> int | None:
    if hsi < HEAT_ZONE_DEFINITIONS[0][1]:
        return None
    for index in range(len(HEAT_ZONE_DEFINITIONS) - 1, -1, -1):
        if hsi >= HEAT_ZONE_DEFINITIONS[index][1]:
            return index
    return None


def calculate_heat_zones(times: list[float], heat_strain: list[float]) -> list[HeatZone]:
    """Time spent in each heat zone.

    Each sample lasts until the next one; the last sample counts as one
    second.

    Raises:
        ValueError: If the series have different lengths
    """
    _check_aligned(times, heat_strain)
    seconds = [0.0] * len(HEAT_ZONE_DEFINITIONS)
    for i, hsi in enumerate(heat_strain):
        zone = _heat_zone_index(hsi)
        if zone is None:
            continue
        seconds[zone] += times[i + 1] - times[i] if i < len(times) - 1 else 1

    return [
        HeatZone(name=name, low_heat_strain_index=low, high_heat_strain_index=high, time_in_zone=format_duration(seconds[i]))
        for i, (name, low, high) in enumerate(HEAT_ZONE_DEFINITIONS)
    ]


def calculate_heat_metrics(times: list[float], heat_strain: list[float]) -> HeatMetrics:
    return HeatMetrics(
        zones=calculate_heat_zones(times, heat_strain),
        max_heat_strain_index=_round1(max(heat_strain)) if heat_strain else 0,
        median_heat_strain_index=_round1(median(heat_strain)) if heat_strain else 0,
    )


def calculate_temperature_metrics(times: list[float], temperatures: list[float]) -> TemperatureMetrics:
    """Min, max, average, first and last ambient temperature, rounded to 0.1 degree.

    Raises:
        ValueError: If the series have different lengths
    """
    _check_aligned(times, temperatures)
    if not temperatures:
        return TemperatureMetrics(
            min_ambient_temperature=0,
            max_ambient_temperature=0,
            avg_ambient_temperature=0,
            start_ambient_temperature=0,
            end_ambient_temperature=0,
        )
    return TemperatureMetrics(
        min_ambient_temperature=_round1(min(temperatures)),
        max_ambient_temperature=_round1(max(temperatures)),
        avg_ambient_temperature=_round1(sum(temperatures) / len(temperatures)),
        start_ambient_temperature=_round1(temperatures[0]),
        end_ambient_temperature=_round1(temperatures[-1]),
    )


def window_summary(
    times: list[float], values: list[float], start: float, end: float
) -> tuple[float, float, float, float, float] | None:
    """``(min, max, median, first, last)`` of the samples with ``start <= time <= end``."""
    window = [value for time, value in zip(times, values) if start <= time <= end]
    if not window:
        return None
    return (
        _round1(min(window)),
        _round1(max(window)),
        _round1(median(window)),
        _round1(window[0]),
        _round1(window[-1]),
    )
