"""Normalization of TrainerRoad calendar events into PlannedWorkout records.

Each extraction rule is a separate function so it can be tested on its own.
Duration precedence is fixed: name prefix, then description, then the
event span (only when shorter than 12 hours).

Nothing in this module raises for malformed text. Unknown fields are left
as None.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from loguru import logger

from app.models.planned import CalendarEvent, Discipline, PlannedWorkout, WorkoutSource
from app.utils.date_formatting import get_zone
from app.utils.format_units import format_duration

NAME_DURATION_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})\s*[-–—]")
NAME_TITLE_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})\s*[-–—]\s*(.+)$")
TSS_PATTERN = re.compile(r"TSS[:\s]+(\d+(?:\.\d+)?)", re.IGNORECASE)
IF_PATTERN = re.compile(r"(?:IF|Intensity Factor)[:\s]+(\d+(?:\.\d+)?)", re.IGNORECASE)
EXPLICIT_DURATION_PATTERN = re.compile(
    r"Duration[:\s]+(\d+(?::\d{2})?(?::\d{2})?)\s*(?:minutes?|mins?|hours?|hrs?)?",
    re.IGNORECASE,
)
CLOCK_DURATION_PATTERN = re.compile(r"(?:^|\n)(\d{1,2}:\d{2}(?::\d{2})?)")
HOURS_UNIT_PATTERN = re.compile(r"hours?|hrs?", re.IGNORECASE)
INTERVALS_BLOCK_PATTERN = re.compile(r"(?:Intervals|Workout Structure):[ \t]*\n?(.*?)(?:\n[ \t]*\n|\Z)", re.DOTALL)
METADATA_PREFIXES = ("TSS", "IF", "Duration")

# Spans at or above this are all-day placeholders, not workouts
MAX_EVENT_SPAN_MINUTES = 720


@dataclass
class ParsedDescription:
    tss: float | None = None
    intensity_factor: float | None = None
    duration_minutes: float | None = None


def normalize_intensity_factor(value: float | None) -> float | None:
    """Intensity factor as a 0-1 fraction; values above 1 are percentages."""
    if value is None:
        return None
    return value / 100 if value > 1 else value


def parse_duration_from_name(summary: str) -> int | None:
    """Duration in minutes from a "2:00 - Gibbs" style prefix, or None."""
    match = NAME_DURATION_PATTERN.match(summary)
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def strip_duration_from_name(summary: str) -> str:
    """Remove the duration prefix: "2:00 - Gibbs" becomes "Gibbs"."""
    match = NAME_TITLE_PATTERN.match(summary)
    if match:
        return match.group(3)
    return summary


def _duration_token_to_minutes(token: str, matched_text: str) -> float | None:
    if ":" in token:
        parts = [int(part) for part in token.split(":")]
        if len(parts) == 3:
            return parts[0] * 60 + parts[1] + parts[2] / 60
        if len(parts) == 2:
            return parts[0] * 60 + parts[1]
        return None
    value = int(token)
    if HOURS_UNIT_PATTERN.search(matched_text):
        return value * 60
    return value


def parse_description(description: str | None) -> ParsedDescription:
    """Extract TSS, intensity factor and duration from free-form text.

    An intensity factor above 1 is read as a percentage ("IF: 85" is 0.85).
    Duration comes from an explicit "Duration:" label when present,
    otherwise from a clock token at the start of a line.
    """
    parsed = ParsedDescription()
    if not description:
        return parsed

    tss_match = TSS_PATTERN.search(description)
    if tss_match:
        parsed.tss = float(tss_match.group(1))

    if_match = IF_PATTERN.search(description)
    if if_match:
        parsed.intensity_factor = normalize_intensity_factor(float(if_match.group(1)))

    duration_match = EXPLICIT_DURATION_PATTERN.search(description) or CLOCK_DURATION_PATTERN.search(description)
    if duration_match:
        parsed.duration_minutes = _duration_token_to_minutes(duration_match.group(1), duration_match.group(0))

    return parsed


def event_span_minutes(event: CalendarEvent) -> float:
    return (event.end - event.start).total_seconds() / 60


def resolve_duration_minutes(event: CalendarEvent, parsed: ParsedDescription) -> float | None:
    """Pick the workout duration: name prefix, description, then event span."""
    from_name = parse_duration_from_name(event.summary)
    if from_name:
        return from_name
    if parsed.duration_minutes:
        return parsed.duration_minutes

    span = event_span_minutes(event)
    if 0 < span < MAX_EVENT_SPAN_MINUTES:
        return span
    return None


def detect_discipline(summary: str) -> Discipline:
    lowered = summary.lower()
    if "run" in lowered:
        return Discipline.RUN
    if "swim" in lowered:
        return Discipline.SWIM
    return Discipline.BIKE


def detect_source(summary: str, description: str | None = None) -> WorkoutSource:
    if "zwift" in summary.lower() or "zwift" in (description or "").lower():
        return WorkoutSource.ZWIFT
    return WorkoutSource.TRAINERROAD


def extract_workout_type(description: str | None) -> str | None:
    """First non-empty description line, unless it is TSS/IF/Duration metadata."""
    if not description:
        return None
    for line in description.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith(METADATA_PREFIXES):
            return None
        return stripped
    return None


def extract_intervals(description: str | None) -> str | None:
    """Text of the block after "Intervals:" or "Workout Structure:", up to a blank line."""
    if not description:
        return None
    match = INTERVALS_BLOCK_PATTERN.search(description)
    if not match:
        return None
    block = match.group(1).strip()
    return block or None


def is_workout(event: CalendarEvent) -> bool:
    """Tell workouts apart from annotations.

    All-day events need a duration prefix in the name; timed events need
    a span between 0 and 24 hours.
    """
    if event.all_day:
        return parse_duration_from_name(event.summary) is not None
    span = event_span_minutes(event)
    return 0 < span < 1440


def _local_start(event: CalendarEvent, tz_name: str | None) -> datetime:
    # All-day and floating starts are already wall-clock values
    if event.all_day or event.start.tzinfo is None:
        return event.start.replace(tzinfo=None)
    zone = get_zone(tz_name) if tz_name else timezone.utc
    return event.start.astimezone(zone).replace(tzinfo=None)


def event_in_range(event: CalendarEvent, start: str, end: str, tz_name: str | None = None) -> bool:
    """Whether the event starts within ``[start 00:00:00, end 23:59:59]`` local time."""
    window_start = datetime.combine(date.fromisoformat(start), time.min)
    window_end = datetime.combine(date.fromisoformat(end), time(23, 59, 59))
    local_start = _local_start(event, tz_name)
    return window_start <= local_start <= window_end


def format_scheduled_for(event: CalendarEvent, tz_name: str | None = None) -> str:
    """ISO start for an event.

    All-day events are midnight in ``tz_name`` (or "...T00:00:00.000Z" when
    no timezone is known); timed events are rendered in ``tz_name`` or UTC.
    Floating starts are wall-clock times in ``tz_name``, matching
    ``event_in_range``.
    """
    if event.all_day:
        day = event.start.date().isoformat()
        if not tz_name:
            return f"{day}T00:00:00.000Z"
        midnight = datetime.combine(event.start.date(), time.min, tzinfo=get_zone(tz_name))
        return midnight.isoformat()

    if event.start.tzinfo:
        start = event.start
    else:
        start = event.start.replace(tzinfo=get_zone(tz_name) if tz_name else timezone.utc)
    if tz_name:
        return start.astimezone(get_zone(tz_name)).replace(microsecond=0).isoformat()
    return start.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def normalize_event(event: CalendarEvent, tz_name: str | None = None) -> PlannedWorkout:
    """Convert a calendar event into a PlannedWorkout.

    Args:
        event: Parsed calendar event
        tz_name: Athlete IANA timezone used to render ``scheduled_for``

    Returns:
        PlannedWorkout with any undetectable field left as None
    """
    parsed = parse_description(event.description)
    duration_minutes = resolve_duration_minutes(event, parsed)

    workout = PlannedWorkout(
        id=event.uid,
        scheduled_for=format_scheduled_for(event, tz_name),
        name=strip_duration_from_name(event.summary),
        description=event.description,
        expected_tss=parsed.tss,
        expected_if=parsed.intensity_factor,
        expected_duration=format_duration(duration_minutes * 60) if duration_minutes else None,
        discipline=detect_discipline(event.summary),
        workout_type=extract_workout_type(event.description),
        intervals=extract_intervals(event.description),
        source=detect_source(event.summary, event.description),
    )
    logger.debug(
        f"[TRAINERROAD_NORMALIZE] uid={event.uid} name={workout.name!r} "
        f"duration={workout.expected_duration} tss={workout.expected_tss}"
    )
    return workout
