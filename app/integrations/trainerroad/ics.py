"""Minimal iCalendar (RFC 5545) reader for the TrainerRoad feed.

Only VEVENT blocks are read, and only the properties the normalizer needs:
UID, SUMMARY, DESCRIPTION, DTSTART and DTEND.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from dateutil import parser as date_parser
from loguru import logger

from app.models.planned import CalendarEvent
from app.utils.date_formatting import get_zone

_ESCAPE_PATTERN = re.compile(r"\\([nN,;:\\])")
_UNESCAPED = {"n": "\n", "N": "\n"}


def unfold_ics_lines(text: str) -> list[str]:
    """Join folded continuation lines (lines starting with space or tab)."""
    out: list[str] = []
    for line in text.splitlines():
        if out and line.startswith((" ", "\t")):
            out[-1] += line[1:]
        else:
            out.append(line.rstrip("\r\n"))
    return out


def ics_unescape(value: str) -> str:
    # One pass, so an escaped backslash never pairs with the next character
    return _ESCAPE_PATTERN.sub(lambda m: _UNESCAPED.get(m.group(1), m.group(1)), value)


def _split_params(key: str) -> tuple[str, dict[str, str]]:
    name, *raw_params = key.split(";")
    params: dict[str, str] = {}
    for raw in raw_params:
        if "=" in raw:
            param_name, param_value = raw.split("=", 1)
            params[param_name.strip().upper()] = param_value.strip().strip('"')
    return name.strip().upper(), params


def parse_ics_datetime(value: str, params: dict[str, str] | None = None) -> tuple[datetime, bool]:
    """Parse a DTSTART/DTEND value.

    Args:
        value: Raw property value, e.g. "20241229T063000Z" or "20241229"
        params: Property parameters (VALUE, TZID)

    Returns:
        Tuple of (datetime, is_all_day). UTC values are aware, TZID values
        are aware in that zone, floating and all-day values are naive.

    Raises:
        ValueError: If the value is not a valid DATE or DATE-TIME
    """
    params = params or {}
    raw = value.strip()

    if params.get("VALUE") == "DATE" or (len(raw) == 8 and raw.isdigit()):
        return date_parser.isoparse(raw[:8]), True

    parsed = date_parser.isoparse(raw)
    if parsed.tzinfo is not None:
        return parsed.astimezone(timezone.utc), False

    tzid = params.get("TZID")
    if tzid:
        return parsed.replace(tzinfo=get_zone(tzid)), False
    return parsed, False


def _build_event(fields: dict[str, tuple[str, dict[str, str]]]) -> CalendarEvent | None:
    summary = ics_unescape(fields.get("SUMMARY", ("", {}))[0]).strip()
    if "DTSTART" not in fields or not summary:
        return None

    uid = fields.get("UID", ("", {}))[0].strip()
    try:
        start, all_day = parse_ics_datetime(*fields["DTSTART"])
        end = parse_ics_datetime(*fields["DTEND"])[0] if "DTEND" in fields else start
    except ValueError as e:
        logger.warning(f"[TRAINERROAD_ICS] Skipping event uid={uid or '-'} with unreadable date: {e}")
        return None

    if (end.tzinfo is None) != (start.tzinfo is None):
        end = start

    if not uid:
        uid = f"trainerroad-{int(start.timestamp() * 1000)}"

    description = ics_unescape(fields.get("DESCRIPTION", ("", {}))[0]).strip() or None

    return CalendarEvent(
        uid=uid,
        start=start,
        end=end,
        summary=summary,
        description=description,
        all_day=all_day,
    )


def parse_ics_events(text: str) -> list[CalendarEvent]:
    """Parse every VEVENT in an ICS document.

    Events without a start or a summary are skipped, as are events whose
    DTSTART/DTEND cannot be read.
    """
    events: list[CalendarEvent] = []
    fields: dict[str, tuple[str, dict[str, str]]] = {}
    in_event = False

    for line in unfold_ics_lines(text):
        if line == "BEGIN:VEVENT":
            fields = {}
            in_event = True
            continue

        if line == "END:VEVENT":
            if in_event:
                event = _build_event(fields)
                if event is not None:
                    events.append(event)
            in_event = False
            continue

        if not in_event or ":" not in line:
            continue

        key, value = line.split(":", 1)
        name, params = _split_params(key)
        fields[name] = (value, params)

    logger.debug(f"[TRAINERROAD_ICS] Parsed {len(events)} events")
    return events
