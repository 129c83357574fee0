"""Timezone-aware ISO-8601 formatting.

Output format is always ``YYYY-MM-DDTHH:MM:SS±HH:MM`` in the requested
IANA timezone.
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser
from loguru import logger


def get_zone(tz_name: str | None) -> ZoneInfo:
    """Resolve an IANA timezone name, falling back to UTC for unknown names."""
    try:
        return ZoneInfo(tz_name or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone '{tz_name}', falling back to UTC")
        return ZoneInfo("UTC")


def _format_offset(value: datetime) -> str:
    # isoformat renders UTC as +00:00 already; strip microseconds only
    return value.replace(microsecond=0).isoformat()


def format_to_iso8601_with_timezone(value: datetime | str, tz_name: str) -> str:
    """Render an instant in the given timezone.

    Args:
        value: Aware datetime or ISO string. Naive values are treated as UTC.
        tz_name: IANA timezone (e.g. "America/New_York")

    Returns:
        ISO 8601 string with offset, e.g. "2024-12-29T05:30:00-05:00"
    """
    instant = date_parser.isoparse(value) if isinstance(value, str) else value
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return _format_offset(instant.astimezone(get_zone(tz_name)))


def local_string_to_iso8601_with_timezone(local_value: str, tz_name: str) -> str:
    """Attach a timezone to a wall-clock string that is already local.

    ``"2024-12-29T14:30:00"`` in America/New_York becomes
    ``"2024-12-29T14:30:00-05:00"``.
    """
    local = date_parser.isoparse(local_value)
    if local.tzinfo is not None:
        return format_to_iso8601_with_timezone(local, tz_name)
    return _format_offset(local.replace(tzinfo=get_zone(tz_name)))

