"""Natural-language date parsing for tool arguments.

Single dates, checked in order (first match wins):
- Exact ``YYYY-MM-DD`` literal, validated and returned unchanged
- ``today``, ``yesterday``, ``tomorrow``
- ``<N> days|weeks|months ago``
- ``last week`` (Monday of the previous week), ``last month`` (first day
  of the previous month)
- Any other ISO-8601 string

Ranges accept a separate vocabulary (``this week``, ``last 30 days``, ...)
and never fall back to single-date parsing.

Note: ``last N days`` ranges end today, while ``N days ago`` names a
single day; the two families use different endpoint conventions.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, tzinfo

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from app.core.errors import DateParseError
from app.models.common import DateRange
from app.utils.date_formatting import get_zone

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
AGO_PATTERN = re.compile(r"^(\d+)\s*(day|week|month)s?\s*ago$")
LAST_N_PATTERN = re.compile(r"^last\s+(\d+)\s*(day|week|month)s?$")


def _now(tz: tzinfo | None = None) -> datetime:
    return datetime.now(tz)


def _shift_back(anchor: date, unit: str, amount: int) -> date:
    if unit == "day":
        return anchor - timedelta(days=amount)
    if unit == "week":
        return anchor - timedelta(weeks=amount)
    return anchor - relativedelta(months=amount)


def _start_of_week(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _start_of_month(day: date) -> date:
    return day.replace(day=1)


def _end_of_month(day: date) -> date:
    return day + relativedelta(day=31)


def _parse_single(raw: str, today: date, parameter_name: str) -> str:
    if ISO_DATE_PATTERN.match(raw):
        try:
            date.fromisoformat(raw)
        except ValueError:
            raise DateParseError(raw, parameter_name) from None
        return raw

    normalized = raw.lower().strip()

    if normalized == "today":
        return today.isoformat()
    if normalized == "yesterday":
        return (today - timedelta(days=1)).isoformat()
    if normalized == "tomorrow":
        return (today + timedelta(days=1)).isoformat()

    ago = AGO_PATTERN.match(normalized)
    if ago:
        return _shift_back(today, ago.group(2), int(ago.group(1))).isoformat()

    if normalized == "last week":
        return _start_of_week(today - timedelta(weeks=1)).isoformat()
    if normalized == "last month":
        return _start_of_month(today - relativedelta(months=1)).isoformat()

    try:
        return date_parser.isoparse(raw.strip()).date().isoformat()
    except (ValueError, OverflowError):
        raise DateParseError(raw, parameter_name) from None


def parse_date_string(raw: str, parameter_name: str = "date") -> str:
    """Parse a natural-language or ISO date into ``YYYY-MM-DD``.

    Args:
        raw: User supplied date expression (e.g. "3 days ago")
        parameter_name: Name of the tool parameter, used in the error message

    Returns:
        ISO date string

    Raises:
        DateParseError: If the input matches no recognised form
    """
    return _parse_single(raw, _now().date(), parameter_name)


def parse_date_string_in_timezone(raw: str, tz_name: str, parameter_name: str = "date") -> str:
    """Like parse_date_string, with relative expressions anchored to "now" in ``tz_name``."""
    return _parse_single(raw, _now(get_zone(tz_name)).date(), parameter_name)


def parse_date_range(raw: str) -> DateRange:
    """Parse a range phrase such as "this week" or "last 30 days".

    Raises:
        DateParseError: If the phrase is not a recognised range
    """
    normalized = raw.lower().strip()
    today = _now().date()

    if normalized == "today":
        return DateRange(start=today.isoformat(), end=today.isoformat())

    if normalized in ("this week", "last week"):
        anchor = today if normalized == "this week" else today - timedelta(weeks=1)
        start = _start_of_week(anchor)
        return DateRange(start=start.isoformat(), end=(start + timedelta(days=6)).isoformat())

    if normalized in ("this month", "last month"):
        anchor = today if normalized == "this month" else today - relativedelta(months=1)
        return DateRange(start=_start_of_month(anchor).isoformat(), end=_end_of_month(anchor).isoformat())

    last_n = LAST_N_PATTERN.match(normalized)
    if last_n:
        start = _shift_back(today, last_n.group(2), int(last_n.group(1)))
        return DateRange(start=start.isoformat(), end=today.isoformat())

    raise DateParseError(raw, "date range", message=f'Unable to parse date range: "{raw}"')


def get_days_back_range(days: int) -> DateRange:
    """Window of ``days`` calendar days ending today (days=1 is today only)."""
    today = _now().date()
    start = today - timedelta(days=max(0, days - 1))
    return DateRange(start=start.isoformat(), end=today.isoformat())


def get_days_ahead_range(days: int) -> DateRange:
    """Window from today through ``days`` days ahead."""
    today = _now().date()
    return DateRange(start=today.isoformat(), end=(today + timedelta(days=days)).isoformat())


def get_today() -> str:
    return _now().date().isoformat()


def get_today_in_timezone(tz_name: str) -> str:
    return _now(get_zone(tz_name)).date().isoformat()

