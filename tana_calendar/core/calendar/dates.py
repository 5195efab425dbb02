# tana_calendar/core/calendar/dates.py
"""
Date descriptor → Google ``start``/``end`` conversion.

A date descriptor is ``{"start": ..., "end": ...}`` where each point is an
ISO date (``2025-03-01``) or an ISO date-time (``2025-03-01T09:00``).
Date-only descriptors become all-day events.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Tuple, Union

import pytz

from .base import EventDateTime

if TYPE_CHECKING:  # pragma: no cover
    from .schemas import DateInfo

DatePoint = Union[date, datetime]

_DATE_ONLY_LENGTH = len("YYYY-MM-DD")


def parse_date_point(value: str) -> DatePoint:
    """
    Parse one descriptor point.

    Raises:
        ValueError: The value is neither an ISO date nor an ISO date-time.
    """
    text = value.strip()
    if len(text) == _DATE_ONLY_LENGTH:
        return date.fromisoformat(text)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def is_all_day(point: DatePoint) -> bool:
    # datetime is a subclass of date
    return not isinstance(point, datetime)


def resolve_time_zone(name: str) -> pytz.BaseTzInfo:
    """Look up an IANA time zone, raising ``ValueError`` for unknown names."""
    try:
        return pytz.timezone(name)
    except (pytz.UnknownTimeZoneError, AttributeError) as exc:
        raise ValueError(f"Unknown time zone: {name!r}") from exc


def build_event_date_time_info(
    date_info: "DateInfo",
    time_zone: str,
    default_duration: timedelta = timedelta(hours=1),
) -> Tuple[EventDateTime, EventDateTime]:
    """
    Build the provider ``(start, end)`` pair for a date descriptor.

    Args:
        date_info (DateInfo): Descriptor with ``start`` and optional ``end``.
        time_zone (str): IANA time zone attached to timed events.
        default_duration (timedelta): Length of a timed event without ``end``.

    Returns:
        Tuple[EventDateTime, EventDateTime]: ``start`` and ``end`` in Google's
        shape. All-day ends are exclusive, so they point at the day after the
        last day of the event.

    Raises:
        ValueError: Unknown time zone, mixed date/date-time points, or an end
            before the start.
    """
    resolve_time_zone(time_zone)
    start = parse_date_point(date_info.start)
    end = parse_date_point(date_info.end) if date_info.end else None

    if end is not None and is_all_day(start) != is_all_day(end):
        raise ValueError("Date start and end must both be dates or both be date-times")

    if is_all_day(start):
        last_day = end or start
        if last_day < start:
            raise ValueError("Date end is before start")
        return (
            {"date": start.isoformat()},
            {"date": (last_day + timedelta(days=1)).isoformat()},
        )

    if end is not None and (start.tzinfo is None) != (end.tzinfo is None):
        raise ValueError("Date start and end must both carry a UTC offset or neither")
    end_dt = end or start + default_duration
    if end_dt < start:
        raise ValueError("Date end is before start")
    return (
        {"dateTime": start.isoformat(), "timeZone": time_zone},
        {"dateTime": end_dt.isoformat(), "timeZone": time_zone},
    )


__all__: list[str] = [
    "parse_date_point",
    "is_all_day",
    "resolve_time_zone",
    "build_event_date_time_info",
]
