# tana_calendar/core/calendar/paste.py
"""Tana Paste output for a synced event."""

from __future__ import annotations

from .base import CalendarEvent


def build_tana_paste(event: CalendarEvent, calendar_id: str) -> str:
    """
    Render the three ``field::value`` lines Tana reads back into the node.

    Args:
        event (CalendarEvent): Final event snapshot from the provider.
        calendar_id (str): Calendar the event lives in after the request.

    Returns:
        str: ``Event URL``, ``Event ID`` and ``Synced Calendar ID`` lines.
    """
    return "\n".join(
        [
            f"Event URL::{event.get('htmlLink', '')}",
            f"Event ID::{event.get('id', '')}",
            f"Synced Calendar ID::{calendar_id}",
        ]
    )


__all__: list[str] = ["build_tana_paste"]
