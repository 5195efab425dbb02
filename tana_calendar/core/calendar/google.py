# tana_calendar/core/calendar/google.py

"""
Реализация CalendarGateway через Google Calendar API (v3).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from google.auth.exceptions import RefreshError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from tana_calendar.core.exceptions import AuthenticationError, ProviderError
from .base import BaseCalendarGateway, CalendarEvent, NewCalendarEvent

log = logging.getLogger(__name__)


class GoogleCalendarGateway(BaseCalendarGateway):
    """
    Gateway over ``service.events()``.

    The discovery client is blocking, so each request runs in a worker
    thread. One instance serves one HTTP request.
    """

    name: str = "google"

    def __init__(self, credentials: Any = None, service: Any = None) -> None:
        """
        Args:
            credentials: Scoped google-auth credentials.
            service: Prebuilt discovery client; built from ``credentials`` when omitted.
        """
        if service is None:
            if credentials is None:
                raise ValueError("Either credentials or a prebuilt service is required")
            service = build("calendar", "v3", credentials=credentials, cache_discovery=False)
        self._svc = service

    # ─────────────────────────────────────────────────────
    async def _execute(self, action: str, make_request: Callable[[], Any]) -> Any:
        try:
            return await asyncio.to_thread(lambda: make_request().execute())
        except RefreshError as exc:
            log.warning("[Calendar] %s: token refresh failed: %s", action, exc)
            raise AuthenticationError("Google rejected the service account credentials") from exc
        except HttpError as exc:
            status = exc.resp.status if exc.resp is not None else None
            log.error("[Calendar] %s failed with HTTP %s: %s", action, status, exc)
            raise ProviderError(f"{action} failed: {exc.reason or exc}", status_code=status) from exc

    async def get_event(self, calendar_id: str, event_id: str) -> CalendarEvent:
        return await self._execute(
            "events.get",
            lambda: self._svc.events().get(calendarId=calendar_id, eventId=event_id),
        )

    async def insert_event(self, calendar_id: str, event: NewCalendarEvent) -> CalendarEvent:
        body = {k: v for k, v in event.items() if k != "attendees"}
        created = await self._execute(
            "events.insert",
            lambda: self._svc.events().insert(calendarId=calendar_id, body=body),
        )
        log.info("[Calendar] insert event %s into %s", created.get("id"), calendar_id)
        return created

    async def update_event(
        self, calendar_id: str, event_id: str, event: CalendarEvent
    ) -> CalendarEvent:
        updated = await self._execute(
            "events.update",
            lambda: self._svc.events().update(calendarId=calendar_id, eventId=event_id, body=event),
        )
        log.info("[Calendar] update event %s in %s", event_id, calendar_id)
        return updated

    async def move_event(
        self, calendar_id: str, event_id: str, destination_calendar_id: str
    ) -> CalendarEvent:
        moved = await self._execute(
            "events.move",
            lambda: self._svc.events().move(
                calendarId=calendar_id, eventId=event_id, destination=destination_calendar_id
            ),
        )
        log.info("[Calendar] move event %s: %s -> %s", event_id, calendar_id, destination_calendar_id)
        return moved

    async def delete_event(self, calendar_id: str, event_id: str) -> bool:
        # events.delete returns an empty body; any failure is an HttpError
        await self._execute(
            "events.delete",
            lambda: self._svc.events().delete(calendarId=calendar_id, eventId=event_id),
        )
        log.info("[Calendar] delete event %s from %s", event_id, calendar_id)
        return True


__all__ = ["GoogleCalendarGateway"]
