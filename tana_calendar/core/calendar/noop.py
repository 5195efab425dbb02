# tana_calendar/core/calendar/noop.py

from __future__ import annotations

import copy
import logging
import uuid
from typing import Dict

from tana_calendar.core.exceptions import ProviderError
from .base import BaseCalendarGateway, CalendarEvent, NewCalendarEvent

log = logging.getLogger(__name__)


class NoOpCalendarGateway(BaseCalendarGateway):
    """
    Асинхронная заглушка-календарь; хранит события в оперативной памяти.
    Для локального запуска и тестов (CALENDAR_PROVIDER=noop).
    """

    name: str = "noop"

    def __init__(self) -> None:
        # calendar_id -> event_id -> event
        self._calendars: Dict[str, Dict[str, CalendarEvent]] = {}
        log.info("Initialized NoOpCalendarGateway (in-memory)")

    def _find(self, calendar_id: str, event_id: str) -> CalendarEvent:
        try:
            return self._calendars[calendar_id][event_id]
        except KeyError as exc:
            raise ProviderError(
                f"Event {event_id} not found in calendar {calendar_id}", status_code=404
            ) from exc

    async def get_event(self, calendar_id: str, event_id: str) -> CalendarEvent:
        log.debug("NoOp: Getting event %s from %s", event_id, calendar_id)
        return copy.deepcopy(self._find(calendar_id, event_id))

    async def insert_event(self, calendar_id: str, event: NewCalendarEvent) -> CalendarEvent:
        event_id = uuid.uuid4().hex
        stored: CalendarEvent = {k: v for k, v in copy.deepcopy(event).items() if k != "attendees"}
        stored["id"] = event_id
        stored["htmlLink"] = f"https://calendar.local/event?eid={event_id}"
        self._calendars.setdefault(calendar_id, {})[event_id] = stored
        log.info("NoOp: Event added with id %s to %s", event_id, calendar_id)
        return copy.deepcopy(stored)

    async def update_event(
        self, calendar_id: str, event_id: str, event: CalendarEvent
    ) -> CalendarEvent:
        current = self._find(calendar_id, event_id)
        stored: CalendarEvent = copy.deepcopy(event)
        stored["id"] = event_id
        stored["htmlLink"] = current["htmlLink"]
        self._calendars[calendar_id][event_id] = stored
        log.info("NoOp: Event %s replaced in %s", event_id, calendar_id)
        return copy.deepcopy(stored)

    async def move_event(
        self, calendar_id: str, event_id: str, destination_calendar_id: str
    ) -> CalendarEvent:
        event = self._find(calendar_id, event_id)
        del self._calendars[calendar_id][event_id]
        self._calendars.setdefault(destination_calendar_id, {})[event_id] = event
        log.info("NoOp: Event %s moved %s -> %s", event_id, calendar_id, destination_calendar_id)
        return copy.deepcopy(event)

    async def delete_event(self, calendar_id: str, event_id: str) -> bool:
        removed = self._calendars.get(calendar_id, {}).pop(event_id, None)
        if removed is None:
            log.warning("NoOp: Event id %s not found for deletion", event_id)
            return False
        log.info("NoOp: Event id %s deleted", event_id)
        return True


__all__ = ["NoOpCalendarGateway"]
