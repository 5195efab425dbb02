# tana_calendar/core/calendar/service.py

"""Service-layer for calendar events: create, reconcile updates, delete."""

from __future__ import annotations

import copy
import logging
from datetime import timedelta
from typing import NamedTuple, Optional

from .base import BaseCalendarGateway, CalendarEvent
from .dates import build_event_date_time_info
from .paste import build_tana_paste
from .schemas import DEFAULT_TIME_ZONE, EventData, PartialEventData

log = logging.getLogger(__name__)


class MutationOutcome(NamedTuple):
    """Final snapshot and the calendar it lives in after the request."""

    event: CalendarEvent
    calendar_id: str


class EventService:
    """
    Асинхронный сервис событий календаря.
    Получает gateway через внедрение зависимостей (DI); ничего не хранит
    между запросами.

    Google's ``events.update`` replaces the whole resource, so every partial
    update fetches the current event (or reuses the one returned by a move)
    and merges only the fields the caller sent. No etag is sent: a concurrent
    edit made between the fetch and the update is overwritten.
    """

    def __init__(
        self,
        gateway: BaseCalendarGateway,
        default_time_zone: str = DEFAULT_TIME_ZONE,
        default_duration: timedelta = timedelta(hours=1),
    ) -> None:
        """
        Args:
            gateway (BaseCalendarGateway): Per-request calendar gateway.
            default_time_zone (str): Time zone for creates and date updates that do not name one.
            default_duration (timedelta): Length of timed events sent without an end.
        """
        self.gateway = gateway
        self.default_time_zone = default_time_zone
        self.default_duration = default_duration

    # ------------------------------------------------------------------ #
    #                       Public business-methods                      #
    # ------------------------------------------------------------------ #

    async def create_event(self, calendar_id: str, data: EventData) -> str:
        """
        Создает событие и возвращает Tana Paste.

        Args:
            calendar_id (str): Calendar to create the event in.
            data (EventData): Validated create payload.

        Returns:
            str: Tana Paste with the event URL, ID and calendar ID.
        """
        time_zone = data.time_zone or self.default_time_zone
        start, end = build_event_date_time_info(data.date, time_zone, self.default_duration)
        log.info("Creating event '%s' in calendar %s", data.name, calendar_id)
        event = await self.gateway.insert_event(
            calendar_id,
            {
                "summary": data.name,
                "description": data.description,
                "location": data.location,
                "start": start,
                "end": end,
            },
        )
        log.info("Created event id=%s in calendar %s", event.get("id"), calendar_id)
        return build_tana_paste(event, calendar_id)

    async def update_event(
        self,
        from_calendar_id: str,
        event_id: str,
        data: PartialEventData,
        to_calendar_id: Optional[str] = None,
    ) -> str:
        """
        Обновляет событие, при необходимости переносит его в другой календарь.

        Args:
            from_calendar_id (str): Calendar the event is in now.
            event_id (str): Provider event ID.
            data (PartialEventData): Only fields present in it are changed.
            to_calendar_id (Optional[str]): Move target; ignored when equal to
                ``from_calendar_id``.

        Returns:
            str: Tana Paste for the event in the calendar it ends up in.

        Raises:
            ProviderError: Any gateway call failed. A move that already
                happened is not undone.
        """
        outcome = await self.reconcile(from_calendar_id, event_id, data, to_calendar_id)
        return build_tana_paste(outcome.event, outcome.calendar_id)

    async def reconcile(
        self,
        from_calendar_id: str,
        event_id: str,
        data: PartialEventData,
        to_calendar_id: Optional[str] = None,
    ) -> MutationOutcome:
        current_calendar_id = from_calendar_id
        event: Optional[CalendarEvent] = None

        # Move first: the merge below must target the relocated event.
        if to_calendar_id and to_calendar_id != from_calendar_id:
            log.info("Moving event %s from %s to %s", event_id, from_calendar_id, to_calendar_id)
            event = await self.gateway.move_event(from_calendar_id, event_id, to_calendar_id)
            current_calendar_id = to_calendar_id

        if data.has_changes:
            if event is None:
                log.debug("Fetching event %s from %s before merge", event_id, current_calendar_id)
                event = await self.gateway.get_event(current_calendar_id, event_id)
            merged = self.merge_event(event, data)
            log.info(
                "Updating event %s in %s (fields: %s)",
                event_id, current_calendar_id, sorted(data.model_fields_set),
            )
            event = await self.gateway.update_event(current_calendar_id, event_id, merged)

        if event is None:
            log.debug("Nothing to change for event %s, fetching it", event_id)
            event = await self.gateway.get_event(current_calendar_id, event_id)

        return MutationOutcome(event, current_calendar_id)

    def merge_event(self, event: CalendarEvent, data: PartialEventData) -> CalendarEvent:
        """Copy ``event`` and overwrite only the fields present in ``data``."""
        merged: CalendarEvent = copy.deepcopy(event)
        if data.is_present("name"):
            merged["summary"] = data.name
        if data.is_present("description"):
            merged["description"] = data.description
        if data.is_present("location"):
            merged["location"] = data.location
        if data.is_present("date"):
            time_zone = data.time_zone if data.is_present("time_zone") else self.default_time_zone
            start, end = build_event_date_time_info(data.date, time_zone, self.default_duration)
            merged["start"] = start
            merged["end"] = end
        return merged

    async def delete_event(self, calendar_id: str, event_id: str) -> bool:
        """
        Удаляет событие.

        Returns:
            bool: True, если провайдер подтвердил удаление, иначе False.
        """
        log.info("Deleting event %s from calendar %s", event_id, calendar_id)
        deleted = await self.gateway.delete_event(calendar_id, event_id)
        if not deleted:
            log.warning("Event %s was not deleted from calendar %s", event_id, calendar_id)
        return deleted

    async def get_event(self, calendar_id: str, event_id: str) -> str:
        """Tana Paste for an existing event, without changing it."""
        log.debug("Looking up event %s in calendar %s", event_id, calendar_id)
        event = await self.gateway.get_event(calendar_id, event_id)
        return build_tana_paste(event, calendar_id)


__all__: list[str] = ["EventService", "MutationOutcome"]
