# tana_calendar/core/calendar/base.py
"""
Abstract base and common types for calendar gateways.

A gateway is a thin async wrapper over one calendar provider's event
resource. It is built per request around an authenticated client and holds
no state of its own beyond that client.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, TypedDict


class EventDateTime(TypedDict, total=False):
    """
    Start or end of an event in Google's representation.

    All-day events carry ``date``; timed events carry ``dateTime`` plus
    ``timeZone``.
    """
    date: str
    dateTime: str
    timeZone: str


class CalendarEvent(TypedDict, total=False):
    """
    Полное представление события у провайдера (Google event resource).

    Only the keys this service reads or writes are listed; the provider
    returns many more (``etag``, ``creator``, ``reminders`` ...) and they are
    carried through untouched on update.
    """
    id: str
    htmlLink: str
    summary: str
    description: str
    location: str
    start: EventDateTime
    end: EventDateTime


# Payload accepted by ``insert_event``: attendees are never part of it.
NewCalendarEvent = Dict[str, Any]


class BaseCalendarGateway(ABC):
    """
    Асинхронный интерфейс к событиям календаря провайдера.
    """

    # Имя провайдера (например, 'noop', 'google')
    name: str

    @abstractmethod
    async def get_event(self, calendar_id: str, event_id: str) -> CalendarEvent:
        """
        Return the full event resource.

        Raises:
            ProviderError: The event or calendar does not exist or is not accessible.
        """
        ...

    @abstractmethod
    async def insert_event(self, calendar_id: str, event: NewCalendarEvent) -> CalendarEvent:
        """
        Create an event and return the resource the provider stored.

        Args:
            calendar_id (str): Target calendar.
            event (NewCalendarEvent): ``summary``, ``description``, ``location``,
                ``start`` and ``end``. Attendees cannot be invited with service
                account credentials unless domain-wide delegation is set up, so
                they are never sent.

        Returns:
            CalendarEvent: Created event with provider ``id`` and ``htmlLink``.
        """
        ...

    @abstractmethod
    async def update_event(
        self, calendar_id: str, event_id: str, event: CalendarEvent
    ) -> CalendarEvent:
        """
        Replace the whole event resource.

        This is not a patch: keys missing from ``event`` are cleared by the
        provider. Callers fetch the current resource first and merge into it.
        """
        ...

    @abstractmethod
    async def move_event(
        self, calendar_id: str, event_id: str, destination_calendar_id: str
    ) -> CalendarEvent:
        """
        Move an event to another calendar (changes its organizer) and return it.

        Only ``default`` events can be moved; birthdays, focus time, out of
        office and similar event types are rejected by the provider.
        """
        ...

    @abstractmethod
    async def delete_event(self, calendar_id: str, event_id: str) -> bool:
        """
        Delete an event.

        Returns:
            bool: True if the provider reports the event deleted.
        """
        ...


__all__ = [
    "EventDateTime",
    "CalendarEvent",
    "NewCalendarEvent",
    "BaseCalendarGateway",
]
