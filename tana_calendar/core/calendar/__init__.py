"""
Calendar subsystem package.

• ``CalendarEvent``  – снимок события провайдера (см. base.py).
• ``BaseCalendarGateway`` – абстрактный интерфейс шлюза.
• ``EventService`` – сверка частичных обновлений, перенос, удаление.
• ``get_calendar_gateway()`` – фабрика, возвращающая шлюз по имени
  или из ``settings.CALENDAR_PROVIDER``.

Ленивая загрузка (``importlib.import_module``) не тянет Google SDK,
пока он реально не нужен.
"""
from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Any, Callable, Dict, Optional, Type

from tana_calendar.config import settings
from .base import BaseCalendarGateway, CalendarEvent  # noqa: F401 (экспорт в __all__)
from .service import EventService

log = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
#                       helpers: lazy-import specific gateway                 #
# --------------------------------------------------------------------------- #
def _lazy_import(module_suffix: str, class_name: str) -> Type[BaseCalendarGateway]:
    """
    _lazy_import(".noop", "NoOpCalendarGateway")  →  <class NoOpCalendarGateway>
    """
    module = importlib.import_module(f"{__name__}{module_suffix}")
    return getattr(module, class_name)


# --------------------------------------------------------------------------- #
#                       registry: name → gateway-class loader                 #
# --------------------------------------------------------------------------- #
_GATEWAY_LOADERS: Dict[str, Callable[[], Type[BaseCalendarGateway]]] = {
    "google": lambda: _lazy_import(".google", "GoogleCalendarGateway"),
    "noop": lambda: _lazy_import(".noop", "NoOpCalendarGateway"),
}

# the in-memory gateway keeps its events for the life of the process
_noop_instance: Optional[BaseCalendarGateway] = None


# --------------------------------------------------------------------------- #
#                                 public API                                  #
# --------------------------------------------------------------------------- #
def get_calendar_gateway(name: str | None = None, credentials: Any = None) -> BaseCalendarGateway:
    """
    Вернуть шлюз календаря.

    • ``name`` – явное имя (case-insensitive); по умолчанию
      ``settings.CALENDAR_PROVIDER``.
    • ``credentials`` – обязательны для ``google``; новый клиент на каждый запрос.
    """
    global _noop_instance
    gateway_key = (name or settings.CALENDAR_PROVIDER).lower()
    loader = _GATEWAY_LOADERS.get(gateway_key)
    if loader is None:
        raise ValueError(f"Unknown calendar provider: {gateway_key}")

    gateway_cls = loader()
    if gateway_key == "noop":
        if _noop_instance is None:
            _noop_instance = gateway_cls()
        return _noop_instance
    return gateway_cls(credentials=credentials)


def get_event_service(gateway: BaseCalendarGateway) -> EventService:
    """EventService with the configured event defaults."""
    return EventService(
        gateway,
        default_time_zone=settings.DEFAULT_TIME_ZONE,
        default_duration=timedelta(minutes=settings.DEFAULT_EVENT_DURATION_MINUTES),
    )


__all__: list[str] = [
    "CalendarEvent",
    "BaseCalendarGateway",
    "EventService",
    "get_calendar_gateway",
    "get_event_service",
]
