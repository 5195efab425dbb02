# tana_calendar/core/exceptions.py
"""
Error kinds raised below the HTTP layer.

Request validation is not an exception here: the schema boundary returns a
``Valid`` / ``Invalid`` result (see ``core.calendar.schemas``).
"""

from __future__ import annotations


class CalendarSyncError(Exception):
    """Base class for service errors."""


class AuthenticationError(CalendarSyncError):
    """Credentials are missing, malformed, or rejected by Google."""


class ProviderError(CalendarSyncError):
    """A calendar gateway call did not complete."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__: list[str] = ["CalendarSyncError", "AuthenticationError", "ProviderError"]
