# tana_calendar/core/calendar/schemas.py
"""
Pydantic-схемы запросов к календарю.

Используются в:
    * tana_calendar/api/v1/events.py     ― валидация query и JSON-тела
    * core.calendar.service              ― типизированные данные для EventService

Validation failures are returned, not raised: ``validate_model`` yields
``Valid(value)`` or ``Invalid(errors)`` and the request layer picks the
HTTP response from that.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any, Generic, List, Literal, Optional, Type, TypeVar, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError

from .dates import is_all_day, parse_date_point, resolve_time_zone

DEFAULT_TIME_ZONE = "Etc/UTC"
MAX_LOCATION_LENGTH = 1024

ModelT = TypeVar("ModelT", bound=BaseModel)


# --------------------------------------------------------------------------- #
#                               date descriptor                               #
# --------------------------------------------------------------------------- #
class DateInfo(BaseModel):
    """Tana date field: a single day, a day range, or a time range."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    start: str = Field(..., description="ISO date (all-day) or ISO date-time")
    end: Optional[str] = Field(None, description="Same kind as start; inclusive for dates")

    @field_validator("start", "end")
    @classmethod
    def check_point(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            parse_date_point(value)
        except ValueError:
            raise PydanticCustomError(
                "invalid_date",
                "Invalid date, expected YYYY-MM-DD or YYYY-MM-DDTHH:MM[:SS]",
            )
        return value.strip()

    @model_validator(mode="after")
    def check_range(self) -> "DateInfo":
        if self.end is None:
            return self
        start, end = parse_date_point(self.start), parse_date_point(self.end)
        if is_all_day(start) != is_all_day(end):
            raise PydanticCustomError(
                "date_kind_mismatch",
                "Date start and end must both be dates or both be date-times",
            )
        if not is_all_day(start) and (start.tzinfo is None) != (end.tzinfo is None):
            raise PydanticCustomError(
                "date_offset_mismatch",
                "Date start and end must both carry a UTC offset or neither",
            )
        if end < start:
            raise PydanticCustomError("date_range", "Date end is before start")
        return self


# --------------------------------------------------------------------------- #
#                                event payloads                               #
# --------------------------------------------------------------------------- #
class _EventFieldRules(BaseModel):
    """Field rules shared by the create and the partial-update payloads."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("name", check_fields=False)
    @classmethod
    def check_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise PydanticCustomError("name_required", "Event name is required")
        return value

    @field_validator("description", check_fields=False)
    @classmethod
    def strip_description(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else value

    @field_validator("location", check_fields=False)
    @classmethod
    def check_location(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if len(value) > MAX_LOCATION_LENGTH:
            raise PydanticCustomError("location_too_long", "Location is too long")
        return value

    @field_validator("time_zone", check_fields=False)
    @classmethod
    def check_time_zone(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise PydanticCustomError("time_zone_empty", "Time zone cannot be empty")
        try:
            # canonical spelling, e.g. "europe/berlin" -> "Europe/Berlin"
            return resolve_time_zone(value).zone
        except ValueError:
            raise PydanticCustomError("time_zone_invalid", "Invalid timezone format")


class EventData(_EventFieldRules):
    """Body of ``POST /events``."""

    name: str
    date: DateInfo
    description: str = ""
    # None means the service default (settings.DEFAULT_TIME_ZONE)
    time_zone: Optional[str] = Field(None, alias="timeZone")
    location: str = ""


class PartialEventData(_EventFieldRules):
    """
    Body of ``PUT /events/{event_id}``.

    A field is present when its key was sent (``model_fields_set``); absent
    fields leave the event untouched. ``null`` is rejected so that "absent"
    and "cleared" cannot be confused; send ``""`` to clear a text field.
    """

    name: Optional[str] = None
    date: Optional[DateInfo] = None
    description: Optional[str] = None
    time_zone: Optional[str] = Field(None, alias="timeZone")
    location: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise PydanticCustomError(
                "null_field", "Field cannot be null; omit it to leave the value unchanged"
            )
        return value

    def is_present(self, field_name: str) -> bool:
        return field_name in self.model_fields_set

    @property
    def has_changes(self) -> bool:
        return bool(self.model_fields_set)


# --------------------------------------------------------------------------- #
#                                query strings                                #
# --------------------------------------------------------------------------- #
def _non_empty_calendar_id(value: str) -> str:
    if not value:
        raise PydanticCustomError("calendar_id_empty", "Calendar ID cannot be empty")
    return value


CalendarId = Annotated[str, AfterValidator(_non_empty_calendar_id)]


class PostEventQuery(BaseModel):
    to: CalendarId = Field(..., description="Calendar to create the event in")


class PutEventQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: CalendarId = Field(..., alias="from", description="Calendar the event is in now")
    to: Optional[CalendarId] = Field(None, description="Calendar to move the event to")


class EventLookupQuery(BaseModel):
    """Query of the delete and lookup endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    from_: CalendarId = Field(..., alias="from", description="Calendar the event is in")


# --------------------------------------------------------------------------- #
#                              validation result                              #
# --------------------------------------------------------------------------- #
@dataclass(frozen=True)
class Valid(Generic[ModelT]):
    value: ModelT
    ok: Literal[True] = True


@dataclass(frozen=True)
class Invalid:
    errors: List[str] = field(default_factory=list)
    ok: Literal[False] = False


ValidationResult = Union[Valid[ModelT], Invalid]


def format_validation_errors(exc: ValidationError) -> List[str]:
    """One ``<field path>: <message>`` line per pydantic error."""
    messages: List[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return messages


def validate_model(model: Type[ModelT], raw: Any) -> ValidationResult[ModelT]:
    """Validate ``raw`` against ``model`` without raising."""
    try:
        return Valid(model.model_validate(raw))
    except ValidationError as exc:
        return Invalid(format_validation_errors(exc))


__all__: list[str] = [
    "DEFAULT_TIME_ZONE",
    "DateInfo",
    "EventData",
    "PartialEventData",
    "PostEventQuery",
    "PutEventQuery",
    "EventLookupQuery",
    "Valid",
    "Invalid",
    "ValidationResult",
    "format_validation_errors",
    "validate_model",
]
