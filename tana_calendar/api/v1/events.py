# tana_calendar/api/v1/events.py

from __future__ import annotations

import logging
from typing import Any, Awaitable, List, Type, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from tana_calendar.config import settings
from tana_calendar.core.auth.google import build_credentials, get_validated_google_auth_env
from tana_calendar.core.calendar import (
    BaseCalendarGateway,
    EventService,
    get_calendar_gateway,
    get_event_service,
)
from tana_calendar.core.calendar.schemas import (
    EventData,
    EventLookupQuery,
    Invalid,
    PartialEventData,
    PostEventQuery,
    PutEventQuery,
    ValidationResult,
    validate_model,
)
from tana_calendar.core.exceptions import CalendarSyncError

router = APIRouter(prefix="/events", tags=["events"])
log = logging.getLogger(__name__)

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)


# --- Зависимости: новый шлюз и сервис на каждый запрос ---
def get_request_gateway() -> BaseCalendarGateway:
    """
    Validate credentials and build the gateway for this request.

    Raises:
        AuthenticationError: Service account env is missing or unusable (→ 401).
    """
    if settings.CALENDAR_PROVIDER == "noop":
        return get_calendar_gateway("noop")
    env = get_validated_google_auth_env(settings)
    return get_calendar_gateway("google", credentials=build_credentials(env))


def get_request_service(
    gateway: BaseCalendarGateway = Depends(get_request_gateway),
) -> EventService:
    return get_event_service(gateway)


# --- Валидация запроса ---
def _validate_query(request: Request, model: Type[ModelT]) -> ValidationResult[ModelT]:
    return validate_model(model, dict(request.query_params))


async def _validate_body(request: Request, model: Type[ModelT]) -> ValidationResult[ModelT]:
    try:
        raw: Any = await request.json()
    except ValueError:
        return Invalid(["body: Malformed JSON body"])
    return validate_model(model, raw)


def _collect_errors(*results: ValidationResult[Any]) -> List[str]:
    return [error for result in results if not result.ok for error in result.errors]


def _bad_request(errors: List[str]) -> PlainTextResponse:
    log.info("[API /events] Rejected request: %s", "; ".join(errors))
    return PlainTextResponse("\n".join(errors), status_code=status.HTTP_400_BAD_REQUEST)


async def _run(action: str, operation: Awaitable[T]) -> T:
    try:
        return await operation
    except (HTTPException, CalendarSyncError):
        raise
    except Exception as e:
        log.exception("[API /events] Unhandled error during %s: %s", action, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An internal error occurred: {type(e).__name__}",
        ) from e


# --- Эндпоинты ---
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=PlainTextResponse,
    summary="Create an event and return Tana Paste",
)
async def create_event(
    request: Request,
    service: EventService = Depends(get_request_service),
) -> PlainTextResponse:
    query = _validate_query(request, PostEventQuery)
    body = await _validate_body(request, EventData)
    errors = _collect_errors(query, body)
    if errors:
        return _bad_request(errors)

    paste = await _run("create", service.create_event(query.value.to, body.value))
    return PlainTextResponse(paste, status_code=status.HTTP_201_CREATED)


@router.put(
    "/{event_id}",
    response_class=PlainTextResponse,
    summary="Update (and optionally move) an event",
    description=(
        "Only fields present in the body are changed. With `to` set to another "
        "calendar the event is moved first, then updated there."
    ),
)
async def update_event(
    event_id: str,
    request: Request,
    service: EventService = Depends(get_request_service),
) -> PlainTextResponse:
    query = _validate_query(request, PutEventQuery)
    body = await _validate_body(request, PartialEventData)
    errors = _collect_errors(query, body)
    if errors:
        return _bad_request(errors)

    paste = await _run(
        "update",
        service.update_event(query.value.from_, event_id, body.value, query.value.to),
    )
    return PlainTextResponse(paste)


@router.get(
    "/{event_id}",
    response_class=PlainTextResponse,
    summary="Return Tana Paste for an existing event",
)
async def get_event(
    event_id: str,
    request: Request,
    service: EventService = Depends(get_request_service),
) -> PlainTextResponse:
    query = _validate_query(request, EventLookupQuery)
    if not query.ok:
        return _bad_request(query.errors)

    paste = await _run("lookup", service.get_event(query.value.from_, event_id))
    return PlainTextResponse(paste)


@router.delete("/{event_id}", response_class=PlainTextResponse, summary="Delete an event")
@router.post(
    "/{event_id}/delete",
    response_class=PlainTextResponse,
    summary="Delete an event (for clients that can only POST)",
)
async def delete_event(
    event_id: str,
    request: Request,
    service: EventService = Depends(get_request_service),
) -> PlainTextResponse:
    query = _validate_query(request, EventLookupQuery)
    if not query.ok:
        return _bad_request(query.errors)

    deleted = await _run("delete", service.delete_event(query.value.from_, event_id))
    if deleted:
        return PlainTextResponse(f"Event deleted successfully: {event_id}")
    return PlainTextResponse(f"Failed to delete event: {event_id}")
