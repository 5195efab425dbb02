from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from tana_calendar.api.v1.events import router as events_router
from tana_calendar.config import settings
from tana_calendar.core.exceptions import AuthenticationError, ProviderError

# Configure basic logging
logging.basicConfig(level=settings.LOG_LEVEL)
log = logging.getLogger(__name__)

description = """
Creates, updates, moves and deletes Google Calendar events on behalf of Tana
and answers with Tana Paste (`Event URL`, `Event ID`, `Synced Calendar ID`).
"""
tags_metadata = [
    {"name": "events", "description": "Event sync operations. Responses are plain text."},
    {"name": "Health", "description": "Liveness checks."},
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    log.info("\U0001F680 FastAPI application startup complete.")
    yield
    log.info("\U0001F44B FastAPI application shutdown.")


app = FastAPI(
    title="Tana Calendar Sync API",
    description=description,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

if settings.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(events_router)

log.info(
    "\U0001F331 FastAPI application configured. Environment: %s, calendar provider: %s",
    settings.ENVIRONMENT, settings.CALENDAR_PROVIDER,
)


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError) -> PlainTextResponse:
    log.warning("Authentication failed for %s %s: %s", request.method, request.url.path, exc)
    return PlainTextResponse("Authentication failed", status_code=status.HTTP_401_UNAUTHORIZED)


@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError) -> PlainTextResponse:
    log.error(
        "Calendar provider error for %s %s (HTTP %s): %s",
        request.method, request.url.path, exc.status_code, exc,
    )
    return PlainTextResponse(f"Calendar provider error: {exc}", status_code=status.HTTP_502_BAD_GATEWAY)


@app.get("/", tags=["Health"], response_class=PlainTextResponse)
async def root() -> str:
    return "Hello"


@app.get("/healthz", tags=["Health"], status_code=status.HTTP_200_OK)
async def health_check():
    """Basic health check endpoint."""
    return {"status": "ok", "environment": settings.ENVIRONMENT}
