# tana_calendar/core/auth/google.py
"""
Google service-account credentials, validated per request.

The env is checked on every request (not at import) so a misconfigured
deployment answers ``401`` instead of failing to boot.
"""

from __future__ import annotations

import logging

from google.oauth2 import service_account
from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator

from tana_calendar.config import Settings
from tana_calendar.core.calendar.schemas import format_validation_errors
from tana_calendar.core.exceptions import AuthenticationError

log = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/calendar",
    "https://www.googleapis.com/auth/calendar.events",
]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class GoogleAuthEnv(BaseModel):
    """Схема переменных окружения сервисного аккаунта."""

    client_email: EmailStr = Field(..., description="GOOGLE_CLIENT_EMAIL")
    private_key: str = Field(..., description="GOOGLE_PRIVATE_KEY")

    @field_validator("private_key")
    @classmethod
    def unescape_key(cls, value: str) -> str:
        # Keys pasted into env files often carry literal "\n" sequences
        value = value.replace("\\n", "\n")
        if not value.strip():
            raise ValueError("Google private key is required")
        return value


def get_validated_google_auth_env(settings: Settings) -> GoogleAuthEnv:
    """
    Validate the service account env.

    Raises:
        AuthenticationError: A variable is missing or malformed.
    """
    try:
        return GoogleAuthEnv(
            client_email=settings.GOOGLE_CLIENT_EMAIL,
            private_key=settings.GOOGLE_PRIVATE_KEY,
        )
    except ValidationError as exc:
        errors = format_validation_errors(exc)
        log.warning("Google auth env is invalid: %s", "; ".join(errors))
        raise AuthenticationError("; ".join(errors)) from exc


def build_credentials(env: GoogleAuthEnv) -> service_account.Credentials:
    """
    Build scoped service-account credentials.

    The access token itself is fetched lazily by the API client on the first
    call; refresh failures surface there as ``RefreshError``.

    Raises:
        AuthenticationError: The private key cannot be parsed.
    """
    info = {
        "type": "service_account",
        "client_email": env.client_email,
        "private_key": env.private_key,
        "token_uri": TOKEN_URI,
    }
    try:
        return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
    except ValueError as exc:
        log.warning("Could not load Google service account key for %s: %s", env.client_email, exc)
        raise AuthenticationError("Google private key could not be parsed") from exc


__all__: list[str] = [
    "SCOPES",
    "GoogleAuthEnv",
    "get_validated_google_auth_env",
    "build_credentials",
]
