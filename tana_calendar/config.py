# tana_calendar/config.py

from __future__ import annotations

import logging
from typing import List, Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Единый конфиг сервиса. Читает переменные окружения.
    Pydantic v2 + pydantic-settings.

    Google credentials are optional at load time: they are validated per
    request (see ``tana_calendar.core.auth.google``), so the app can boot
    and answer health checks without them.
    """
    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    # --- Основные настройки ---
    ENVIRONMENT: str = Field("dev", description="Application environment (dev, development, test, prod)")
    LOG_LEVEL: str = Field("INFO", description="Root logging level")

    # --- Calendar provider ---
    CALENDAR_PROVIDER: Literal["google", "noop"] = Field("google", description="Calendar gateway to use")
    GOOGLE_CLIENT_EMAIL: Optional[str] = Field(None, description="Google service account email")
    GOOGLE_PRIVATE_KEY: Optional[str] = Field(None, description="Google service account private key (PEM)")

    # --- Event defaults ---
    DEFAULT_TIME_ZONE: str = Field("Etc/UTC", description="Time zone used when a request does not name one")
    DEFAULT_EVENT_DURATION_MINUTES: int = Field(60, ge=1, description="Length of a timed event without an end")

    # --- CORS (development only) ---
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["https://app.tana.inc"])

    @field_validator("CALENDAR_PROVIDER", mode="before")
    @classmethod
    def normalize_provider(cls, value):
        # "NOOP" из env должен пройти проверку Literal
        return value.strip().lower() if isinstance(value, str) else value

    @model_validator(mode="after")
    def normalize_log_level(self) -> "Settings":
        self.LOG_LEVEL = self.LOG_LEVEL.upper()
        return self

    @property
    def cors_enabled(self) -> bool:
        return self.ENVIRONMENT == "development"


# --- Создание единственного экземпляра настроек ---
try:
    settings = Settings()
    log.info("Settings loaded successfully for ENVIRONMENT=%s", settings.ENVIRONMENT)
    log.debug(
        "Loaded settings: calendar provider=%s, default tz=%s",
        settings.CALENDAR_PROVIDER,
        settings.DEFAULT_TIME_ZONE,
    )
except Exception as e:
    log.exception("Failed to instantiate Settings.")
    raise e
