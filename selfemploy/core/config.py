from __future__ import annotations

import os
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "SelfEmploy Periods"
    ENV: str = "dev"
    DATABASE_URL: str | None = None
    REDIS_URL: str = "redis://localhost:6379/0"
    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    CORS_ALLOW_METHODS: list[str] = ["*"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "plain"

    # Ledger business used when an API request omits business_id
    DEFAULT_BUSINESS_ID: str = "default"

    # Deadline notifications
    NOTIFICATIONS_ENABLED: bool = True
    NOTIFICATION_TRIGGER_DAYS: list[int] = [30, 7, 1]
    NOTIFICATION_CHECK_INTERVAL_MINUTES: int = 60

    @field_validator("NOTIFICATION_TRIGGER_DAYS")
    @classmethod
    def validate_trigger_days(cls, v: list[int]) -> list[int]:
        if any(day < 1 for day in v):
            raise ValueError("NOTIFICATION_TRIGGER_DAYS must be positive")
        return sorted(set(v), reverse=True)

    @model_validator(mode="after")
    def _validate_required_fields(self) -> BaseAppSettings:
        # Convert Heroku's postgres:// URL to postgresql://
        if self.DATABASE_URL and self.DATABASE_URL.startswith("postgres://"):
            self.DATABASE_URL = self.DATABASE_URL.replace("postgres://", "postgresql://", 1)
        if self.ENV.lower() == "prod" and not self.DATABASE_URL:
            raise ValueError("Missing required production settings: DATABASE_URL")
        if self.NOTIFICATION_CHECK_INTERVAL_MINUTES < 1:
            raise ValueError("NOTIFICATION_CHECK_INTERVAL_MINUTES must be at least 1")
        return self


class DevSettings(BaseAppSettings):
    ENV: str = "dev"
    DATABASE_URL: str = "sqlite:///./storage/dev.db"


class TestSettings(BaseAppSettings):
    ENV: str = "test"
    DATABASE_URL: str = "sqlite:///:memory:"
    LOG_LEVEL: str = "WARNING"


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    CORS_ALLOW_ORIGINS: list[str] = []
    LOG_FORMAT: str = "json"


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()


settings = get_settings()
