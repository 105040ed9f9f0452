from __future__ import annotations

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Dashboard configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True, env_prefix=""
    )

    supabase_url: AnyHttpUrl = Field(..., alias="SUPABASE_URL")
    supabase_key: str = Field(..., alias="SUPABASE_KEY")
    timezone: str = Field("UTC", alias="DASHBOARD_TIMEZONE")
    refresh_interval: int = Field(60, alias="REFRESH_INTERVAL_SECONDS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("supabase_key")
    def validate_key(cls, value: str) -> str:
        if not value or " " in value:
            raise ValueError("SUPABASE_KEY must be a non-empty string without spaces")
        return value

    @field_validator("timezone")
    def validate_timezone(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("DASHBOARD_TIMEZONE must not be empty")
        return cleaned

    @field_validator("refresh_interval")
    def validate_refresh_interval(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("REFRESH_INTERVAL_SECONDS must be positive")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings"]
