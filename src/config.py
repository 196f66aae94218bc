from __future__ import annotations

from functools import cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.errors import UnknownJurisdictionError
from domain.jurisdictions import Jurisdiction

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseSettings):
    default_jurisdiction: Jurisdiction = Jurisdiction.US
    currency: str = "USD"
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("default_jurisdiction", mode="before")
    @classmethod
    def _parse_jurisdiction(cls, value: object) -> Jurisdiction:
        try:
            return Jurisdiction.parse(value)  # type: ignore[arg-type]
        except UnknownJurisdictionError as err:
            raise ValueError(str(err)) from err

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> str:
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


@cache
def config() -> AppSettings:
    return AppSettings()
