from functools import lru_cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NonNegativeDays = Annotated[int, Field(ge=0)]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Blueprint Timeline"
    debug: bool = False

    # API
    frontend_url: str = "http://localhost:3000"
    cors_allowed_origins: list[str] = [
        "http://localhost:3000",
    ]

    # Fallback-date heuristics (product-chosen, validate against real data).
    # Partial overrides are merged over the built-in lead-day table.
    timeline_priority_lead_days: dict[str, NonNegativeDays] = {
        "critical": 2,
        "high": 3,
        "medium": 4,
        "low": 5,
    }
    timeline_default_lead_days: NonNegativeDays = 5  # env: TIMELINE_DEFAULT_LEAD_DAYS, no or unknown priority
    timeline_default_duration_days: NonNegativeDays = 7  # env: TIMELINE_DEFAULT_DURATION_DAYS, start-only items

    # Window padding around the earliest/latest known date
    timeline_padding_before_days: NonNegativeDays = 7
    timeline_padding_after_days: NonNegativeDays = 14
    timeline_empty_span_days: NonNegativeDays = 30  # window length when nothing has a date


@lru_cache
def get_settings() -> Settings:
    return Settings()
