"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from weight_cut_tracker.services.alerts import DEFAULT_ALERT_LIMIT
from weight_cut_tracker.services.plan_status import (
    CRITICAL_DEVIATION_KG,
    ON_TRACK_TOLERANCE_KG,
)

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    readjustment_base_url: str | None = None
    default_timezone: str = "UTC"
    alert_limit: int = Field(default=DEFAULT_ALERT_LIMIT, ge=0)
    plan_on_track_tolerance_kg: float = Field(default=ON_TRACK_TOLERANCE_KG, gt=0)
    plan_critical_deviation_kg: float = Field(default=CRITICAL_DEVIATION_KG, gt=0)
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
