from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    timezone: str = Field(
        default="UTC",
        description="IANA timezone in which peak-hour windows are evaluated",
    )
    cross_zone_multiplier: float = Field(default=1.10, ge=1.0, le=5.0)
    apply_special_conditions: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["text", "json"] = "text"

    model_config = SettingsConfigDict(env_prefix="FARE_")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v


class RoutingSettings(BaseSettings):
    osrm_base_url: str = "http://localhost:5000"
    timeout_seconds: float = Field(default=5.0, gt=0.0, le=60.0)
    average_speed_kmh: float = Field(
        default=30.0,
        gt=0.0,
        le=200.0,
        description="Assumed city speed for straight-line duration estimates",
    )

    model_config = SettingsConfigDict(env_prefix="ROUTING_")

    @field_validator("osrm_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("OSRM base URL must start with http:// or https://")
        return v.rstrip("/")


class Settings(BaseSettings):
    engine: EngineSettings = Field(default_factory=EngineSettings)
    routing: RoutingSettings = Field(default_factory=RoutingSettings)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables."""
    return Settings()
