# backend/tutordesk/core/config.py
from decimal import Decimal
import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import pytz

logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    load_dotenv(env_path)


class Settings(BaseSettings):
    """Application settings, read from the environment (and backend/.env)."""

    environment: str = Field(default="development")
    is_testing: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    database_url: str = Field(
        default="sqlite:///./tutordesk.db",
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )
    database_echo: bool = Field(default=False)

    # Scheduling
    default_hourly_rate: Decimal = Field(
        default=Decimal("60.00"),
        description="Value charged per hour for lessons booked by students",
    )
    tutor_timezone: str = Field(
        default="America/Sao_Paulo",
        description="Timezone used to decide what 'today' means for the tutor's calendar",
    )
    min_lesson_minutes: int = Field(default=15, ge=1)

    # Auth boundary (tokens are issued by the identity provider)
    secret_key: SecretStr = Field(default=SecretStr("dev-only-change-me"))
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=720)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("tutor_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    @field_validator("default_hourly_rate")
    @classmethod
    def validate_hourly_rate(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("default_hourly_rate cannot be negative")
        return v.quantize(Decimal("0.01"))

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
