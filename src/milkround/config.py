"""Application configuration and settings management."""

from typing import Annotated, Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="MILK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Milk Round Ledger API"
    api_prefix: str = "/api"
    due_day_of_month: int = Field(
        default=5,
        ge=1,
        le=28,
        description="Day of the month after the billed month on which payment falls due.",
    )
    gemini_api_key: Optional[str] = Field(
        default=None,
        description="API key for the Gemini text service. Leave unset to always use fallbacks.",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL for the Gemini REST API.",
    )
    gemini_model: str = Field(default="gemini-2.5-flash")
    gemini_timeout_seconds: float = Field(default=30.0, gt=0.0)
    gemini_max_retries: int = Field(default=2, ge=0)
    gemini_backoff_seconds: float = Field(default=1.0, ge=0.0)
    insight_placeholder: str = Field(
        default="Keep tracking your daily sales to see insights here.",
        description="Text shown when business insights cannot be generated.",
    )
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
