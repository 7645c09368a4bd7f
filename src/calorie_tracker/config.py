"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    jwt_secret: str
    jwt_issuer: str = "calorie-tracker-api"
    jwt_audience: str = "calorie-tracker-app"
    jwt_expires_minutes: int = 1440
    password_hash_rounds: int = 12
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = 30.0
    suggestions_goal_met_threshold: int = 50
    log_level: str = "INFO"
    cors_origins: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    return [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]


def is_openai_configured(api_key: str | None) -> bool:
    """Return True when an OpenAI key looks usable."""
    if api_key is None:
        return False
    value = api_key.strip()
    return bool(value) and value != "YOUR_OPENAI_API_KEY_HERE"
