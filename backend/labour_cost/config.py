"""Application configuration from environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_BACKEND_DIR = Path(__file__).resolve().parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"
    environment: str = "development"
    cors_origins: list[str] = ["*"]

    # Used when a request does not say
    default_award_id: str = "children-services-2020"
    default_weekly_budget: float = 8000.0
    default_forecast_weeks: int = 4


settings = Settings()
