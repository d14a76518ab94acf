from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RATES_FILE = Path(__file__).resolve().parent.parent / "data" / "exchange_rates.json"


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    ANCHOR_CURRENCY, RATES_FILE, SNAPSHOT_DATE, LOG_JSON).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Basic app metadata
    app_name: str = "Currency Converter API"
    debug: bool = False
    version: str = "1.0.0"

    # Rate table
    anchor_currency: str = "United States-Dollar"
    rates_file: Path = DEFAULT_RATES_FILE
    snapshot_date: str = "2025-12-31"  # record date kept by the CSV build step

    # Logging
    log_json: bool = True

    @field_validator("anchor_currency")
    @classmethod
    def anchor_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("anchor_currency must not be empty")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
