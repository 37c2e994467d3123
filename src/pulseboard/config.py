"""Pulseboard configuration with sensible defaults for local development."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pulseboard.models import ColorScheme, PageOverflowPolicy


class Settings(BaseSettings):
    """
    Pulseboard configuration.

    All settings can be overridden via environment variables with PULSEBOARD_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="PULSEBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False
    log_format: Literal["text", "json"] = "text"
    host: str = "127.0.0.1"
    port: int = 8000

    # Dashboard view defaults
    page_size: int = 10
    default_color: str = "blue"
    flagged_color: str = "green"
    page_overflow: PageOverflowPolicy = PageOverflowPolicy.EMPTY
    sort_series_points: bool = False
    export_filename: str = "request-data.csv"
    seed_sample_data: bool = True

    # Synthetic producer
    producer_enabled: bool = True
    producer_interval_seconds: float = 5.0
    producer_endpoint: str = "/home"
    producer_max_count: int = 3000
    producer_flag_rate: float = 0.2
    producer_seed: int | None = None

    @field_validator("page_overflow", mode="before")
    @classmethod
    def _normalize_overflow(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("page_size")
    @classmethod
    def _positive_page_size(cls, value: int) -> int:
        if value < 1:
            raise ValueError("page_size must be >= 1")
        return value

    @property
    def color_scheme(self) -> ColorScheme:
        return ColorScheme(default=self.default_color, flagged=self.flagged_color)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
