from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    currency_symbol: str = Field(default="₹", alias="CURRENCY_SYMBOL")

    trend_window: int = Field(default=3, alias="TREND_WINDOW")
    top_expenses_limit: int = Field(default=5, alias="TOP_EXPENSES_LIMIT")

    # presentation limits for the narrative blocks
    daily_breakdown_limit: int = Field(default=10, alias="DAILY_BREAKDOWN_LIMIT")
    monthly_breakdown_limit: int = Field(default=12, alias="MONTHLY_BREAKDOWN_LIMIT")
    comparison_category_limit: int = Field(default=8, alias="COMPARISON_CATEGORY_LIMIT")

    min_year: int = Field(default=2000, alias="MIN_YEAR")
    max_year: int = Field(default=2100, alias="MAX_YEAR")

    def validate_ranges(self) -> None:
        if self.trend_window < 1:
            raise ConfigError("TREND_WINDOW must be >= 1")

        for name in (
            "top_expenses_limit",
            "daily_breakdown_limit",
            "monthly_breakdown_limit",
            "comparison_category_limit",
        ):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name.upper()} must be >= 1")

        if self.min_year > self.max_year:
            raise ConfigError("MIN_YEAR must not be greater than MAX_YEAR")


@lru_cache
def load_settings() -> Settings:
    settings = Settings()
    settings.validate_ranges()
    return settings
