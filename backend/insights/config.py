"""
Centralized Configuration for the Insights chart service

Uses pydantic-settings for validation and environment variable loading.
"""
from typing import Literal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Store ===
    db_path: str = Field("./data/insights.db", alias="INSIGHTS_DB_PATH")

    # === Charts ===
    default_range_days: int = Field(365, alias="DEFAULT_RANGE_DAYS")

    # === Server ===
    port: int = Field(8000, alias="PORT")
    frontend_url: str = Field("http://localhost:3000", alias="FRONTEND_URL")

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("INFO", alias="LOG_LEVEL")
    log_format: Literal["text", "json"] = Field("text", alias="LOG_FORMAT")

    @field_validator("log_level", "log_format", mode="before")
    @classmethod
    def normalize_case(cls, v, info):
        """Accept LOG_LEVEL=debug / LOG_FORMAT=JSON"""
        if not isinstance(v, str):
            return v
        return v.upper() if info.field_name == "log_level" else v.lower()

    @field_validator("default_range_days")
    @classmethod
    def positive_range(cls, v):
        if v <= 0:
            raise ValueError("DEFAULT_RANGE_DAYS must be positive")
        return v

    @property
    def is_memory_db(self) -> bool:
        """Check if the store lives in memory (tests, demos)"""
        return self.db_path == ":memory:"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
