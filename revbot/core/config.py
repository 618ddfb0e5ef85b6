from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):  # type: ignore[misc]
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "revbot"
    app_version: str = "0.2.0"
    debug: bool = False
    environment: Literal["development", "staging", "production", "test"] = "development"

    # Analysis Settings
    max_diff_size_bytes: int = 1_000_000
    max_summary_items: int = Field(default=10, ge=1)

    # Result Store
    result_ttl_seconds: int = Field(default=3600, gt=0)
    result_store_max_entries: int = Field(default=1000, ge=1)


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
