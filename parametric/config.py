"""Engine configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from `PARAMETRIC_*` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PARAMETRIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="text")

    # Storage
    storage_backend: Literal["memory", "file"] = Field(default="memory")
    storage_path: str = Field(default=".parametric")
    storage_key_prefix: str = Field(default="parametric_")
    preset_key_prefix: str = Field(default="preset_", min_length=1)

    # Plugins
    enabled_plugins: list[str] = Field(default=["core"])


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
