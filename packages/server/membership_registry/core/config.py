"""
Application configuration loaded from environment variables.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Membership registry configuration."""

    model_config = SettingsConfigDict(env_prefix="REGISTRY_", env_file=".env", extra="ignore")

    # Logging
    log_level: str = "info"
    log_format: Literal["json", "text"] = "json"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Events kept in memory for replay
    event_buffer_size: int = 500

    # YAML file applied through the membership manager at startup
    seed_path: Optional[str] = None


@lru_cache
def get_settings() -> Settings:
    return Settings()
