from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LEAVE_PORTAL_", env_file=".env", extra="ignore")

    app_title: str = "Leave Management API"
    app_version: str = "0.1.0"

    # Enable CORS for the local frontend
    cors_origins: List[str] = ["*"]

    log_level: str = "INFO"

    # Directory, balances and sample requests loaded on startup
    seed_demo_data: bool = True

    host: str = "127.0.0.1"
    port: int = 3001


@lru_cache
def get_settings() -> Settings:
    return Settings()
