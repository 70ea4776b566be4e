# backend/app/config.py
"""Configuration settings for the application."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_name: str = "Finwell Tracker API"
    debug: bool = False
    database_url: str = "sqlite:///backend/data/app.db"

    # "*" keeps the API open to any front-end origin
    cors_allow_origins: List[str] = ["*"]
    log_level: str = "INFO"


settings = Settings()
