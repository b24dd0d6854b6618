# -*- coding: utf-8 -*-
"""
Application configuration

Public API:
- `AppConfig`
- `app_config`
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Process-wide settings, read from the environment and `.env`."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    gator_database_url: str = Field(
        default="sqlite:///gator.db",
        title="Database URL",
        description="SQLAlchemy URL of the relational store",
    )

    gator_session_path: Path = Field(
        default=Path.home() / ".gatorconfig.json",
        title="Session file",
        description="JSON file remembering the current user",
    )

    gator_log_level: str = Field(
        default="INFO",
        title="Log level",
        description="Minimum level emitted by the loguru stderr sink",
    )

    gator_sql_echo: bool = Field(
        default=False,
        title="Echo SQL",
        description="Log every SQL statement issued by the engine",
    )


app_config = AppConfig()
