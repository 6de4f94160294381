"""Configuration management for the userdesk web app."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from userdesk_common.config.users_api_config import DEFAULT_USERS_API_BASE_URL, UsersApiConfig


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the API project directory (apps/api/.env).

    Returns:
        Path to the .env file
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # This file is in apps/api/src/userdesk_api/config.py
    # So we go up 3 levels to get to apps/api/
    current_file = Path(__file__)
    api_dir = current_file.parent.parent.parent
    return str(api_dir / ".env")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "userdesk"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "info"

    # API
    api_host: str = "localhost"
    api_port: int = 8000

    # UI origin allowed to call the JSON API
    ui_url: str | None = None

    # Remote users API
    users_api_base_url: str = DEFAULT_USERS_API_BASE_URL
    users_api_timeout_seconds: float = 10.0
    load_users_on_startup: bool = True

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def users_api_config(self) -> UsersApiConfig:
        """Remote client configuration derived from these settings."""
        return UsersApiConfig(
            users_api_base_url=self.users_api_base_url,
            users_api_timeout_seconds=self.users_api_timeout_seconds,
        )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
