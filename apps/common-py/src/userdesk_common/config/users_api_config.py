"""Configuration for the remote users API."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USERS_API_BASE_URL = "https://jsonplaceholder.typicode.com"


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the common-py project directory (apps/common-py/.env).

    Returns:
        Path to the .env file
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # apps/common-py/src/userdesk_common/config/users_api_config.py -> apps/common-py/
    current_file = Path(__file__)
    common_py_dir = current_file.parent.parent.parent.parent
    return str(common_py_dir / ".env")


class UsersApiConfig(BaseSettings):
    """Remote users API settings from environment variables."""

    users_api_base_url: str = DEFAULT_USERS_API_BASE_URL
    users_api_timeout_seconds: float = 10.0

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
    )


def get_users_api_config() -> UsersApiConfig:
    """Get remote users API configuration.

    Returns:
        UsersApiConfig instance
    """
    return UsersApiConfig()
