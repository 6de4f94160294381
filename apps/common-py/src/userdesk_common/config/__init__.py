"""Configuration package."""

from userdesk_common.config.users_api_config import (
    DEFAULT_USERS_API_BASE_URL,
    UsersApiConfig,
    get_users_api_config,
)

__all__ = ["DEFAULT_USERS_API_BASE_URL", "UsersApiConfig", "get_users_api_config"]
