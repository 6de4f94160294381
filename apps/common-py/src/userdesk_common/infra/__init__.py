"""Infrastructure layer for external communication."""

from userdesk_common.infra.http.users_client import RestUsersClient, UsersApiError, UsersClient

__all__ = [
    "RestUsersClient",
    "UsersApiError",
    "UsersClient",
]
