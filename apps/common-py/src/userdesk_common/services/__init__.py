"""Common services package."""

from userdesk_common.services.user_store import UserStore, synthesize_user_id

__all__ = [
    "UserStore",
    "synthesize_user_id",
]
