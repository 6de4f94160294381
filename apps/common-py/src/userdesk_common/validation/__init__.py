"""Validation package."""

from userdesk_common.validation.user_validator import (
    derive_username,
    is_absolute_url,
    is_valid,
    validate_user,
)

__all__ = ["derive_username", "is_absolute_url", "is_valid", "validate_user"]
