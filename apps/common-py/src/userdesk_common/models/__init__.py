"""Common models package."""

from userdesk_common.models.user import (
    Address,
    AddressDraft,
    Company,
    CompanyDraft,
    UserDraft,
    UserRecord,
)

__all__ = [
    "Address",
    "AddressDraft",
    "Company",
    "CompanyDraft",
    "UserDraft",
    "UserRecord",
]
