"""Field-level validation of user drafts."""

import re
from urllib.parse import urlsplit

from userdesk_common.models.user import UserDraft

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
# Optional "+" and 1-3 digit country code with an optional separator, then 10 digits.
PHONE_PATTERN = re.compile(r"(\+?\d{1,3}[- ]?)?\d{10}", re.ASCII)
USERNAME_PREFIX = "USER-"
MIN_LENGTH = 3


def derive_username(name: str) -> str:
    """Username assigned at creation time: ``USER-`` plus the squashed, lowercased name."""
    return USERNAME_PREFIX + re.sub(r"\s+", "", name.strip()).lower()


def is_absolute_url(value: str) -> bool:
    """Check that a value parses as a URL with both a scheme and a host."""
    if any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
        # hostname and port raise on malformed IPv6 literals and bad ports.
        host = parts.hostname
        parts.port
    except ValueError:
        return False
    return bool(parts.scheme) and bool(host)


def validate_user(draft: UserDraft) -> dict[str, str]:
    """Validate a draft user record.

    Every rule is evaluated independently, so all failing fields are reported
    at once.

    Args:
        draft: User-entered values

    Returns:
        Mapping of field key to error message; empty when the draft is valid
    """
    errors: dict[str, str] = {}

    name = draft.name.strip()
    if not name:
        errors["name"] = "Name is required."
    elif len(name) < MIN_LENGTH:
        errors["name"] = "Name must be at least 3 characters."

    email = draft.email.strip()
    if not email:
        errors["email"] = "Email is required."
    elif not EMAIL_PATTERN.fullmatch(email):
        errors["email"] = "Invalid email format."

    phone = draft.phone.strip()
    if not phone:
        errors["phone"] = "Phone number is required."
    elif not PHONE_PATTERN.fullmatch(phone):
        errors["phone"] = "Invalid phone number."

    username = draft.username.strip()
    if not username:
        errors["username"] = "Username is required."
    elif len(username) < MIN_LENGTH:
        errors["username"] = "Username must be at least 3 characters."

    if not draft.address.street.strip():
        errors["address.street"] = "Street is required."
    if not draft.address.city.strip():
        errors["address.city"] = "City is required."

    company_name = draft.company.name.strip()
    if company_name and len(company_name) < MIN_LENGTH:
        errors["company.name"] = "Company name must be at least 3 characters."

    website = draft.website.strip()
    if website and not is_absolute_url(website):
        errors["website"] = "Invalid URL."

    return errors


def is_valid(draft: UserDraft) -> bool:
    return not validate_user(draft)
