"""User record and draft models."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Address(BaseModel):
    """Postal address of a user. Remote payloads carry extra keys (suite, geo...)."""

    model_config = ConfigDict(extra="allow")

    street: str = ""
    city: str = ""


class Company(BaseModel):
    """Company a user works for."""

    model_config = ConfigDict(extra="allow")

    name: str = ""


class UserRecord(BaseModel):
    """User entity as held in the in-memory list."""

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Leanne Graham",
                "username": "Bret",
                "email": "Sincere@april.biz",
                "phone": "1-770-736-8031 x56442",
                "website": "hildegard.org",
                "address": {"street": "Kulas Light", "city": "Gwenborough"},
                "company": {"name": "Romaguera-Crona"},
            }
        },
    )

    id: int = Field(..., description="Unique identifier of the user within the list")
    name: str = Field(..., description="Full name of the user")
    username: str = Field("", description="Login name, fixed once the user exists")
    email: str = ""
    phone: str = ""
    website: str = ""
    address: Address = Field(default_factory=Address)
    company: Company = Field(default_factory=Company)


class AddressDraft(BaseModel):
    street: str = ""
    city: str = ""


class CompanyDraft(BaseModel):
    name: str = ""


class UserDraft(BaseModel):
    """User-entered, unvalidated field values of the create/edit form."""

    name: str = ""
    email: str = ""
    phone: str = ""
    username: str = ""
    address: AddressDraft = Field(default_factory=AddressDraft)
    company: CompanyDraft = Field(default_factory=CompanyDraft)
    website: str = ""

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserDraft":
        """Populate a draft from an existing record for editing."""
        return cls(
            name=record.name or "",
            email=record.email or "",
            phone=record.phone or "",
            username=record.username or "",
            address=AddressDraft(street=record.address.street or "", city=record.address.city or ""),
            company=CompanyDraft(name=record.company.name or ""),
            website=record.website or "",
        )

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "UserDraft":
        """Build a draft from flat form fields such as ``address.street``."""

        def value(key: str) -> str:
            raw = form.get(key)
            return raw if isinstance(raw, str) else ""

        return cls(
            name=value("name"),
            email=value("email"),
            phone=value("phone"),
            username=value("username"),
            address=AddressDraft(street=value("address.street"), city=value("address.city")),
            company=CompanyDraft(name=value("company.name")),
            website=value("website"),
        )

    def field_value(self, key: str) -> str:
        """Return the raw value of a flat form field key."""
        if key == "address.street":
            return self.address.street
        if key == "address.city":
            return self.address.city
        if key == "company.name":
            return self.company.name
        return getattr(self, key)

    def to_payload(self) -> dict[str, Any]:
        """Trimmed JSON body sent to the remote users API."""
        return {
            "name": self.name.strip(),
            "email": self.email.strip(),
            "phone": self.phone.strip(),
            "username": self.username.strip(),
            "address": {
                "street": self.address.street.strip(),
                "city": self.address.city.strip(),
            },
            "company": {
                "name": self.company.name.strip(),
            },
            "website": self.website.strip(),
        }
