# =============================================================================
# core/models/contact.py - Contact Schemas
# =============================================================================
# These models define the API contract for contact operations:
# - ContactInput: Request body for create/update (all five user fields)
# - Contact: A stored contact as returned to clients
# - DeleteAcknowledgement / ErrorResponse: the other response bodies
#
# JSON uses camelCase (firstName, createdAt); Python uses snake_case.
# Field rules (required, email/phone format) live in core/validation.py,
# not in these schemas, so the API can return its own error messages.
# =============================================================================

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ContactInput(CamelModel):
    """
    Request body for POST /contacts and PUT /contacts/{id}.

    Every field is optional at the schema level; missing or blank values are
    reported by the validation rules as "<field> is required".

    Example:
        {
            "firstName": "Ann",
            "lastName": "Lee",
            "address": "1 Main St",
            "email": "ann@example.com",
            "phone": "+12025550123"
        }
    """

    first_name: str | None = Field(default=None, description="Given name")
    last_name: str | None = Field(default=None, description="Family name")
    address: str | None = Field(default=None, description="Postal address")
    email: str | None = Field(default=None, description="Email address (unique)")
    phone: str | None = Field(default=None, description="Phone number, 4-15 digits")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "firstName": "Ann",
                "lastName": "Lee",
                "address": "1 Main St",
                "email": "ann@example.com",
                "phone": "+12025550123",
            }
        },
    )

    def to_fields(self) -> dict[str, Any]:
        """Return the raw values keyed by wire name, for the validation rules."""
        return self.model_dump(by_alias=True)


class Contact(CamelModel):
    """
    A stored contact.

    Returned by every contact endpoint except DELETE.
    """

    id: int = Field(..., description="System-assigned identifier")
    first_name: str
    last_name: str
    address: str
    email: str
    phone: str
    created_at: datetime | None = Field(
        default=None,
        description="Timestamp when the contact was created (UTC)"
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """SQLite stores CURRENT_TIMESTAMP as naive UTC; attach the offset."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def form_values(self) -> dict[str, str]:
        """The five editable fields keyed by wire name."""
        return self.model_dump(by_alias=True, include={"first_name", "last_name", "address", "email", "phone"})


class DeleteAcknowledgement(BaseModel):
    """Response for DELETE /contacts/{id}."""
    message: str = Field(default="Contact deleted successfully")


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""
    error: str = Field(..., description="Human-readable message")
    code: str | None = Field(default=None, description="Machine-readable error code")
    field: str | None = Field(default=None, description="Offending field for validation errors")
