# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for the API contract:
# - contact.py: Contact request/response schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .contact import (
    CamelModel,
    Contact,
    ContactInput,
    DeleteAcknowledgement,
    ErrorResponse,
)

__all__ = [
    "CamelModel",
    "Contact",
    "ContactInput",
    "DeleteAcknowledgement",
    "ErrorResponse",
]
