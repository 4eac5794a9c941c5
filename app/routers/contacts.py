# =============================================================================
# app/routers/contacts.py - Contact CRUD Endpoints
# =============================================================================
# REST endpoints over the contacts table. Handlers only translate HTTP to
# ContactService calls; validation and uniqueness live in the service.
#
# Failures are raised as ContactManagerException subclasses and rendered by
# the handlers in app/exceptions.py as {"error": ..., "code": ...}.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, status

from app.dependencies import ContactServiceDep
from core.models.contact import Contact, ContactInput, DeleteAcknowledgement, ErrorResponse
from lib.database import MAX_CONTACT_ID

router = APIRouter()

ContactId = Annotated[int, Path(description="Contact ID", le=MAX_CONTACT_ID)]

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Contact not found"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Validation failed or email already exists"}}


@router.get("", response_model=list[Contact])
async def list_contacts(service: ContactServiceDep):
    """
    List all contacts.

    Ordered by firstName, then lastName. No pagination or filtering;
    clients filter locally.
    """
    return await service.list_contacts()


@router.get("/{contact_id}", response_model=Contact, responses=NOT_FOUND)
async def get_contact(contact_id: ContactId, service: ContactServiceDep):
    """Get a single contact."""
    return await service.get_contact(contact_id)


@router.post(
    "",
    response_model=Contact,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
)
async def create_contact(request: ContactInput, service: ContactServiceDep):
    """
    Create a contact.

    All five fields are required. The email must be unique across contacts.
    Returns the stored contact with its assigned id.
    """
    return await service.create_contact(request.to_fields())


@router.put(
    "/{contact_id}",
    response_model=Contact,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
async def update_contact(
    contact_id: ContactId,
    request: ContactInput,
    service: ContactServiceDep,
):
    """
    Replace all five fields of a contact.

    Keeping the contact's own email is allowed; taking another contact's
    email is not.
    """
    return await service.update_contact(contact_id, request.to_fields())


@router.delete("/{contact_id}", response_model=DeleteAcknowledgement, responses=NOT_FOUND)
async def delete_contact(contact_id: ContactId, service: ContactServiceDep):
    """Delete a contact permanently."""
    await service.delete_contact(contact_id)
    return DeleteAcknowledgement()
