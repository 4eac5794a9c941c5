# =============================================================================
# core/services/contact_service.py - Contact Business Logic
# =============================================================================
# Handles contact CRUD operations and the rules around them:
# - Field validation (core/validation.py) before anything touches storage
# - Email uniqueness, checked and written in the same transaction
# - Translation of database errors into API exceptions
#
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    ContactManagerException,
    ContactNotFoundError,
    DuplicateEmailError,
    InvalidEmailFormatError,
    InvalidPhoneFormatError,
    MissingFieldError,
    StorageFailureError,
)
from core.models.contact import Contact
from core.validation import IssueKind, ValidationIssue, first_issue, normalize_contact_fields
from lib.database import MAX_CONTACT_ID, ContactRow

logger = logging.getLogger(__name__)


def _error_for_issue(issue: ValidationIssue) -> ContactManagerException:
    """Map the first failing validation rule to its API exception."""
    if issue.kind is IssueKind.INVALID_EMAIL:
        return InvalidEmailFormatError(issue.message)
    if issue.kind is IssueKind.INVALID_PHONE:
        return InvalidPhoneFormatError(issue.message)
    return MissingFieldError(issue.field, issue.message)


def _database_message(exc: SQLAlchemyError) -> str:
    """The driver's own message when there is one, without SQLAlchemy's SQL dump."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _storable_id(contact_id: int) -> bool:
    """Whether the id could name a stored row (positive, fits a 64-bit INTEGER)."""
    return 0 <= contact_id <= MAX_CONTACT_ID


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    """Re-raise unexpected database errors as StorageFailureError."""
    try:
        yield
    except SQLAlchemyError as e:
        message = _database_message(e)
        logger.error(f"Failed to {action}: {message}")
        raise StorageFailureError(message) from e


class ContactService:
    """
    Service for contact management operations.

    One instance wraps one AsyncSession (one request). Every mutating
    method commits before returning.

    Example:
        async with database.session() as session:
            service = ContactService(session)
            contact = await service.create_contact({"firstName": "Ann", ...})
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def list_contacts(self) -> list[Contact]:
        """
        Return every contact ordered by first name, then last name.

        Ties are broken by id so the order is stable.
        """
        with _storage_errors("list contacts"):
            result = await self.session.execute(
                select(ContactRow).order_by(
                    ContactRow.first_name,
                    ContactRow.last_name,
                    ContactRow.id,
                )
            )
            rows = result.scalars().all()

        return [Contact.model_validate(row) for row in rows]

    async def get_contact(self, contact_id: int) -> Contact:
        """
        Get a contact by ID.

        Raises:
            ContactNotFoundError: If no contact has this ID
        """
        if not _storable_id(contact_id):
            raise ContactNotFoundError(contact_id)

        with _storage_errors("get contact"):
            row = await self.session.get(ContactRow, contact_id)

        if row is None:
            raise ContactNotFoundError(contact_id)

        return Contact.model_validate(row)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_contact(self, data: Mapping[str, Any]) -> Contact:
        """
        Validate and insert a new contact.

        Args:
            data: Field values keyed by wire name (firstName, lastName, ...)

        Returns:
            The stored contact, including its new id and createdAt

        Raises:
            MissingFieldError, InvalidEmailFormatError, InvalidPhoneFormatError:
                If a field rule fails (nothing is written)
            DuplicateEmailError: If any contact already uses the email
            StorageFailureError: If the database fails otherwise
        """
        fields = self._validated(data)
        email = fields["email"]

        with _storage_errors("create contact"):
            try:
                if await self._email_taken(email):
                    raise DuplicateEmailError(email)

                row = ContactRow(
                    first_name=fields["firstName"],
                    last_name=fields["lastName"],
                    address=fields["address"],
                    email=email,
                    phone=fields["phone"],
                )
                self.session.add(row)
                await self.session.flush()
                await self.session.refresh(row)
                await self.session.commit()

            except IntegrityError as e:
                await self.session.rollback()
                raise self._integrity_error(e, email) from e

        logger.info(f"Created contact: {row.id}")
        return Contact.model_validate(row)

    async def update_contact(self, contact_id: int, data: Mapping[str, Any]) -> Contact:
        """
        Overwrite all five fields of an existing contact.

        The uniqueness check ignores the contact itself, so saving a contact
        with its own unchanged email succeeds. id and createdAt never change.

        Raises:
            MissingFieldError, InvalidEmailFormatError, InvalidPhoneFormatError:
                If a field rule fails (nothing is written)
            DuplicateEmailError: If a different contact already uses the email
            ContactNotFoundError: If no contact has this ID
            StorageFailureError: If the database fails otherwise
        """
        fields = self._validated(data)
        email = fields["email"]
        if not _storable_id(contact_id):
            raise ContactNotFoundError(contact_id)

        with _storage_errors("update contact"):
            try:
                if await self._email_taken(email, exclude_id=contact_id):
                    raise DuplicateEmailError(email)

                row = await self.session.get(ContactRow, contact_id)
                if row is None:
                    raise ContactNotFoundError(contact_id)

                row.first_name = fields["firstName"]
                row.last_name = fields["lastName"]
                row.address = fields["address"]
                row.email = email
                row.phone = fields["phone"]

                await self.session.flush()
                await self.session.commit()

            except IntegrityError as e:
                await self.session.rollback()
                raise self._integrity_error(e, email) from e

        logger.info(f"Updated contact: {contact_id}")
        return Contact.model_validate(row)

    async def delete_contact(self, contact_id: int) -> None:
        """
        Delete a contact immediately.

        Raises:
            ContactNotFoundError: If no contact has this ID
        """
        if not _storable_id(contact_id):
            raise ContactNotFoundError(contact_id)

        with _storage_errors("delete contact"):
            row = await self.session.get(ContactRow, contact_id)
            if row is None:
                raise ContactNotFoundError(contact_id)

            await self.session.delete(row)
            await self.session.commit()

        logger.info(f"Deleted contact: {contact_id}")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _validated(data: Mapping[str, Any]) -> dict[str, str]:
        """Return trimmed fields, or raise for the first failing rule."""
        issue = first_issue(data)
        if issue is not None:
            raise _error_for_issue(issue)
        return normalize_contact_fields(data)

    async def _email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        """Check whether a contact (other than `exclude_id`) already has this email."""
        query = select(ContactRow.id).where(ContactRow.email == email)
        if exclude_id is not None:
            query = query.where(ContactRow.id != exclude_id)

        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    @staticmethod
    def _integrity_error(exc: IntegrityError, email: str) -> ContactManagerException:
        """
        Classify a constraint violation.

        Another request can insert the same email between our check and our
        write; the UNIQUE constraint catches that and it is still a duplicate.
        """
        message = _database_message(exc)
        if "email" in message.lower():
            logger.info(f"Email uniqueness enforced by database for: {email}")
            return DuplicateEmailError(email)

        logger.error(f"Integrity error: {message}")
        return StorageFailureError(message)
