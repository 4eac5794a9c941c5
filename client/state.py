# =============================================================================
# client/state.py - Contact Book UI State
# =============================================================================
# The client's view of the world: the last-loaded contact list, the search
# term, the form being edited and which contact (if any) it belongs to.
#
# State lives in one ContactBookState owned by the UI; every operation takes
# it explicitly. Searching only filters the cached list and never calls the
# API. Submitting validates with the same rule table the server uses, then
# creates or updates depending on edit mode.
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Literal

from client.api import ContactsApiClient, ContactsApiError
from core.models.contact import Contact
from core.validation import CONTACT_FIELDS, collect_issues, field_errors, normalize_contact_fields

logger = logging.getLogger(__name__)


def empty_form() -> dict[str, str]:
    return {name: "" for name in CONTACT_FIELDS}


@dataclass(frozen=True)
class StatusMessage:
    """A banner shown to the user after an action."""
    text: str
    kind: Literal["success", "error"] = "success"


@dataclass
class ContactBookState:
    """
    Everything the contact book UI needs to render itself.

    Attributes:
        contacts: Contacts from the last successful load
        editing_id: ID of the contact in the form, or None when adding
        search_term: Current local filter
        form: Form values keyed by wire name (firstName, ...)
        field_errors: Hint per field from the last failed submit
        message: Last success/error banner
    """
    contacts: list[Contact] = field(default_factory=list)
    editing_id: int | None = None
    search_term: str = ""
    form: dict[str, str] = field(default_factory=empty_form)
    field_errors: dict[str, str] = field(default_factory=dict)
    message: StatusMessage | None = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def form_title(self) -> str:
        return "Edit Contact" if self.is_editing else "Add New Contact"

    @property
    def submit_label(self) -> str:
        return "Update Contact" if self.is_editing else "Add Contact"


# =============================================================================
# Search
# =============================================================================

def filter_contacts(contacts: Iterable[Contact], term: str) -> list[Contact]:
    """
    Filter contacts by substring.

    Names and email are compared case-insensitively; phone numbers are
    compared as-is. An empty term returns every contact.
    """
    needle = term.lower()
    if not needle:
        return list(contacts)

    return [
        contact for contact in contacts
        if needle in contact.first_name.lower()
        or needle in contact.last_name.lower()
        or needle in contact.email.lower()
        or needle in contact.phone
    ]


def visible_contacts(state: ContactBookState) -> list[Contact]:
    """Contacts to display for the current search term."""
    return filter_contacts(state.contacts, state.search_term)


def set_search(state: ContactBookState, term: str) -> list[Contact]:
    state.search_term = term
    return visible_contacts(state)


# =============================================================================
# Form / Edit Mode
# =============================================================================

def set_field(state: ContactBookState, name: str, value: str) -> None:
    """Update one form value and clear its stale error."""
    if name not in state.form:
        raise KeyError(f"Unknown contact field: {name}")
    state.form[name] = value
    state.field_errors.pop(name, None)


def begin_edit(state: ContactBookState, contact_id: int) -> bool:
    """
    Load a cached contact into the form and switch to edit mode.

    Returns False (and changes nothing) if the id isn't in the loaded list.
    """
    contact = next((c for c in state.contacts if c.id == contact_id), None)
    if contact is None:
        return False

    state.editing_id = contact_id
    state.form = contact.form_values()
    state.field_errors = {}
    return True


def cancel_edit(state: ContactBookState) -> None:
    """Leave edit mode and reset the form."""
    state.editing_id = None
    state.form = empty_form()
    state.field_errors = {}


# =============================================================================
# API Actions
# =============================================================================

def load_contacts(state: ContactBookState, api: ContactsApiClient) -> bool:
    """
    Reload the contact list from the server.

    On failure the list is emptied and the error shown.
    """
    try:
        state.contacts = api.list_contacts()
    except ContactsApiError as e:
        logger.error(f"Error loading contacts: {e}")
        state.contacts = []
        state.message = StatusMessage(e.message, "error")
        return False
    return True


def submit_form(state: ContactBookState, api: ContactsApiClient) -> Contact | None:
    """
    Validate the form and create or update a contact.

    Validation failures fill `field_errors` and nothing is sent. API
    failures set an error message and leave the form untouched so the user
    can correct it.

    Returns:
        The saved contact, or None if nothing was saved
    """
    values = normalize_contact_fields(state.form)
    issues = collect_issues(values)
    if issues:
        state.field_errors = field_errors(issues)
        return None

    state.form = values
    state.field_errors = {}

    try:
        if state.editing_id is not None:
            saved = api.update_contact(state.editing_id, values)
            state.message = StatusMessage("Contact updated successfully!")
            cancel_edit(state)
        else:
            saved = api.create_contact(values)
            state.message = StatusMessage("Contact created successfully!")
            state.form = empty_form()
    except ContactsApiError as e:
        logger.error(f"Error saving contact: {e}")
        state.message = StatusMessage(e.message, "error")
        return None

    load_contacts(state, api)
    return saved


def delete_contact(state: ContactBookState, api: ContactsApiClient, contact_id: int) -> bool:
    """
    Delete a contact and reload the list.

    If the deleted contact was open in the form, edit mode is cancelled.
    """
    try:
        api.delete_contact(contact_id)
    except ContactsApiError as e:
        logger.error(f"Error deleting contact: {e}")
        state.message = StatusMessage(e.message, "error")
        return False

    state.message = StatusMessage("Contact deleted successfully!")
    load_contacts(state, api)

    if state.editing_id == contact_id:
        cancel_edit(state)
    return True
