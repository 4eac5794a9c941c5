# =============================================================================
# client/render.py - Contact List Rendering
# =============================================================================
# Turns contacts into HTML fragments (for a browser page) or single text
# lines (for the terminal). Every user-supplied value goes through
# html.escape before it is placed in markup.
# =============================================================================

from html import escape
from typing import Iterable

from client.state import ContactBookState, visible_contacts
from core.models.contact import Contact

EMPTY_STATE_HTML = (
    '<div class="empty-state">'
    "<h3>No contacts found</h3>"
    "<p>Add your first contact using the form above</p>"
    "</div>"
)


def render_contact_card(contact: Contact) -> str:
    """One contact as a card with edit/delete buttons."""
    return (
        '<div class="contact-card">'
        '<div class="contact-info">'
        f"<div><label>First Name:</label><span>{escape(contact.first_name)}</span></div>"
        f"<div><label>Last Name:</label><span>{escape(contact.last_name)}</span></div>"
        f"<div><label>Email:</label><span>{escape(contact.email)}</span></div>"
        f"<div><label>Phone:</label><span>{escape(contact.phone)}</span></div>"
        f'<div class="full-width"><label>Address:</label><span>{escape(contact.address)}</span></div>'
        "</div>"
        '<div class="contact-actions">'
        f'<button class="btn-edit" data-contact-id="{contact.id}">Edit</button>'
        f'<button class="btn-delete" data-contact-id="{contact.id}">Delete</button>'
        "</div>"
        "</div>"
    )


def render_contact_cards(contacts: Iterable[Contact]) -> str:
    """All cards, or the empty-state block when there are none."""
    cards = [render_contact_card(contact) for contact in contacts]
    return "".join(cards) if cards else EMPTY_STATE_HTML


def render_page(state: ContactBookState) -> str:
    """
    A standalone HTML page of the currently visible contacts.

    Used by the terminal client's /export command.
    """
    contacts = visible_contacts(state)
    search = escape(state.search_term)
    subtitle = f'<p class="search">Filtered by "{search}"</p>' if search else ""

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        '<head><meta charset="utf-8"><title>Contacts</title></head>\n'
        "<body>\n"
        f'<h1>Contacts (<span id="contact-count">{len(contacts)}</span>)</h1>\n'
        f"{subtitle}\n"
        f'<div id="contacts-container">{render_contact_cards(contacts)}</div>\n'
        "</body>\n"
        "</html>\n"
    )


def format_contact_line(contact: Contact) -> str:
    """One-line terminal summary: "[3] Ann Lee <ann@example.com> +1202... | 1 Main St"."""
    return (
        f"[{contact.id}] {contact.full_name} <{contact.email}> "
        f"{contact.phone} | {contact.address}"
    )
