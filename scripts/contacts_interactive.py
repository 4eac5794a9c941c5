#!/usr/bin/env python3
# =============================================================================
# scripts/contacts_interactive.py - Interactive Contact Book
# =============================================================================
# A terminal front end for the Contact Manager API. Keeps the loaded list in
# memory, filters it locally and only talks to the server to load, save and
# delete.
#
# Usage:
#   python scripts/contacts_interactive.py                       # CONTACTS_API_URL or localhost:3000
#   python scripts/contacts_interactive.py http://host:3000
#
# Commands:
#   /list            - Reload and show contacts
#   /search <term>   - Filter the loaded list (empty term clears)
#   /add             - Fill in the form and create a contact
#   /edit <id>       - Load a contact into the form and update it
#   /cancel          - Leave edit mode
#   /delete <id>     - Delete a contact (asks for confirmation)
#   /export <file>   - Write the visible contacts to an HTML page
#   /help            - Show help
#   /quit or /exit   - Exit
# =============================================================================

import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from client.api import ContactsApiClient
from client.render import format_contact_line, render_page
from client.state import (
    ContactBookState,
    begin_edit,
    cancel_edit,
    delete_contact,
    load_contacts,
    set_field,
    set_search,
    submit_form,
    visible_contacts,
)

FIELD_LABELS = {
    "firstName": "First name",
    "lastName": "Last name",
    "address": "Address",
    "email": "Email",
    "phone": "Phone",
}


def print_header(api_url: str):
    """Print the welcome banner."""
    print("\n" + "=" * 60)
    print("  Contact Book")
    print("=" * 60)
    print(f"  Server: {api_url}")
    print("  Type /help for commands.")
    print("-" * 60 + "\n")


def print_help():
    """Print help message."""
    print("\n" + "-" * 40)
    print("COMMANDS:")
    print("  /list           - Reload and show contacts")
    print("  /search <term>  - Filter loaded contacts")
    print("  /add            - Add a contact")
    print("  /edit <id>      - Edit a contact")
    print("  /cancel         - Leave edit mode")
    print("  /delete <id>    - Delete a contact")
    print("  /export <file>  - Save visible contacts as HTML")
    print("  /quit           - Exit")
    print("-" * 40 + "\n")


def print_message(state: ContactBookState):
    """Show and clear the last status banner."""
    if state.message is None:
        return
    prefix = "OK" if state.message.kind == "success" else "ERROR"
    print(f"\n  [{prefix}] {state.message.text}\n")
    state.message = None


def print_contacts(state: ContactBookState):
    contacts = visible_contacts(state)
    suffix = f' matching "{state.search_term}"' if state.search_term else ""
    print(f"\n  Contacts ({len(contacts)}){suffix}:")
    if not contacts:
        print("    No contacts found")
    for contact in contacts:
        print(f"    {format_contact_line(contact)}")
    print()


def prompt_form(state: ContactBookState):
    """
    Ask for each field, pre-filled from the form.

    Pressing Enter keeps the current value.
    """
    print(f"\n  {state.form_title}")
    for name, label in FIELD_LABELS.items():
        current = state.form.get(name, "")
        error = state.field_errors.get(name)
        if error:
            print(f"    ! {error}")
        hint = f" [{current}]" if current else ""
        value = input(f"    {label}{hint}: ")
        set_field(state, name, value if value.strip() else current)


def run_form(state: ContactBookState, api: ContactsApiClient):
    """Prompt until the form passes client-side validation or the user gives up."""
    while True:
        prompt_form(state)
        saved = submit_form(state, api)
        if saved is not None:
            print(f"\n  Saved: {format_contact_line(saved)}")
            return
        if not state.field_errors:
            # The server rejected it; the form is kept for correction
            return
        retry = input(f"\n  Fix the highlighted fields? ({state.submit_label}) [Y/n]: ").strip().lower()
        if retry in ("n", "no"):
            return


def parse_id(argument: str):
    try:
        return int(argument)
    except ValueError:
        print(f"\n  Not a contact id: {argument!r}\n")
        return None


def main():
    """Main command loop."""
    api_url = sys.argv[1] if len(sys.argv) > 1 else None
    state = ContactBookState()

    with ContactsApiClient(api_url) as api:
        print_header(api.base_url)
        load_contacts(state, api)
        print_message(state)
        print_contacts(state)

        while True:
            try:
                user_input = input("contacts> ").strip()

                if not user_input:
                    continue

                command, _, argument = user_input.partition(" ")
                command = command.lower()
                argument = argument.strip()

                if command in ["/quit", "/exit", "/q"]:
                    print("\nGoodbye!\n")
                    break

                if command == "/help":
                    print_help()
                    continue

                if command == "/list":
                    load_contacts(state, api)
                    print_message(state)
                    print_contacts(state)
                    continue

                if command == "/search":
                    set_search(state, argument)
                    print_contacts(state)
                    continue

                if command == "/add":
                    if state.is_editing:
                        cancel_edit(state)
                    run_form(state, api)
                    print_message(state)
                    continue

                if command == "/edit":
                    contact_id = parse_id(argument)
                    if contact_id is None:
                        continue
                    if not begin_edit(state, contact_id):
                        print(f"\n  No loaded contact with id {contact_id}. Try /list.\n")
                        continue
                    run_form(state, api)
                    print_message(state)
                    continue

                if command == "/cancel":
                    cancel_edit(state)
                    print("\n  Edit cancelled.\n")
                    continue

                if command == "/delete":
                    contact_id = parse_id(argument)
                    if contact_id is None:
                        continue
                    confirm = input("  Are you sure you want to delete this contact? [y/N]: ").strip().lower()
                    if confirm in ("y", "yes"):
                        delete_contact(state, api, contact_id)
                        print_message(state)
                    continue

                if command == "/export":
                    if not argument:
                        print("\n  Usage: /export <file.html>\n")
                        continue
                    path = Path(argument)
                    path.write_text(render_page(state), encoding="utf-8")
                    print(f"\n  Wrote {len(visible_contacts(state))} contact(s) to {path}\n")
                    continue

                print("\n  Unknown command. Type /help for commands.\n")

            except KeyboardInterrupt:
                print("\n\nGoodbye!\n")
                break
            except EOFError:
                print("\n\nGoodbye!\n")
                break


if __name__ == "__main__":
    main()
