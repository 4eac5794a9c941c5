# =============================================================================
# client/ - Contact Book Client
# =============================================================================
# This package is the client half of the contact manager:
# - api.py: httpx client for the REST endpoints
# - state.py: UI state object plus search, edit-mode and submit logic
# - render.py: Escaped HTML and terminal rendering of contacts
#
# It shares core/validation.py with the server, so form checks and API
# checks can't drift apart.
# =============================================================================

from client.api import ContactsApiClient, ContactsApiError
from client.state import ContactBookState, StatusMessage

__all__ = [
    "ContactsApiClient",
    "ContactsApiError",
    "ContactBookState",
    "StatusMessage",
]
