# =============================================================================
# client/api.py - HTTP Client for the Contacts API
# =============================================================================
# Thin httpx wrapper around the REST endpoints. Every non-2xx response is
# raised as ContactsApiError carrying the server's "error" message; nothing
# is retried.
#
# Usage:
#   from client.api import ContactsApiClient
#   with ContactsApiClient("http://localhost:3000") as api:
#       contacts = api.list_contacts()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from app.config import settings
from core.models.contact import Contact

logger = logging.getLogger(__name__)

FALLBACK_ERROR = "Something went wrong"


class ContactsApiError(Exception):
    """
    A request to the contacts API failed.

    Attributes:
        message: The server's "error" text, or a generic fallback
        status_code: HTTP status, or None if the server was unreachable
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"[{self.status_code}] {self.message}"


class ContactsApiClient:
    """
    Synchronous client for /contacts.

    Pass `http_client` to reuse an existing httpx.Client (for example a
    FastAPI TestClient); otherwise one is created for `base_url` and closed
    by close().
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        api_prefix: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ):
        prefix = settings.api_prefix if api_prefix is None else api_prefix.rstrip("/")
        self.contacts_path = f"{prefix}/contacts"
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(
            base_url=base_url or settings.CONTACTS_API_URL,
            timeout=timeout or settings.CLIENT_TIMEOUT_SECONDS,
        )

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    def list_contacts(self) -> list[Contact]:
        body = self._request("GET", self.contacts_path)
        return [Contact.model_validate(item) for item in body]

    def get_contact(self, contact_id: int) -> Contact:
        body = self._request("GET", f"{self.contacts_path}/{contact_id}")
        return Contact.model_validate(body)

    def create_contact(self, fields: Mapping[str, str]) -> Contact:
        body = self._request("POST", self.contacts_path, json=dict(fields))
        return Contact.model_validate(body)

    def update_contact(self, contact_id: int, fields: Mapping[str, str]) -> Contact:
        body = self._request("PUT", f"{self.contacts_path}/{contact_id}", json=dict(fields))
        return Contact.model_validate(body)

    def delete_contact(self, contact_id: int) -> str:
        """Delete a contact and return the server's acknowledgement message."""
        body = self._request("DELETE", f"{self.contacts_path}/{contact_id}")
        return body.get("message", "")

    # -------------------------------------------------------------------------
    # Plumbing
    # -------------------------------------------------------------------------

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            response = self._http.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ContactsApiError(f"Could not reach the contacts API: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            message = FALLBACK_ERROR
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
            logger.debug(f"{method} {path} -> {response.status_code}: {message}")
            raise ContactsApiError(message, response.status_code)

        return body

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "ContactsApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
