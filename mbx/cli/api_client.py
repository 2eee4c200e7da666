"""Synchronous HTTP client for the mailbox API.

Each call opens its own `httpx.Client`, so one instance can be shared freely
between sessions. Requests carry no client-side timeout: a hung server hangs
the caller.
"""

from __future__ import annotations

import base64
import json
import logging
from http import HTTPMethod
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from mbx.cli.models import EntriesPage, Entry, ErrorResponse, NewEntry
from mbx.constants import BATCH_SIZE

logger = logging.getLogger(__name__)

__all__ = [
    "APIError",
    "DecodeError",
    "MailboxAPIClient",
    "ServerError",
    "TransportError",
]


class APIError(Exception):
    """API request failed with structured error info."""

    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail or message


class TransportError(APIError):
    """Connection, DNS or protocol failure before a response arrived."""


class ServerError(APIError):
    """Non-200 response. The message is the server's error text verbatim."""

    def __init__(self, message: str, status_code: int, reason: str = ""):
        super().__init__(message, status_code=status_code)
        self.reason = reason

    @property
    def status_line(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


class DecodeError(APIError):
    """Response body was not the JSON shape the endpoint promises."""


def basic_auth_header(username: str, password: str) -> str:
    """Encode a `username:password` pair as an HTTP Basic credential."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class MailboxAPIClient:
    """Client for the list/read/delete/create endpoints."""

    def __init__(
        self,
        base_url: str,
        username: str = "",
        password: str = "",
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            base_url: Normalized API root (no trailing slash)
            username: Basic auth username (optional)
            password: Basic auth password (optional)
            transport: Transport override, used by tests
        """
        self.base_url = base_url
        self.username = username
        self.password = password
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        if self.username and self.password:
            return {"Authorization": basic_auth_header(self.username, self.password)}
        return {}

    def _request(
        self,
        method: HTTPMethod,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json_body: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make one HTTP request and classify failures.

        Returns:
            The 200 response

        Raises:
            TransportError: If no response was received
            ServerError: If the status is not 200
        """
        url = f"{self.base_url}{path}"
        try:
            with httpx.Client(transport=self._transport, timeout=None) as client:
                resp = client.request(
                    method.value,
                    url,
                    params=params,
                    json=json_body,
                    headers=self._headers(),
                )
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method.value, path, e)
            raise TransportError(f"server failed to respond: {url}", detail=str(e)) from e

        logger.debug("%s %s -> %s", method.value, path, resp.status_code)
        if resp.status_code != 200:
            raise ServerError(_extract_error(resp), status_code=resp.status_code, reason=resp.reason_phrase)
        return resp

    def list_page(self, page: int) -> tuple[list[Entry], int | None]:
        """Fetch one page of entries.

        Args:
            page: Zero-based page index

        Returns:
            The page's rows and the next page index (None on the last page)

        Raises:
            APIError: If the request fails or the body cannot be decoded
        """
        resp = self._request(HTTPMethod.GET, "/entries/", params={"page": str(page)})
        try:
            body = TypeAdapter(EntriesPage).validate_json(resp.content)
        except ValidationError as e:
            raise DecodeError(f"malformed page {page} response", status_code=resp.status_code, detail=str(e)) from e
        if len(body.entries) > BATCH_SIZE:
            logger.warning("Page %d returned %d entries (batch size %d)", page, len(body.entries), BATCH_SIZE)
        return list(body.entries), body.next_page

    def get_entry(self, entry_id: str) -> str:
        """Fetch one entry and return its raw JSON body.

        Raises:
            APIError: If the request fails or the body is not JSON
        """
        resp = self._request(HTTPMethod.GET, f"/entry/{quote(entry_id, safe='')}")
        try:
            json.loads(resp.text)
        except json.JSONDecodeError as e:
            raise DecodeError("malformed entry response", status_code=resp.status_code, detail=str(e)) from e
        return resp.text

    def delete_entry(self, entry_id: str) -> None:
        """Delete an entry by ID.

        Raises:
            APIError: If the request fails
        """
        self._request(HTTPMethod.DELETE, f"/entry/{quote(entry_id, safe='')}")

    def create_entry(self, sender: str, subject: str, message: str) -> None:
        """Submit a new entry. Field validation happens server side.

        Raises:
            APIError: If the request fails
        """
        record = NewEntry(sender=sender, subject=subject, message=message)
        self._request(HTTPMethod.POST, "/submit", json_body=record.to_payload())


def _extract_error(resp: httpx.Response) -> str:
    """Extract the `error` message from an error body."""
    try:
        body = TypeAdapter(ErrorResponse).validate_json(resp.content)
    except ValidationError:
        return resp.text.strip() or resp.reason_phrase
    return body.error or resp.reason_phrase
