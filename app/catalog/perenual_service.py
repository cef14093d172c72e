"""
Perenual integration for the plant catalogue.

This module talks to the Perenual species API.  It exposes one client
class with two coroutines:

* ``PerenualClient.fetch_page()``: fetch one page of the species list,
  optionally narrowed by a category filter such as ``indoor=1``.

* ``PerenualClient.fetch_detail()``: fetch the full record of a single
  species by its identifier.

Each call performs exactly one HTTP request.  There are no retries and
no client-side timeout.  Any non-success status, transport failure or
undecodable body is reported as a ``FetchError`` carrying a generic
message; the status code is logged but never surfaced to callers.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Dict, Optional, Union

import httpx


logger = logging.getLogger(__name__)

LIST_ERROR_MESSAGE = "Failed to load plants"
DETAIL_ERROR_MESSAGE = "Failed to load plant details"


class FetchError(Exception):
    """Raised when the remote catalogue cannot deliver a response."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PerenualClient:
    """Thin async client for the Perenual species API.

    The API key is read once at startup and passed in here; it is not
    validated, so a missing key simply makes the upstream requests fail.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://perenual.com/api",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def page_url(self, category_filter: str, page: int) -> str:
        parts = [f"key={self.api_key}"]
        if category_filter:
            parts.append(category_filter.strip("&"))
        parts.append(f"page={page}")
        return f"{self.base_url}/species-list?{'&'.join(parts)}"

    def detail_url(self, plant_id: Union[int, str]) -> str:
        quoted = urllib.parse.quote(str(plant_id), safe="")
        return f"{self.base_url}/species/details/{quoted}?key={self.api_key}"

    async def _get(self, url: str, error_message: str) -> httpx.Response:
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
                response = await client.get(url, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            logger.error("Error fetching %s: %s", self._redact(url), exc)
            raise FetchError(error_message) from exc
        if not response.is_success:
            logger.warning(
                "Perenual request to %s returned status %s",
                self._redact(url),
                response.status_code,
            )
            raise FetchError(error_message)
        return response

    def _redact(self, url: str) -> str:
        if not self.api_key:
            return url
        return url.replace(self.api_key, "***")

    async def fetch_page(self, category_filter: str, page: int) -> Dict[str, Any]:
        """Return the raw JSON of one species-list page.

        The payload normally looks like
        ``{"data": [...], "last_page": 3, "to": 20, "total": 60}`` but no
        key is guaranteed; defaults are applied by the list pipeline.
        """
        url = self.page_url(category_filter, page)
        response = await self._get(url, LIST_ERROR_MESSAGE)
        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Invalid JSON from %s: %s", self._redact(url), exc)
            raise FetchError(LIST_ERROR_MESSAGE) from exc
        if not isinstance(data, dict):
            logger.error("Unexpected species-list payload type: %s", type(data).__name__)
            raise FetchError(LIST_ERROR_MESSAGE)
        return data

    async def fetch_detail(self, plant_id: Union[int, str]) -> Optional[Dict[str, Any]]:
        """Return the raw species record, or ``None`` for an empty payload."""
        url = self.detail_url(plant_id)
        response = await self._get(url, DETAIL_ERROR_MESSAGE)
        if not response.content.strip():
            return None
        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Invalid JSON from %s: %s", self._redact(url), exc)
            raise FetchError(DETAIL_ERROR_MESSAGE) from exc
        if not isinstance(data, dict) or not data:
            return None
        return data
