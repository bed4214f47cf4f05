"""HTTP client for the hosted backend (REST tables + serverless functions).

Requests are sent once: there is no retry or backoff, and the timeout
comes from configuration rather than the transport default.  Any
transport failure or non-2xx reply becomes a BackendError.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from storeorder.domain.exceptions import BackendError
from storeorder.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class BackendClient:
    """Thin wrapper around ``httpx.Client`` with auth headers and error mapping."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize backend client.

        Args:
            settings: Backend URL, API key, token and timeout
            transport: Optional transport override (used by tests)
        """
        self.base_url = settings.backend_url.rstrip("/")

        headers = {
            "Content-Type": "application/json",
            "apikey": settings.backend_api_key,
            "Authorization": f"Bearer {settings.access_token or settings.backend_api_key}",
        }

        self.client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=settings.request_timeout,
            transport=transport,
        )

    def request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """
        Send one request and return the decoded JSON body (None if empty).

        Raises:
            BackendError: On transport failure or non-2xx status
        """
        logger.debug("%s %s", method, endpoint)
        try:
            response = self.client.request(method, endpoint, **kwargs)
        except httpx.HTTPError as exc:
            raise BackendError(
                f"{method} {endpoint} failed: {exc}", details={"error": str(exc)}
            ) from exc

        logger.debug("Response: %s", response.status_code)
        if response.is_error:
            raise BackendError(
                f"{method} {endpoint} returned HTTP {response.status_code}",
                details={"status": response.status_code, "response": response.text},
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise BackendError(
                f"{method} {endpoint} returned invalid JSON",
                details={"response": response.text},
            ) from exc

    def get(self, endpoint: str, **kwargs: Any) -> Any:
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, **kwargs: Any) -> Any:
        return self.request("POST", endpoint, **kwargs)

    def invoke_function(self, name: str, body: Dict[str, Any]) -> Any:
        """Call a serverless function by name."""
        return self.post(f"/functions/v1/{name}", json=body)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> BackendClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
