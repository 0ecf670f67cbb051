"""Feed HTTP client.

Handles raw HTTP requests to the schedule and standings feeds.
No data transformation - just fetch and return JSON.

A single best-effort attempt per call: no retries and no backoff. Stale
data is the fallback, and that decision belongs to the cache layer.

Configuration via environment variables:
    PADDOCK_TIMEOUT: Request timeout in seconds (default: 10)
    PADDOCK_MAX_CONNECTIONS: Max concurrent connections (default: 10)
"""

import json
import logging
import os
import threading

import httpx

from paddock.core.errors import MalformedPayload, NetworkFailure

logger = logging.getLogger(__name__)

# Environment variable configuration with defaults
PADDOCK_TIMEOUT = float(os.environ.get("PADDOCK_TIMEOUT", 10.0))
PADDOCK_MAX_CONNECTIONS = int(os.environ.get("PADDOCK_MAX_CONNECTIONS", 10))

USER_AGENT = "paddock/1.0"


class FeedClient:
    """Low-level JSON feed client.

    The underlying httpx.Client is created lazily and reused so repeated
    refreshes keep their connections alive.
    """

    def __init__(
        self,
        timeout: float | None = None,
        max_connections: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self._timeout = timeout if timeout is not None else PADDOCK_TIMEOUT
        self._max_connections = (
            max_connections if max_connections is not None else PADDOCK_MAX_CONNECTIONS
        )
        self._transport = transport
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                # Double-check after acquiring lock
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._timeout,
                        limits=httpx.Limits(
                            max_connections=self._max_connections,
                            max_keepalive_connections=self._max_connections,
                        ),
                        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
                        follow_redirects=True,
                        transport=self._transport,
                    )
        return self._client

    def fetch(self, resource: str) -> dict:
        """Fetch a JSON document.

        Args:
            resource: Absolute URL of the feed

        Returns:
            Decoded JSON object

        Raises:
            NetworkFailure: transport error, timeout or non-2xx status
            MalformedPayload: empty body, invalid JSON, or a non-object document
        """
        try:
            response = self._get_client().get(resource)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("[FEED] HTTP %d for %s", e.response.status_code, resource)
            raise NetworkFailure(f"HTTP {e.response.status_code} for {resource}") from e
        except (httpx.RequestError, RuntimeError, OSError) as e:
            # RuntimeError: "Cannot send a request, as the client has been closed"
            logger.warning("[FEED] Request failed for %s: %s", resource, e)
            raise NetworkFailure(f"Request failed for {resource}: {e}") from e

        if not response.content.strip():
            raise MalformedPayload(f"Empty response from {resource}")

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedPayload(f"Invalid JSON from {resource}: {e}") from e

        if not isinstance(data, dict) or not data:
            raise MalformedPayload(f"Expected a JSON object from {resource}")

        logger.debug("[FETCH] %s", resource)
        return data

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "FeedClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
