"""Authenticated request dispatch for the Stormpath API.

Every request goes out with the client's User-Agent, JSON ``Accept`` and
``Content-Type`` headers and HTTP Basic auth built from the API key pair.
Paths starting with ``/`` are resolved against the versioned base URL; any
other target (a resource href, a redirect ``Location``) is sent as-is.

The dispatcher never follows redirects and never retries: callers see the
raw response, and transport failures (``httpx.TransportError``) propagate
unchanged.

Example:
    ```python
    from stormpath_client.auth import ApiKeyPair
    from stormpath_client.transport import RequestDispatcher

    async with RequestDispatcher(ApiKeyPair("id", "secret")) as dispatcher:
        response = await dispatcher.dispatch("GET", "/tenants/current")
        assert response.status_code == 302
    ```
"""

import logging
from typing import Any

import httpx

from stormpath_client.auth.keypair import ApiKeyPair
from stormpath_client.config import ClientSettings

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


class RequestDispatcher:
    """Send single authenticated requests to the Stormpath API.

    Args:
        keypair: Credentials for HTTP Basic authentication.
        settings: Base URL, timeout and User-Agent. Defaults to ``ClientSettings()``.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        keypair: ApiKeyPair,
        *,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.keypair = keypair
        self.settings = settings or ClientSettings()
        self._client = httpx.AsyncClient(
            auth=keypair.to_auth(),
            headers={"User-Agent": self.settings.user_agent, "Accept": JSON_MEDIA_TYPE},
            timeout=httpx.Timeout(self.settings.timeout),
            follow_redirects=False,
            transport=transport,
        )

    async def __aenter__(self) -> "RequestDispatcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def build_url(self, path_or_url: str) -> str:
        """Resolve a ``/``-prefixed path against the base URL; pass anything else through."""
        if path_or_url.startswith("/"):
            return self.settings.base_url + path_or_url
        return path_or_url

    async def dispatch(
        self,
        method: str,
        path_or_url: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one request and return the response without interpreting its status.

        Args:
            method: HTTP verb.
            path_or_url: ``/``-prefixed API path or absolute URL.
            json: Optional body, encoded as JSON.
            params: Optional query parameters.

        Returns:
            The response with its body read.

        Raises:
            httpx.TransportError: DNS, connection and timeout failures.
        """
        url = self.build_url(path_or_url)
        headers = {"Content-Type": JSON_MEDIA_TYPE} if json is not None else None

        response = await self._client.request(method, url, json=json, params=params, headers=headers)
        logger.debug(f"{method} {response.request.url} -> {response.status_code}")
        return response
