"""HTTP client shared by the backend integrations."""

import logging
from typing import Any
from urllib.parse import urljoin

import httpx

from integrations.auth import AuthHandler
from schemas.errors import AuthorizationError, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.starterkit.dev"


class BackendClient:
    """Thin wrapper over httpx for the starterkit backend.

    Maps transport and HTTP failures onto the error taxonomy: 401/403 become
    ``AuthorizationError``, everything else ``NetworkError``.

    Example:
        >>> client = BackendClient(auth=AuthHandler())
        >>> client.request("GET", "/packages/read-all")
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        auth: AuthHandler | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            api_url: Base URL for the backend API.
            auth: Credential source for the Authorization header.
            timeout: Request timeout in seconds.
            transport: Custom httpx transport (used by tests).
        """
        self.api_url = api_url.rstrip("/")
        self.auth = auth or AuthHandler()
        self.timeout = timeout
        self.transport = transport

    def url_for(self, endpoint: str) -> str:
        return urljoin(self.api_url + "/", endpoint.lstrip("/"))

    def _client(self, timeout: float | None = None) -> httpx.Client:
        return httpx.Client(
            timeout=timeout or self.timeout,
            follow_redirects=True,
            transport=self.transport,
        )

    def send(
        self,
        method: str,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send a request and return the raw response.

        Raises:
            AuthorizationError: On 401/403.
            NetworkError: On any other HTTP or transport failure.
        """
        url = self.url_for(endpoint)
        request_headers = {**self.auth.headers(), **(headers or {})}

        logger.debug("%s %s", method, url)
        try:
            with self._client(timeout) as client:
                response = client.request(method, url, json=json_data, headers=request_headers)
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code in (401, 403):
                raise AuthorizationError(
                    "Invalid or expired credentials. Please log in again."
                ) from e
            raise NetworkError(f"API error: {status_code}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"Connection error: {e}") from e
        except httpx.InvalidURL as e:
            raise NetworkError(f"Invalid backend URL {url!r}: {e}") from e

    def request(
        self,
        method: str,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and decode the JSON body."""
        response = self.send(method, endpoint, json_data=json_data)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(f"Invalid response from {endpoint}: {e}") from e
