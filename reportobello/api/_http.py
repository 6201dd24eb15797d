"""
Base HTTP client for the Reportobello API.

Handles the connection pool, authentication, and error translation.
"""

import logging
from typing import Optional, Dict, Any
from urllib.parse import urlsplit, urlunsplit

import httpx

from .. import __version__
from ..config import DEFAULT_SERVER_URL
from ..exceptions import APIError, ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_HOST = DEFAULT_SERVER_URL


def validate_base_url(base_url: str) -> str:
    """
    Check that a base URL is absolute and return it without a trailing slash.

    Raises:
        ConfigurationError: If the URL has no http(s) scheme or no host, or
            carries a query string or fragment
    """
    try:
        parts = urlsplit(base_url)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid base URL: {base_url!r}", details=str(e))

    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(
            f"Invalid base URL: {base_url!r}",
            details="Expected an absolute http:// or https:// URL"
        )

    # API paths are appended to the base URL, so it cannot carry its own query
    if parts.query or parts.fragment:
        raise ConfigurationError(
            f"Invalid base URL: {base_url!r}",
            details="The base URL must not contain a query string or fragment"
        )

    # Drops a bare trailing "?" or "#"
    return urlunsplit(parts._replace(query="", fragment="")).rstrip("/")


class HTTPClient:
    """
    Base HTTP client for the Reportobello API.

    Handles:
    - A lazily created, shared httpx.AsyncClient
    - Bearer authentication on every request
    - Following redirects (e.g. http to https)
    - Translating non-success responses into APIError

    API paths are appended to the base URL as given, so a path prefix is kept:
    "https://example.com/reports" sends requests to
    "https://example.com/reports/api/v1/...". This lets the service sit
    behind a reverse proxy under a sub-path.
    """

    API_VERSION = "v1"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            api_key: API key sent as the bearer token
            base_url: Service host. Defaults to the public Reportobello host.
            transport: Optional httpx transport (used by tests and custom setups)

        Raises:
            ConfigurationError: If the base URL is not an absolute URL
        """
        self._api_key = api_key
        self._server_url = validate_base_url(base_url or DEFAULT_HOST)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def server_url(self) -> str:
        """Service host the client talks to."""
        return self._server_url

    @property
    def base_url(self) -> str:
        """Get the base URL for API requests."""
        return f"{self._server_url}/api/{self.API_VERSION}/"

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the underlying async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={
                    "User-Agent": f"reportobello-python/{__version__}",
                    "Authorization": f"Bearer {self._api_key}",
                },
                transport=self._transport,
                follow_redirects=True,
            )

        return self._client

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Raise APIError for any non-success response."""
        logger.debug("Request: %s %s", response.request.method, response.request.url)
        logger.debug("Response: %d", response.status_code)

        if not response.is_success:
            raise APIError(response.text, status_code=response.status_code)

        return response

    async def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Any = None,
        content: Optional[str] = None,
        content_type: Optional[str] = None,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> httpx.Response:
        """
        Make one API request.

        Args:
            method: HTTP method
            endpoint: API endpoint relative to the base URL, already percent-encoded.
                May carry its own query string.
            params: Query parameters merged into the endpoint's query
            json_data: Value sent as the JSON body
            content: Raw text body
            content_type: Content-Type header for a raw body
            timeout: Per-call timeout in seconds or an httpx.Timeout

        Returns:
            The successful response

        Raises:
            APIError: If the service answers with a non-success status
        """
        url = self.base_url + endpoint.lstrip("/")
        headers = {}

        if content_type:
            headers["Content-Type"] = content_type

        kwargs: Dict[str, Any] = {"headers": headers, "timeout": timeout}
        if params is not None:
            kwargs["params"] = params
        if json_data is not None:
            kwargs["json"] = json_data
        if content is not None:
            kwargs["content"] = content.encode("utf-8")

        response = await self.client.request(method, url, **kwargs)

        return self._handle_response(response)

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HTTPClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
