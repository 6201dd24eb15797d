"""
Reportobello API Client - Main facade for all API operations.

Offers both domain-specific sub-clients and flat convenience methods.
"""

from typing import Any, Dict, Iterable, List, Optional

import httpx

from ..config import ReportobelloConfig, get_config
from ._http import HTTPClient
from .env import EnvironmentAPI
from .models import Template
from .templates import TemplatesAPI


class ReportobelloAPIClient:
    """
    Async client for the Reportobello report rendering service.

    Usage:
        async with ReportobelloAPIClient("rbo_...") as client:
            await client.upload_template("invoice", source)
            url = await client.run_report("invoice", {"total": 42})

    Domain-specific sub-clients are also available:
        await client.templates.get_versions("invoice")
        await client.env.set({"COMPANY": "ACME"})
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the API client.

        Args:
            api_key: Reportobello API key
            base_url: Service host (default: https://reportobello.com)
            transport: Optional httpx transport

        Raises:
            ConfigurationError: If base_url is not an absolute URL
        """
        self._http = HTTPClient(api_key, base_url, transport=transport)

        self.templates = TemplatesAPI(self._http)
        self.env = EnvironmentAPI(self._http)

    @property
    def server_url(self) -> str:
        """Get the service host."""
        return self._http.server_url

    @property
    def base_url(self) -> str:
        """Get the base URL for API requests."""
        return self._http.base_url

    # ========== Templates ==========

    async def upload_template(
        self,
        name: str,
        content: str,
        *,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> None:
        """Upload a new version of a template."""
        await self.templates.upload(name, content, timeout=timeout)

    async def get_template_versions(
        self,
        name: str,
        *,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> List[Template]:
        """Get all versions of a template, in the order the service returns them."""
        return await self.templates.get_versions(name, timeout=timeout)

    async def run_report(
        self,
        template_name: str,
        data: Any,
        preview: bool = False,
        *,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> str:
        """Build a report and return the URL of the PDF."""
        return await self.templates.build(template_name, data, preview, timeout=timeout)

    # ========== Environment Variables ==========

    async def set_environment_variables(
        self,
        variables: Dict[str, str],
        *,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> None:
        """Set environment variables used while rendering."""
        await self.env.set(variables, timeout=timeout)

    async def delete_environment_variables(
        self,
        keys: Iterable[str],
        *,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> None:
        """Delete environment variables by name."""
        await self.env.delete(keys, timeout=timeout)

    # ========== Lifecycle ==========

    async def aclose(self) -> None:
        """Close the HTTP connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> "ReportobelloAPIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


def get_client(config: Optional[ReportobelloConfig] = None) -> ReportobelloAPIClient:
    """
    Get an API client instance from the stored configuration.

    Args:
        config: Optional configuration. Uses the global config if not provided.

    Returns:
        ReportobelloAPIClient instance
    """
    config = config or get_config()
    return ReportobelloAPIClient(config.api_key, config.server_url)
