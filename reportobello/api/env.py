"""
Environment API - Variables made available to templates while rendering.
"""

from typing import Any, Dict, Iterable
from urllib.parse import quote

import httpx

from ._http import HTTPClient


class EnvironmentAPI:
    """API for the account's rendering environment variables."""

    def __init__(self, http: HTTPClient):
        self._http = http

    async def set(
        self,
        variables: Dict[str, str],
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> None:
        """
        Set environment variables. The whole mapping goes out in one request.

        Args:
            variables: Variable names mapped to their values
            timeout: Optional per-call timeout
        """
        await self._http.request("POST", "env", json_data=dict(variables), timeout=timeout)

    async def delete(
        self,
        keys: Iterable[str],
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> None:
        """
        Delete environment variables by name.

        Each key is percent-encoded on its own, so a comma inside a key
        cannot be confused with the separator.

        Args:
            keys: Variable names to delete
            timeout: Optional per-call timeout
        """
        joined = ",".join(quote(key, safe="") for key in keys)
        await self._http.request("DELETE", f"env?keys={joined}", timeout=timeout)
