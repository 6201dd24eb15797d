"""
Templates API - Template upload, version history and report builds.
"""

import json
import logging
from typing import Any, Dict, List
from urllib.parse import quote, urlsplit

import httpx

from ._http import HTTPClient
from .models import Template, JSON_CONTENT_TYPE, TYPST_CONTENT_TYPE, encode_build_payload
from ..exceptions import DecodeError

logger = logging.getLogger(__name__)


def template_path(name: str) -> str:
    """Endpoint for a template, with the name encoded as a single path segment."""
    return f"template/{quote(name, safe='')}"


class TemplatesAPI:
    """
    API for template management and report builds.

    Handles:
    - Uploading template source
    - Listing the stored versions of a template
    - Building a report and getting back the PDF's URL
    """

    def __init__(self, http: HTTPClient):
        """
        Initialize Templates API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    async def upload(
        self,
        name: str,
        content: str,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> None:
        """
        Upload a template. Each upload creates a new version on the service.

        Args:
            name: Template name
            content: Typst template source, sent as-is
            timeout: Optional per-call timeout
        """
        await self._http.request(
            "POST",
            template_path(name),
            content=content,
            content_type=TYPST_CONTENT_TYPE,
            timeout=timeout,
        )

    async def get_versions(
        self,
        name: str,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> List[Template]:
        """
        Get every stored version of a template.

        The order is whatever the service returns; it is not sorted here.

        Args:
            name: Template name
            timeout: Optional per-call timeout

        Returns:
            List of Template versions

        Raises:
            DecodeError: If the body is not a JSON array of templates
        """
        response = await self._http.request("GET", template_path(name), timeout=timeout)

        try:
            items = json.loads(response.text)
        except ValueError as e:
            raise DecodeError(f"Template versions response is not valid JSON: {e}", details=response.text)

        if not isinstance(items, list):
            raise DecodeError("Template versions response is not a JSON array", details=response.text)

        return [Template.from_dict(item) for item in items]

    async def build(
        self,
        name: str,
        data: Any,
        preview: bool = False,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> str:
        """
        Build a report and return the URL of the generated PDF.

        Args:
            name: Template name
            data: JSON-serializable report data; dataclass instances are converted
            preview: Build a preview instead of a recorded report
            timeout: Optional per-call timeout

        Returns:
            Absolute URL of the PDF

        Raises:
            EncodeError: If the data cannot be serialized to JSON
            DecodeError: If the body is not an absolute URL
        """
        params: Dict[str, str] = {"justUrl": ""}
        if preview:
            params["preview"] = ""

        body = encode_build_payload(data)
        logger.debug("Build request body: %s", body)

        response = await self._http.request(
            "POST",
            f"{template_path(name)}/build",
            params=params,
            content=body,
            content_type=JSON_CONTENT_TYPE,
            timeout=timeout,
        )

        url = response.text.strip()
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            raise DecodeError("Build response is not an absolute URL", details=response.text)

        return url
