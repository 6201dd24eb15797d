"""
Reportobello API Client Package.

Structure:
    - client.py: Main ReportobelloAPIClient facade
    - _http.py: Base async HTTP client with auth and error handling
    - templates.py: Template upload, versions and report builds
    - env.py: Environment variables
    - models.py: Template value type and build payload

Usage:
    from reportobello.api import ReportobelloAPIClient

    async with ReportobelloAPIClient(api_key) as client:
        url = await client.run_report("invoice", {"total": 42})
"""

from .client import ReportobelloAPIClient, get_client
from ._http import HTTPClient, DEFAULT_HOST
from .templates import TemplatesAPI
from .env import EnvironmentAPI
from .models import Template

__all__ = [
    # Main client
    "ReportobelloAPIClient",
    "get_client",
    # HTTP layer
    "HTTPClient",
    "DEFAULT_HOST",
    # Domain APIs
    "TemplatesAPI",
    "EnvironmentAPI",
    # Models
    "Template",
]
