"""
Reportobello - Python client and CLI for the Reportobello report rendering service.
"""

__version__ = "0.1.0"
__prog_name__ = "reportobello"

from .api import ReportobelloAPIClient, Template, DEFAULT_HOST
from .exceptions import (
    ReportobelloError,
    ConfigurationError,
    APIError,
    DecodeError,
    EncodeError,
    TransportError,
)

__all__ = [
    "__version__",
    "ReportobelloAPIClient",
    "Template",
    "DEFAULT_HOST",
    "ReportobelloError",
    "ConfigurationError",
    "APIError",
    "DecodeError",
    "EncodeError",
    "TransportError",
]
