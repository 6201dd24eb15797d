"""
Custom exceptions for the Reportobello client.
"""

from typing import Optional

import httpx


class ReportobelloError(Exception):
    """Base exception for all Reportobello client errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigurationError(ReportobelloError):
    """Raised when the client or CLI configuration is invalid."""
    pass


class APIError(ReportobelloError):
    """
    Raised when the service answers with a non-success status.

    The message is the response body exactly as the server sent it.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(ReportobelloError):
    """Raised when a successful response body does not have the expected shape."""
    pass


class EncodeError(ReportobelloError):
    """Raised when report data cannot be serialized to JSON."""
    pass


# Network failures come straight from httpx and are not wrapped.
TransportError = httpx.TransportError
