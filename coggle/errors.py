"""
Error types raised by the Coggle client.

Validation errors are raised before any request is sent. Transport errors
wrap network failures, non-2xx responses and undecodable response bodies.
"""

from typing import Optional


class CoggleError(Exception):
    """Base class for all errors raised by this library."""


class ValidationError(CoggleError, ValueError):
    """Input rejected client-side; no request was made."""


class TextTooLongError(ValidationError):
    """Node text exceeds the maximum allowed length."""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"Node text is too long ({length} > {limit} characters)")


class InvalidOrganizationNameError(ValidationError):
    """Organization slug does not match the allowed pattern."""

    def __init__(self, organization: str):
        self.organization = organization
        super().__init__(f"Invalid organization name: {organization!r}")


class TransportError(CoggleError):
    """
    A request could not be completed or its response could not be decoded.

    Attributes:
        method: HTTP verb of the failed request
        endpoint: Server-relative path of the failed request
        status_code: HTTP status when the server answered, otherwise None
    """

    def __init__(self, message: str, method: str = "", endpoint: str = "",
                 status_code: Optional[int] = None):
        self.method = method
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(message)
