"""
Custom exceptions for the Discourse API client.
"""

from typing import Dict, Any, Optional


class DiscourseAPIError(Exception):
    """Base exception for client errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class RateLimitedError(DiscourseAPIError):
    """Raised when the forum answers with HTTP 429."""

    status_code = 429

    def __init__(
        self,
        message: str = "Rate limit",
        details: Optional[Dict[str, Any]] = None,
        retry_after: Optional[float] = None,
        payload: Any = None,
    ):
        super().__init__(message, details)
        self.retry_after = retry_after
        self.payload = payload


class TransportError(DiscourseAPIError):
    """Raised when the request never produced an HTTP response."""

    pass


class NetworkError(TransportError):
    """Raised when network operations fail."""

    pass


class TimeoutError(TransportError):
    """Raised when the forum does not answer within the timeout."""

    pass


class ApplicationStatusError(DiscourseAPIError):
    """Raised by APIResult.raise_for_status for non-2xx results."""

    def __init__(
        self,
        message: str,
        status_code: int,
        payload: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.payload = payload


class InvalidParamsError(DiscourseAPIError):
    """Raised when request parameters cannot be encoded."""

    pass


class SSOConfigurationError(DiscourseAPIError):
    """Raised when an SSO call is made without a shared secret."""

    pass
