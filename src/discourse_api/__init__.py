"""
Discourse API client

Python client for the Discourse forum REST API.
"""

from .client import DiscourseClient
from .config import ClientSettings, setup_logging
from .executor import RequestExecutor
from .models import APIResult, FileUpload, FormFields, NestedGroup
from .exceptions import (
    DiscourseAPIError,
    RateLimitedError,
    TransportError,
    NetworkError,
    TimeoutError,
    ApplicationStatusError,
    InvalidParamsError,
    SSOConfigurationError,
)

__version__ = "1.0.0"

__all__ = [
    "DiscourseClient",
    "RequestExecutor",
    "ClientSettings",
    "setup_logging",
    "APIResult",
    "FormFields",
    "NestedGroup",
    "FileUpload",
    "DiscourseAPIError",
    "RateLimitedError",
    "TransportError",
    "NetworkError",
    "TimeoutError",
    "ApplicationStatusError",
    "InvalidParamsError",
    "SSOConfigurationError",
]
