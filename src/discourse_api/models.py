"""
Data models for requests and results.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import ApplicationStatusError


@dataclass(frozen=True)
class FormFields:
    """
    Flat key/value parameters.

    Sent in the query string for GET and as an ``&``-joined
    ``key=value`` body for writes. Keys are written verbatim so bracketed
    names such as ``post[raw]`` reach the forum unchanged.

    Example:
        >>> FormFields({"name": "general", "color": "cc2222"})
    """

    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NestedGroup:
    """
    Parameters containing nested mappings, flattened to bracketed keys.

    Used by the group create and edit endpoints, which expect
    ``group[name]=...&group[usernames]=...``.
    """

    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FileUpload:
    """
    A file sent as a multipart body.

    Attributes:
        path: Local path of the file to read
        filename: Filename announced in the multipart part
        mime_type: Declared MIME type of the part
        extra_fields: Additional form fields sent next to the file
    """

    path: Union[str, Path]
    filename: str
    mime_type: str
    extra_fields: Mapping[str, Any] = field(default_factory=dict)


Params = Union[FormFields, NestedGroup, FileUpload]


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to issue one request. Built per call."""

    method: str
    path: str
    params: Params
    acting_user: str


@dataclass
class APIResult:
    """
    Normalized response from the forum.

    ``payload`` is the parsed JSON value when the body is valid JSON and the
    verbatim body text otherwise, so callers must be ready for both. Any
    status other than 429 comes back as a result; check ``status_code`` or
    call ``raise_for_status()``.

    Attributes:
        status_code: HTTP status code of the response
        payload: Parsed JSON value or raw response text

    Example:
        >>> result = await client.get_topic(42)
        >>> if result.is_success:
        ...     print(result.payload["title"])
    """

    status_code: int
    payload: Any = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_structured(self) -> bool:
        return not isinstance(self.payload, str)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a key in an object payload, returning default otherwise."""
        if isinstance(self.payload, dict):
            return self.payload.get(key, default)
        return default

    def raise_for_status(self) -> "APIResult":
        """Raise ApplicationStatusError unless the status is 2xx."""
        if self.is_success:
            return self

        details: Dict[str, Any] = {}
        message: Optional[str] = None
        if isinstance(self.payload, dict):
            errors = self.payload.get("errors")
            if isinstance(errors, list) and errors:
                message = "; ".join(str(e) for e in errors)
            elif "error" in self.payload:
                message = str(self.payload["error"])
            details = dict(self.payload)
        elif isinstance(self.payload, str) and self.payload:
            message = self.payload

        raise ApplicationStatusError(
            f"HTTP {self.status_code}: {message or 'request failed'}",
            status_code=self.status_code,
            payload=self.payload,
            details=details,
        )
