"""
Pure functions for request encoding and response parsing.

Functions for building URLs, query strings, request bodies and headers, and
for normalizing response bodies, without I/O dependencies beyond reading an
upload file.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote_plus, urlencode

from ..exceptions import InvalidParamsError
from ..models import FileUpload, FormFields, NestedGroup, Params

USER_AGENT = "discourse-api-python/1.0"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
LEGACY_CONTENT_TYPE = "multipart/form-data"
UPLOAD_MARKER = "uploadFile"

# kept literal in bracketed keys and comma separated lists
_BRACKET_SAFE = "[],"


def format_value(value: Any) -> str:
    """Render a scalar parameter value as form text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        raise InvalidParamsError(
            f"Cannot encode nested value as a flat field: {value!r}"
        )
    return str(value)


def flatten_params(
    fields: Mapping[str, Any], prefix: Optional[str] = None
) -> List[Tuple[str, str]]:
    """Flatten nested mappings and lists into bracketed key/value pairs.

    ``{"group": {"name": "a"}}`` becomes ``[("group[name]", "a")]`` and
    list items are indexed, ``tags[0]``, ``tags[1]``. None values are skipped.
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in fields.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            pairs.extend(flatten_params(value, name))
        elif isinstance(value, (list, tuple)):
            pairs.extend(flatten_params(dict(enumerate(value)), name))
        else:
            pairs.append((name, format_value(value)))
    return pairs


def encode_pairs(pairs: List[Tuple[str, str]]) -> str:
    """Form-urlencode pairs, keeping brackets and commas readable."""
    return urlencode(pairs, safe=_BRACKET_SAFE, quote_via=quote_plus)


def encode_form_fields(fields: Mapping[str, Any]) -> str:
    """Build an ``&``-joined ``key=value`` body with encoded values."""
    return "&".join(
        f"{key}={quote_plus(format_value(value))}" for key, value in fields.items()
    )


def encode_nested_group(fields: Mapping[str, Any]) -> str:
    """Build a bracketed form body, e.g. ``group[name]=foo``."""
    return encode_pairs(flatten_params(fields))


def build_query_string(
    params: Params, forced_params: Optional[Mapping[str, str]] = None
) -> str:
    """Build the GET query string, forced parameters last.

    A caller value for a forced key is overridden where it stands.
    """
    if isinstance(params, FileUpload):
        raise InvalidParamsError("File uploads cannot be sent with GET")

    merged: Dict[str, Any] = dict(params.fields)
    merged.update(forced_params or {})
    return encode_pairs(flatten_params(merged))


def build_url(protocol: str, host: str, path: str, query: str = "") -> str:
    """Build ``{protocol}://{host}{path}`` with an optional query string."""
    url = f"{protocol}://{host}{path}"
    if not query:
        return url
    separator = "&" if "?" in path else "?"
    return f"{url}{separator}{query}"


def build_auth_headers(api_key: Optional[str], acting_user: str) -> Dict[str, str]:
    """Build authentication headers."""
    return {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
        "Api-Key": api_key or "",
        "Api-Username": acting_user,
    }


def build_write_body(
    params: Params, legacy_content_type: bool = False
) -> Dict[str, Any]:
    """Build httpx request keyword arguments for a PUT/POST/DELETE body.

    Returns ``content`` plus a ``Content-Type`` header for form bodies, and
    ``files`` plus ``data`` for uploads so httpx writes the boundary.
    """
    if isinstance(params, FileUpload):
        path = Path(params.path)
        if not path.is_file():
            raise InvalidParamsError(
                f"Upload file not found: {params.path}", {"path": str(params.path)}
            )
        data = {"type": "upload"}
        data.update({k: format_value(v) for k, v in params.extra_fields.items()})
        return {
            "files": {"file": (params.filename, path.read_bytes(), params.mime_type)},
            "data": data,
            "headers": {},
        }

    if isinstance(params, NestedGroup):
        body = encode_nested_group(params.fields)
    else:
        body = encode_form_fields(params.fields)

    content_type = LEGACY_CONTENT_TYPE if legacy_content_type else FORM_CONTENT_TYPE
    return {
        "content": body.encode("utf-8"),
        "headers": {"Content-Type": content_type},
    }


def normalize_params(raw: Any) -> Params:
    """Map any accepted parameter shape to an explicit variant.

    Accepted shapes:
        - a FormFields, NestedGroup or FileUpload instance, returned as is
        - None or an empty list/mapping, meaning no parameters
        - a one-element list wrapping a flat mapping
        - a mapping with a nested ``group`` mapping
        - a mapping carrying the ``uploadFile`` marker and a
          ``file`` entry of ``(path, filename, mime_type)``
        - a flat mapping
    """
    if isinstance(raw, (FormFields, NestedGroup, FileUpload)):
        return raw
    if raw is None:
        return FormFields()

    if isinstance(raw, Mapping):
        if raw.get(UPLOAD_MARKER):
            return _legacy_upload(raw)
        if isinstance(raw.get("group"), Mapping):
            return NestedGroup(dict(raw))
        return FormFields(dict(raw))

    if isinstance(raw, (list, tuple)):
        if not raw:
            return FormFields()
        if isinstance(raw[0], Mapping):
            return FormFields(dict(raw[0]))

    raise InvalidParamsError(
        f"Unsupported parameter shape: {type(raw).__name__}",
        {"params": repr(raw)},
    )


def _legacy_upload(raw: Mapping[str, Any]) -> FileUpload:
    file_spec = raw.get("file")
    if isinstance(file_spec, FileUpload):
        return file_spec
    if not isinstance(file_spec, (list, tuple)) or len(file_spec) != 3:
        raise InvalidParamsError(
            "Upload parameters need file=(path, filename, mime_type)"
        )

    path, filename, mime_type = file_spec
    extra = {
        k: v for k, v in raw.items() if k not in (UPLOAD_MARKER, "file", "type")
    }
    return FileUpload(path, filename, mime_type, extra)


def parse_response_body(text: str) -> Any:
    """Return the parsed JSON value, or the text itself when it is not JSON."""
    try:
        return json.loads(text)
    except ValueError:
        return text


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Parse a Retry-After header given in seconds."""
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def describe_params(params: Params) -> str:
    """Render parameters as JSON for debug traces."""
    if isinstance(params, FileUpload):
        described: Dict[str, Any] = {
            "file": [str(params.path), params.filename, params.mime_type],
            "type": "upload",
        }
        described.update(params.extra_fields)
    else:
        described = dict(params.fields)
    return json.dumps(described, default=str)
