"""
Pure functions for DiscourseConnect (SSO) payloads.
"""

import base64
import hashlib
import hmac
from typing import Any, Dict, Mapping, Optional

from .encoding import encode_pairs, flatten_params


def build_sso_params(
    email: str, username: str, extra: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """Merge email and username with extra SSO fields, extras winning."""
    params: Dict[str, Any] = {"email": email, "username": username}
    if extra:
        params.update(extra)
    return params


def build_sso_payload(params: Mapping[str, Any]) -> str:
    """Base64 encode the form-urlencoded SSO parameters."""
    query = encode_pairs(flatten_params(params))
    return base64.b64encode(query.encode("utf-8")).decode("ascii")


def sign_sso_payload(payload: str, secret: str) -> str:
    """Hex HMAC-SHA256 of the payload under the shared secret."""
    return hmac.new(
        secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256
    ).hexdigest()
