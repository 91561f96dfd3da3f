"""
Pure functions for the Discourse API client.

Request encoding, response parsing, SSO signing and event loop helpers kept
free of network I/O so they can be tested in isolation.
"""

from .encoding import (
    build_auth_headers,
    build_query_string,
    build_url,
    build_write_body,
    describe_params,
    encode_form_fields,
    encode_nested_group,
    flatten_params,
    normalize_params,
    parse_response_body,
    parse_retry_after,
)
from .sso import build_sso_params, build_sso_payload, sign_sso_payload
from .sync import (
    create_thread_local_loop,
    detect_event_loop_state,
    get_background_loop,
    run_in_background_loop,
)

__all__ = [
    "build_auth_headers",
    "build_query_string",
    "build_url",
    "build_write_body",
    "describe_params",
    "encode_form_fields",
    "encode_nested_group",
    "flatten_params",
    "normalize_params",
    "parse_response_body",
    "parse_retry_after",
    "build_sso_params",
    "build_sso_payload",
    "sign_sso_payload",
    "create_thread_local_loop",
    "detect_event_loop_state",
    "get_background_loop",
    "run_in_background_loop",
]
