import json
from typing import Any, Dict, Optional

import httpx
import pytest

from discourse_api import DiscourseClient


@pytest.fixture
def client():
    return DiscourseClient("forum.example.com", api_key="test-key")


@pytest.fixture
def make_response():
    """Build real httpx responses; dicts and lists are sent as JSON."""

    def _make(
        status_code: int = 200,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        if body is None:
            text = ""
        elif isinstance(body, str):
            text = body
        else:
            text = json.dumps(body)
        return httpx.Response(status_code, text=text, headers=headers)

    return _make


@pytest.fixture
def upload_file(tmp_path):
    path = tmp_path / "logo.png"
    path.write_bytes(b"\x89PNG fake image bytes")
    return path


@pytest.fixture(scope="session")
def forum_server():
    from tests.test_server.server import ForumTestServer

    with ForumTestServer() as server:
        yield server


@pytest.fixture
def live_client(forum_server):
    return DiscourseClient(forum_server.host, api_key="live-key", protocol="http")
