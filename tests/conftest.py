import json
import sys
from pathlib import Path

import httpx
import pytest


# Ensure `import core...` / `import screens...` resolve when tests run from repo root.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from core.api import ApiClient  # noqa: E402

BASE_URL = "http://api.test"


@pytest.fixture
def store():
    """Plain dict standing in for st.session_state."""
    return {}


class FakeBackend:
    """
    Routes `(METHOD, path)` to canned `(status, body)` replies and keeps
    every request it saw, for assertions on URL, headers and body.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def reply(self, method, path, body=None, status=200, text=None):
        """JSON `body`, or a plain-text `text` body; neither gives an empty reply."""
        self.routes[(method, path)] = (status, body, text)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body, text = self.routes.get((request.method, request.url.path), (404, {"detail": "Not found."}, None))
        if text is not None:
            return httpx.Response(status, text=text)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content or b"null")

    def client(self, segment, store):
        return ApiClient(
            segment,
            store=store,
            base_url=BASE_URL,
            timeout=5.0,
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture
def backend():
    return FakeBackend()
