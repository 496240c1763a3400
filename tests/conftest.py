"""
Shared fixtures: settings and a scripted in-memory transport.
"""

import json

import pytest

from atol_online.core.cache import MemoryTokenCache
from atol_online.core.config import AtolSettings
from atol_online.core.transport import TransportResponse


class FakeTransport:
    """Replays queued responses and records every request it receives."""

    def __init__(self):
        self.responses = []
        self.requests = []

    def queue(self, body, status_code: int = 200):
        text = body if isinstance(body, str) else json.dumps(body)
        self.responses.append(TransportResponse(status_code=status_code, text=text))
        return self

    def fail(self, error: Exception):
        self.responses.append(error)
        return self

    def request(self, method, url, headers, body=None):
        self.requests.append({
            "method": method,
            "url": url,
            "headers": dict(headers),
            "body": json.loads(body) if body else None,
        })
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def urls(self):
        return [r["url"] for r in self.requests]


@pytest.fixture
def settings():
    return AtolSettings(
        login="shop-login",
        password="shop-secret",
        group_code="group_1",
        host="https://atol.example",
    )


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def cache():
    return MemoryTokenCache()
