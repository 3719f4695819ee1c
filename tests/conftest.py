"""Shared fixtures: a scripted Graph API behind httpx.MockTransport."""

import os
import sys
from pathlib import Path

import httpx
import pytest

root = Path(__file__).parent.parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

# throttling would make request counts matter between tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

from fastapi.testclient import TestClient  # noqa: E402

from app import app  # noqa: E402
from graph_api.client import UpstreamClient, get_upstream_client  # noqa: E402


class FakeGraph:
    """Answers by "host/path". Values are a JSON payload, a (status, payload) pair, or raw text."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        key = f"{request.url.host}{request.url.path}"
        if key not in self.responses:
            return httpx.Response(404, json={"error": {"message": f"unknown path {key}"}})
        value = self.responses[key]
        status = 200
        if isinstance(value, tuple):
            status, value = value
        if isinstance(value, str):
            return httpx.Response(status, text=value)
        return httpx.Response(status, json=value)

    def paths(self) -> list[str]:
        return [f"{r.url.host}{r.url.path}" for r in self.calls]


def linked_account(username="acct", media=None):
    """Responses for the full credential -> pages -> account -> profile -> media chain."""
    return {
        "graph.facebook.com/me/accounts": {"data": [{"id": "p1", "access_token": "pt1", "name": "Page"}]},
        "graph.facebook.com/p1": {"id": "p1", "instagram_business_account": {"id": "ig1"}},
        "graph.instagram.com/ig1": {
            "id": "ig1",
            "username": username,
            "name": "Acct Display",
            "profile_picture_url": "https://cdn.example.com/ig1.jpg",
            "followers_count": 1250,
            "follows_count": 300,
            "media_count": 45,
        },
        "graph.instagram.com/ig1/media": {"data": media if media is not None else []},
    }


def media_record(i: int, media_type: str = "IMAGE") -> dict:
    return {
        "id": f"m{i}",
        "caption": f"post {i}",
        "media_url": f"https://cdn.example.com/m{i}.jpg",
        "media_type": media_type,
        "timestamp": f"2024-01-{10 + i:02d}T18:30:00+0000",
        "like_count": 100 + i,
        "comments_count": i,
        "permalink": f"https://www.instagram.com/p/m{i}/",
    }


@pytest.fixture
def graph():
    return FakeGraph()


@pytest.fixture
def upstream(graph):
    return UpstreamClient(transport=httpx.MockTransport(graph))


@pytest.fixture
def api(upstream):
    app.dependency_overrides[get_upstream_client] = lambda: upstream
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
