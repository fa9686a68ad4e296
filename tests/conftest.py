import httpx
import pytest
from fastapi.testclient import TestClient

from main import app
from app.client.identities import IdentityResolver
from app.client.meetings import MeetingsClient
from app.core.dependencies import (
    get_cache,
    get_identity_resolver,
    get_meetings_client,
    get_upstream_client,
)
from app.services.upstream import UpstreamClient
from app.utils.caching import ResponseCache

UPSTREAM = "https://data.europarl.europa.eu/api/v2"


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class StubUpstream:
    """Answers upstream requests from a path table and records every request."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes = {}

    def add(self, path, status_code=200, json=None, text=None, headers=None, error=None):
        self.routes[path] = dict(
            status_code=status_code, json=json, text=text, headers=headers, error=error
        )

    def calls(self, path=None) -> int:
        return len([r for r in self.requests if path is None or r.url.path == path])

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(200, json={"data": []})
        if route["error"] is not None:
            raise route["error"]
        if route["text"] is not None:
            return httpx.Response(
                route["status_code"], text=route["text"], headers=route["headers"]
            )
        body = route["json"](request) if callable(route["json"]) else route["json"]
        return httpx.Response(route["status_code"], json=body, headers=route["headers"])


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def response_cache(clock):
    return ResponseCache(retention_seconds=7200, clock=clock)


@pytest.fixture
def upstream():
    return StubUpstream()


@pytest.fixture
def upstream_client(upstream):
    return UpstreamClient(httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler)))


@pytest.fixture
def client(response_cache, upstream_client):
    """TestClient whose proxy talks to the stub and whose pages talk to the proxy."""
    meetings_client = MeetingsClient(
        httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://proxy")
    )
    resolver = IdentityResolver(meetings_client.person)

    app.dependency_overrides[get_cache] = lambda: response_cache
    app.dependency_overrides[get_upstream_client] = lambda: upstream_client
    app.dependency_overrides[get_meetings_client] = lambda: meetings_client
    app.dependency_overrides[get_identity_resolver] = lambda: resolver
    yield TestClient(app)
    app.dependency_overrides.clear()
