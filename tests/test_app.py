from fastapi.testclient import TestClient

from main import app
from app.client.identities import IdentityResolver
from app.client.meetings import MeetingsClient
from app.services.upstream import UpstreamClient


def test_lifespan_wires_clients_on_app_state():
    with TestClient(app) as client:
        assert isinstance(app.state.upstream_client, UpstreamClient)
        assert isinstance(app.state.meetings_client, MeetingsClient)
        assert isinstance(app.state.identity_resolver, IdentityResolver)
        assert client.get("/health").text == "OK"


def test_openapi_lists_proxy_routes():
    schema = TestClient(app).get("/openapi.json").json()

    assert "/api/meps/{mep_id}" in schema["paths"]
    assert "/api/cache/status" in schema["paths"]
    assert "/meetings/{meeting_id}" not in schema["paths"]
    assert "open-data API" in schema["info"]["description"]
