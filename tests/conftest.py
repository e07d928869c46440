"""Shared test fixtures for pytest."""

import pytest
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import Response
from fastapi.testclient import TestClient
from pydantic import TypeAdapter

from storagemeta.client import MetadataClient
from storagemeta.metrics import metrics
from storagemeta.schemas import MetadataRequest

request_adapter = TypeAdapter(MetadataRequest)

ENDPOINT = "http://testserver/v1"
ADMIN_SECRET = "test-secret"


class FakeHasura:
    """Records metadata requests and answers them from a script.

    Requests are keyed as ``track:<table>`` for pg_track_table and
    ``<table>.<relationship>`` for relationships. Unscripted requests get
    a 200.
    """

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.headers: list[dict[str, str]] = []
        self.responses: dict[str, tuple[int, str]] = {}

    @staticmethod
    def key_for(payload: dict) -> str:
        args = payload["args"]
        table = args["table"]["name"]
        if payload["type"] == "pg_track_table":
            return f"track:{table}"
        return f"{table}.{args['name']}"

    def respond(self, key: str, status_code: int, body: str) -> None:
        self.responses[key] = (status_code, body)

    @property
    def keys(self) -> list[str]:
        return [self.key_for(payload) for payload in self.calls]


def create_fake_hasura(state: FakeHasura) -> FastAPI:
    app = FastAPI()

    @app.post("/v1/metadata")
    async def metadata(request: Request) -> Response:
        payload = await request.json()
        # Reject bodies a real metadata API would not understand.
        request_adapter.validate_python(payload)
        state.calls.append(payload)
        state.headers.append(dict(request.headers))
        status_code, body = state.responses.get(
            state.key_for(payload), (200, '{"message":"success"}')
        )
        return Response(content=body, status_code=status_code, media_type="application/json")

    return app


@pytest.fixture
def hasura():
    """Scriptable fake of the Hasura metadata API."""
    return FakeHasura()


@pytest.fixture
def hasura_http(hasura):
    """httpx-compatible client wired to the fake Hasura app."""
    with TestClient(create_fake_hasura(hasura)) as test_client:
        yield test_client


@pytest.fixture
def metadata_client(hasura_http):
    """MetadataClient talking to the fake Hasura app."""
    return MetadataClient(ENDPOINT, ADMIN_SECRET, http_client=hasura_http)


@pytest.fixture(autouse=True)
def isolate_globals():
    """Reset metrics and structlog configuration around each test."""
    metrics.reset()
    yield
    metrics.reset()
    structlog.reset_defaults()
