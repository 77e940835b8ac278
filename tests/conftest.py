"""Shared fixtures: the real app wired to a scripted stand-in upstream."""
from __future__ import annotations

from typing import Callable, List

import httpx
import orjson
import pytest
from fastapi.testclient import TestClient

from generate_proxy.core.http_client import get_http_client
from generate_proxy.main import app


class ScriptedUpstream:
    """Answers outbound calls with a responder and records every request."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            500, json={"error": {"message": "no responder configured"}}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def payloads(self) -> list:
        return [orjson.loads(r.content) for r in self.requests]

    def models(self) -> list:
        return [p.get("model") for p in self.payloads()]


@pytest.fixture
def upstream() -> ScriptedUpstream:
    return ScriptedUpstream()


@pytest.fixture
def client(upstream):
    mock_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))

    async def _override():
        return mock_client

    app.dependency_overrides[get_http_client] = _override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_http_client, None)


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer sk-test-credential"}


@pytest.fixture
def base_body():
    return {
        "model": "4o-mini",
        "systemInstruction": "You are helpful",
        "userPrompt": "hi",
    }
