"""
Pytest fixtures for gateway tests
"""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.services.forwarding.gateway import ForwardingGateway
from app.services.webhook.client import WebhookClient

ASK_URL = "http://upstream.test/webhook/ask"
NOTES_URL = "http://upstream.test/webhook/notes"


class FakeUpstream:
    """Stands in for the n8n webhooks; records every request it receives."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.status = 200
        self.json: Any = {"ok": True}
        self.content: Optional[bytes] = None
        self.error: Optional[Exception] = None

    def reply(self, status: int, json: Any = None, content: Optional[bytes] = None) -> None:
        self.status = status
        self.json = json
        self.content = content

    def fail(self, error: Exception) -> None:
        self.error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status, content=self.content)
        if self.json is None:
            return httpx.Response(self.status)
        return httpx.Response(self.status, json=self.json)

    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        N8N_WEBHOOK_URL=ASK_URL,
        N8N_NOTES_WEBHOOK_URL=NOTES_URL,
    )


@pytest.fixture
def make_gateway(upstream):
    def _make(settings: Settings) -> ForwardingGateway:
        client = WebhookClient(
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            transport=httpx.MockTransport(upstream),
        )
        return ForwardingGateway(settings, client)
    return _make


@pytest.fixture
def make_client(make_gateway):
    def _make(settings: Settings) -> TestClient:
        return TestClient(create_app(settings, gateway=make_gateway(settings)))
    return _make


@pytest.fixture
def client(make_client, settings) -> TestClient:
    return make_client(settings)


@pytest.fixture
def ask_payload() -> Dict[str, Any]:
    return {"username": "u", "apiKey": "k", "question": "q"}


@pytest.fixture
def notes_payload() -> Dict[str, Any]:
    return {"username": "u", "apiKey": "k", "notes": [{"title": "t", "body": "b"}]}
