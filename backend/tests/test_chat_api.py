"""E2E tests for the chat endpoints via FastAPI TestClient."""
import logging
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from aichat.config import Settings
from aichat.errors import ProviderConfigurationError
from aichat.llm.base import ProviderId
from aichat.main import create_app

from .conftest import FakeProvider


@pytest.fixture()
def client(settings, fake_providers):
    app = create_app(settings, providers=fake_providers.values())
    with TestClient(app) as c:
        yield c


def _assert_error(resp, status: int, code: str) -> dict:
    assert resp.status_code == status
    body = resp.json()
    assert body["status"] == status
    assert body["errorCode"] == code
    datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))
    return body


# ═══════════════════════════════════════════════════════════════════════
# POST /api/chat
# ═══════════════════════════════════════════════════════════════════════


class TestPostChat:
    def test_default_provider(self, client, fake_providers):
        resp = client.post("/api/chat", json={"message": "Hello"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["provider"] == "OLLAMA"
        assert body["message"] == "Hello"
        assert body["response"] == fake_providers[ProviderId.OLLAMA].reply
        assert isinstance(body["timestamp"], int)

    def test_explicit_provider_any_case(self, client, fake_providers):
        resp = client.post("/api/chat", json={"message": "Hello", "llm": "Gemini"})
        assert resp.status_code == 200
        assert resp.json()["provider"] == "GEMINI"
        assert fake_providers[ProviderId.GEMINI].calls == ["Hello"]
        assert fake_providers[ProviderId.OLLAMA].calls == []

    def test_blank_message(self, client, fake_providers):
        resp = client.post("/api/chat", json={"message": "   ", "llm": "openai"})
        body = _assert_error(resp, 400, "VALIDATION_FAILED")
        assert body["message"] == "message: Message cannot be empty"
        assert all(not p.calls for p in fake_providers.values())

    def test_missing_message(self, client):
        resp = client.post("/api/chat", json={"llm": "openai"})
        body = _assert_error(resp, 400, "VALIDATION_FAILED")
        assert body["message"].startswith("message:")

    def test_unknown_provider(self, client, fake_providers):
        resp = client.post("/api/chat", json={"message": "Hi", "llm": "unknown-llm"})
        body = _assert_error(resp, 400, "BAD_REQUEST")
        assert body["message"] == "Unsupported LLM type: unknown-llm"
        assert all(not p.calls for p in fake_providers.values())

    def test_upstream_failure_hides_provider_error(self, settings, fake_providers):
        fake_providers[ProviderId.OPENAI] = FakeProvider(
            ProviderId.OPENAI, error=RuntimeError("Incorrect API key provided: sk-secret")
        )
        app = create_app(settings, providers=fake_providers.values())
        with TestClient(app) as c:
            resp = c.post("/api/chat", json={"message": "Explain X", "llm": "openai"})
        body = _assert_error(resp, 503, "AI_SERVICE_UNAVAILABLE")
        assert body["message"] == "AI service is unavailable"
        assert "sk-secret" not in resp.text


# ═══════════════════════════════════════════════════════════════════════
# GET /api/chat
# ═══════════════════════════════════════════════════════════════════════


class TestGetChat:
    def test_query_params(self, client, fake_providers):
        resp = client.get("/api/chat", params={"message": "Hello", "llm": "ANTHROPIC"})
        assert resp.status_code == 200
        assert resp.json()["provider"] == "ANTHROPIC"
        assert fake_providers[ProviderId.ANTHROPIC].calls == ["Hello"]

    def test_blank_llm_uses_default(self, client):
        resp = client.get("/api/chat", params={"message": "Hello", "llm": ""})
        assert resp.status_code == 200
        assert resp.json()["provider"] == "OLLAMA"

    def test_blank_message(self, client):
        resp = client.get("/api/chat", params={"message": " "})
        body = _assert_error(resp, 400, "CONSTRAINT_VIOLATION")
        assert body["message"] == "message: Message cannot be empty"

    def test_missing_message(self, client):
        resp = client.get("/api/chat")
        _assert_error(resp, 400, "CONSTRAINT_VIOLATION")


# ═══════════════════════════════════════════════════════════════════════
# App wiring
# ═══════════════════════════════════════════════════════════════════════


class TestAppWiring:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {
            "status": "ok",
            "defaultProvider": "OLLAMA",
            "providers": ["OPENAI", "OLLAMA", "GEMINI", "ANTHROPIC"],
        }

    def test_unknown_route_uses_error_shape(self, client):
        resp = client.get("/api/nope")
        _assert_error(resp, 404, "HTTP_ERROR")

    def test_unexpected_error_is_500(self, settings, fake_providers):
        app = create_app(settings, providers=fake_providers.values())

        @app.get("/boom")
        def boom():
            raise KeyError("internal detail")

        with TestClient(app, raise_server_exceptions=False) as c:
            resp = c.get("/boom")
        body = _assert_error(resp, 500, "INTERNAL_SERVER_ERROR")
        assert "internal detail" not in body["message"]

    def test_unregistered_default_fails_startup(self):
        settings = Settings(_env_file=None, default_provider="openai")
        app = create_app(settings, providers=[FakeProvider(ProviderId.OLLAMA)])
        with pytest.raises(ProviderConfigurationError):
            with TestClient(app):
                pass

    def test_logging_configured_on_startup_not_on_build(self, settings, fake_providers, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        app = create_app(settings, providers=fake_providers.values())
        assert calls == []
        with TestClient(app):
            pass
        assert len(calls) == 1
        assert calls[0]["level"] == "INFO"
