import json
import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure the backend package is importable without installation
backend_root = Path(__file__).resolve().parents[1]
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))

# Provider settings are read when cv_adapter.config is imported; pin them so a
# developer's shell (or .env file) cannot redirect the tests.
os.environ.update({
    "OPENAI_BASE_URL": "https://api.openai.com/v1",
    "ANTHROPIC_BASE_URL": "https://api.anthropic.com/v1",
    "OPENAI_DEFAULT_MODEL": "gpt-4-turbo-preview",
    "CLAUDE_DEFAULT_MODEL": "claude-3-5-sonnet-20241022",
    "ANTHROPIC_VERSION": "2023-06-01",
    "CLAUDE_MAX_TOKENS": "4096",
    "OPENAI_TEMPERATURE": "0.7",
})


class FakeResponse:
    def __init__(self, status_code=200, payload=None, raw=None, content_type="application/json"):
        self.status_code = status_code
        self.headers = {"content-type": content_type}
        self._payload = payload
        self._raw = raw

    @property
    def content(self):
        if self._raw is not None:
            return self._raw.encode("utf-8")
        return json.dumps(self._payload).encode("utf-8")

    def json(self):
        if self._raw is not None:
            return json.loads(self._raw)
        return self._payload


class FakeHTTP:
    """Stands in for httpx.AsyncClient and records every POST."""

    def __init__(self):
        self.calls = []
        self.client_kwargs = []
        self.response = FakeResponse(200, {})
        self.error = None

    def respond(self, payload=None, status_code=200, raw=None, content_type="application/json"):
        self.response = FakeResponse(status_code, payload, raw, content_type)

    def fail(self, exc):
        self.error = exc

    def client_class(self):
        http = self

        class FakeAsyncClient:
            def __init__(self, *args, **kwargs):
                http.client_kwargs.append(kwargs)

            async def __aenter__(self):
                return self

            async def __aexit__(self, exc_type, exc, tb):
                return False

            async def post(self, url, json=None, content=None, headers=None):
                http.calls.append({"url": url, "json": json, "content": content, "headers": headers})
                if http.error is not None:
                    raise http.error
                return http.response

        return FakeAsyncClient


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    # Avoid accidental usage of real API keys during tests
    for name in ("CV_PROVIDER", "CV_API_KEY", "CV_MODEL", "PROVIDER_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_http(monkeypatch):
    """Patch httpx.AsyncClient used by the provider transport and the relay."""
    from cv_adapter import providers  # type: ignore

    http = FakeHTTP()
    # Both modules look the class up on the shared httpx module
    monkeypatch.setattr(providers.httpx, "AsyncClient", http.client_class())
    return http


@pytest.fixture
def client():
    """Provide a FastAPI TestClient for the backend app."""
    from cv_adapter.main import app  # type: ignore

    return TestClient(app)


def openai_reply(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def claude_reply(text):
    return {"content": [{"type": "text", "text": text}]}


@pytest.fixture
def make_openai_reply():
    return openai_reply


@pytest.fixture
def make_claude_reply():
    return claude_reply
