"""Tests for the completions proxy endpoint."""

import pytest

from api import app
from api.dependencies import get_openrouter_client
from providers.openrouter import UpstreamResponseError


class FakeOpenRouterClient:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt: str):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def install_client():
    """Swap the OpenRouter client for a fake one."""

    def install(fake: FakeOpenRouterClient) -> FakeOpenRouterClient:
        app.dependency_overrides[get_openrouter_client] = lambda: fake
        return fake

    yield install
    app.dependency_overrides.pop(get_openrouter_client, None)


class TestCompletions:
    def test_requires_session(self, client, install_client):
        fake = install_client(FakeOpenRouterClient(reply={}))

        response = client.post("/api/completions", json={"prompt": "hi"})

        assert response.status_code == 401
        assert fake.prompts == []

    def test_prompt_required(self, logged_in_client, install_client):
        fake = install_client(FakeOpenRouterClient(reply={}))

        response = logged_in_client.post("/api/completions", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Prompt is required."}
        assert fake.prompts == []

    def test_returns_upstream_json(self, logged_in_client, install_client):
        upstream = {"choices": [{"message": {"content": "Policy"}}]}
        fake = install_client(FakeOpenRouterClient(reply=upstream))

        response = logged_in_client.post(
            "/api/completions", json={"prompt": "Draft a policy"}
        )

        assert response.status_code == 200
        assert response.json() == upstream
        assert fake.prompts == ["Draft a policy"]

    def test_upstream_status_is_passed_through(self, logged_in_client, install_client):
        install_client(
            FakeOpenRouterClient(error=UpstreamResponseError(429, "rate limited"))
        )

        response = logged_in_client.post("/api/completions", json={"prompt": "hi"})

        assert response.status_code == 429
        assert response.json() == {
            "error": "Failed to fetch response from OpenRouter.",
            "details": "rate limited",
        }

    def test_missing_key(self, logged_in_client, container):
        container.settings.openrouter_api_key = ""

        response = logged_in_client.post("/api/completions", json={"prompt": "hi"})

        assert response.status_code == 500
        assert response.json()["error"] == "OPENROUTER_NOT_CONFIGURED"
