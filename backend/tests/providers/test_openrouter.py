"""Tests for the OpenRouter completions client."""

import httpx
import pytest
from unittest.mock import patch, MagicMock, AsyncMock

from providers.openrouter import (
    DEFAULT_MODEL,
    DEFAULT_SYSTEM_PROMPT,
    OPENROUTER_API_BASE,
    OpenRouterClient,
    UpstreamResponseError,
)
from shared.exceptions import ConfigurationError, ExternalServiceError


def mock_async_client(mock_client_class, response=None, error=None):
    """Wire a patched httpx.AsyncClient to return a response (or raise)."""
    mock_client_instance = AsyncMock()
    if error is not None:
        mock_client_instance.post.side_effect = error
    else:
        mock_client_instance.post.return_value = response
    mock_client_class.return_value.__aenter__.return_value = mock_client_instance
    mock_client_class.return_value.__aexit__.return_value = None
    return mock_client_instance


def make_response(status_code: int, json_body=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.json.return_value = json_body
    response.text = text
    return response


class TestOpenRouterClient:
    """Test suite for OpenRouterClient."""

    def test_defaults(self):
        client = OpenRouterClient(api_key="key")
        assert client.completions_url == f"{OPENROUTER_API_BASE}/chat/completions"

    def test_trailing_slash_in_base(self):
        client = OpenRouterClient(api_key="key", api_base="http://localhost:9999/v1/")
        assert client.completions_url == "http://localhost:9999/v1/chat/completions"

    def test_payload(self):
        """The prompt is sent after the fixed system message."""
        payload = OpenRouterClient(api_key="key").build_payload("Write a retention policy")
        assert payload == {
            "model": DEFAULT_MODEL,
            "messages": [
                {"role": "system", "content": DEFAULT_SYSTEM_PROMPT},
                {"role": "user", "content": "Write a retention policy"},
            ],
        }

    @pytest.mark.asyncio
    async def test_missing_key(self):
        with pytest.raises(ConfigurationError, match="OpenRouter API key is not configured."):
            await OpenRouterClient(api_key="").complete("hello")

    @pytest.mark.asyncio
    async def test_complete_returns_upstream_json(self):
        upstream = {"choices": [{"message": {"content": "Policy text"}}]}

        with patch("httpx.AsyncClient") as mock_client_class:
            instance = mock_async_client(mock_client_class, make_response(200, upstream))
            result = await OpenRouterClient(api_key="secret-key").complete("hello")

        assert result == upstream
        args, kwargs = instance.post.call_args
        assert args[0] == f"{OPENROUTER_API_BASE}/chat/completions"
        assert kwargs["headers"]["Authorization"] == "Bearer secret-key"
        assert kwargs["json"]["messages"][1]["content"] == "hello"

    @pytest.mark.asyncio
    async def test_upstream_error_keeps_status_and_body(self):
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_async_client(
                mock_client_class,
                make_response(429, text='{"error": "rate limited"}'),
            )
            with pytest.raises(UpstreamResponseError) as exc_info:
                await OpenRouterClient(api_key="secret-key").complete("hello")

        assert exc_info.value.status_code == 429
        assert exc_info.value.body == '{"error": "rate limited"}'
        assert exc_info.value.message == "Failed to fetch response from OpenRouter."

    @pytest.mark.asyncio
    async def test_network_failure(self):
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_async_client(mock_client_class, error=httpx.ConnectError("refused"))
            with pytest.raises(ExternalServiceError) as exc_info:
                await OpenRouterClient(api_key="secret-key").complete("hello")

        assert exc_info.value.service == "openrouter"
