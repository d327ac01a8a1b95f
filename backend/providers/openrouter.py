"""OpenRouter chat-completions client.

Forwards a single prompt to OpenRouter's OpenAI-compatible API and
returns the raw JSON response. The API key stays on the server.
"""

import logging
from typing import Any

import httpx

from shared.exceptions import ConfigurationError, ExternalServiceError

logger = logging.getLogger(__name__)

# OpenRouter API endpoint
OPENROUTER_API_BASE = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "meta-llama/llama-3-8b-instruct"
DEFAULT_SYSTEM_PROMPT = "You are an expert at writing professional policy documents."


class UpstreamResponseError(ExternalServiceError):
    """Raised when OpenRouter answers with a non-2xx status.

    Carries the upstream status and raw body so they can be passed back
    to the caller unchanged.
    """

    def __init__(self, status_code: int, body: str):
        super().__init__(
            "Failed to fetch response from OpenRouter.",
            service="openrouter",
            code="UPSTREAM_ERROR",
            details={"upstream_status": status_code},
        )
        self.status_code = status_code
        self.body = body


class OpenRouterClient:
    """Client for OpenRouter chat completions.

    Args:
        api_key: Server-held OpenRouter key
        api_base: API root (defaults to the public OpenRouter endpoint)
        model: Model in provider/model format
        system_prompt: System message sent before every prompt
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        api_key: str,
        api_base: str = OPENROUTER_API_BASE,
        model: str = DEFAULT_MODEL,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        timeout: float = 60.0,
    ):
        self._api_key = api_key
        self._api_base = api_base.rstrip("/")
        self._model = model
        self._system_prompt = system_prompt
        self._timeout = timeout

    @property
    def completions_url(self) -> str:
        return f"{self._api_base}/chat/completions"

    def build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": self._system_prompt},
                {"role": "user", "content": prompt},
            ],
        }

    async def complete(self, prompt: str) -> Any:
        """Send a prompt and return OpenRouter's JSON response.

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamResponseError: If OpenRouter returns a non-2xx status
            ExternalServiceError: If OpenRouter cannot be reached
        """
        if not self._api_key:
            raise ConfigurationError(
                "OpenRouter API key is not configured.",
                code="OPENROUTER_NOT_CONFIGURED",
            )

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.completions_url,
                    headers={
                        "Authorization": f"Bearer {self._api_key}",
                        "Content-Type": "application/json",
                    },
                    json=self.build_payload(prompt),
                    timeout=self._timeout,
                )
        except httpx.HTTPError as e:
            logger.error(f"OpenRouter request failed: {e}")
            raise ExternalServiceError(
                "An unexpected error occurred during policy generation.",
                service="openrouter",
            )

        if not response.is_success:
            logger.error(f"OpenRouter API error {response.status_code}: {response.text}")
            raise UpstreamResponseError(response.status_code, response.text)

        return response.json()
