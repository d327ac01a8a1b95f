"""External AI provider clients."""

from .openrouter import OpenRouterClient, UpstreamResponseError

__all__ = ["OpenRouterClient", "UpstreamResponseError"]
