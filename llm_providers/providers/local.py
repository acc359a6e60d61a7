"""
Local Model LLM Provider implementation.

Supports local models via OpenAI-compatible APIs:
- Ollama (http://localhost:11434)
- LM Studio (http://localhost:1234)
- vLLM (http://localhost:8000)
- Any other OpenAI-compatible local server
"""

import logging
from typing import Any
from urllib.parse import urlparse

from django.conf import settings

from ..exceptions import ConfigurationError
from ..registry import LLMProviderRegistry
from ..types import LLMConfig, ModelInfo, ProviderInfo
from .openai import OpenAIProvider

logger = logging.getLogger(__name__)

# Default local endpoints for common providers
DEFAULT_ENDPOINTS = {
    "ollama": "http://localhost:11434",
    "lmstudio": "http://localhost:1234",
    "vllm": "http://localhost:8000",
}

# Local models known to handle function calling
COMMON_LOCAL_MODELS = [
    ModelInfo(
        model_id="llama3.2",
        display_name="Llama 3.2",
        provider="local",
        description="Meta's Llama 3.2 model",
        context_window=128000,
        supports_tools=True,
    ),
    ModelInfo(
        model_id="mistral",
        display_name="Mistral",
        provider="local",
        description="Mistral AI's base model",
        context_window=32768,
        supports_tools=True,
    ),
    ModelInfo(
        model_id="qwen2.5",
        display_name="Qwen 2.5",
        provider="local",
        description="Alibaba's Qwen 2.5 model",
        context_window=32768,
        supports_tools=True,
    ),
]


def validate_local_endpoint(endpoint: str) -> bool:
    """
    Validate that an endpoint is safe to use for local models.

    Prevents SSRF by ensuring the endpoint points to localhost or
    private network addresses.

    Args:
        endpoint: The endpoint URL to validate

    Returns:
        True if the endpoint is safe, False otherwise
    """
    try:
        parsed = urlparse(endpoint)
    except ValueError:
        return False

    # Must have scheme and netloc
    if not parsed.scheme or not parsed.netloc:
        return False

    # Only allow http/https
    if parsed.scheme not in ("http", "https"):
        return False

    host = (parsed.hostname or "").lower()

    if host in {"localhost", "127.0.0.1", "::1"}:
        return True

    # Private network ranges (RFC 1918)
    if host.startswith("10.") or host.startswith("192.168."):
        return True
    if host.startswith("172."):
        # 172.16.x.x - 172.31.x.x
        try:
            second_octet = int(host.split(".")[1])
        except (ValueError, IndexError):
            return False
        return 16 <= second_octet <= 31

    # Docker internal hostnames
    return host in {"host.docker.internal", "gateway.docker.internal"}


class LocalModelProvider(OpenAIProvider):
    """
    Local model provider using OpenAI-compatible API.

    Reuses the OpenAI wire handling; only the endpoint and credentials differ.
    """

    def __init__(self, config: LLMConfig | None = None):
        """Initialize local model provider."""
        super().__init__(config)

        if config and config.endpoint and not validate_local_endpoint(config.endpoint):
            raise ConfigurationError(
                f"Invalid local endpoint: {config.endpoint}. "
                "Only localhost and private network addresses are allowed."
            )

    @property
    def provider_name(self) -> str:
        return "local"

    @property
    def display_name(self) -> str:
        return "Local Model"

    def get_info(self) -> ProviderInfo:
        return ProviderInfo(
            name=self.provider_name,
            display_name=self.display_name,
            requires_api_key=False,
            supports_custom_endpoint=True,
            default_endpoint=DEFAULT_ENDPOINTS["ollama"],
            available_models=self.list_models(),
        )

    def _get_base_url(self) -> str:
        """Get the base URL for the local server."""
        # Priority: config > settings > default
        if self.config and self.config.endpoint:
            return self.config.endpoint

        endpoint = getattr(settings, "LOCAL_MODEL_ENDPOINT", None)
        if endpoint:
            return endpoint

        return DEFAULT_ENDPOINTS["ollama"]

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs = super()._client_kwargs()
        kwargs["base_url"] = f"{self._get_base_url().rstrip('/')}/v1"
        # Local servers typically don't need keys
        kwargs["api_key"] = kwargs.get("api_key") or "not-needed"
        return kwargs

    def list_models(self) -> list[ModelInfo]:
        """Return a list of common local models."""
        return COMMON_LOCAL_MODELS.copy()


LLMProviderRegistry.register("local", LocalModelProvider, aliases=["ollama", "lmstudio"])
