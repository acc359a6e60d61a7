"""
LLM configuration resolution.

Resolves LLM settings from the Django settings module.
"""

import logging
from typing import TYPE_CHECKING

from django.conf import settings

from .exceptions import MissingCredentialsError, ToolCallingNotSupportedError
from .types import LLMConfig

if TYPE_CHECKING:
    from .base import LLMProvider

logger = logging.getLogger(__name__)

LOCAL_PROVIDERS = ("ollama", "local", "lmstudio")


def resolve_llm_config() -> LLMConfig:
    """
    Resolve LLM configuration from Django settings.

    Reads ``DEFAULT_LLM_PROVIDER``, ``DEFAULT_LLM_MODEL``, ``AI_MAX_TOKENS``
    and ``AI_REQUEST_TIMEOUT``, plus the provider's API key and, for local
    providers, ``LOCAL_MODEL_ENDPOINT``.

    Example:
        config = resolve_llm_config()
        provider = LLMProviderRegistry.from_config(config)
    """
    provider = getattr(settings, "DEFAULT_LLM_PROVIDER", "openai")
    model_id = getattr(settings, "DEFAULT_LLM_MODEL", "gpt-4o")

    endpoint = None
    if provider in LOCAL_PROVIDERS:
        endpoint = getattr(settings, "LOCAL_MODEL_ENDPOINT", "http://localhost:11434")

    return LLMConfig(
        provider=provider,
        model_id=model_id,
        api_key=get_provider_api_key(provider),
        endpoint=endpoint,
        max_tokens=getattr(settings, "AI_MAX_TOKENS", None),
        timeout=getattr(settings, "AI_REQUEST_TIMEOUT", None),
    )


def get_provider_api_key(provider: str) -> str | None:
    """
    Get the app-level API key for a specific provider.

    Args:
        provider: Provider name.

    Returns:
        API key if found, None otherwise.
    """
    if provider == "openai":
        return getattr(settings, "OPENAI_API_KEY", None) or None
    return None


def require_credentials(provider: "LLMProvider") -> None:
    """
    Ensure a provider has what it needs to make calls.

    Raises:
        MissingCredentialsError: If the provider needs an API key and none is configured.
    """
    info = provider.get_info()
    if info.requires_api_key and not provider._get_api_key():
        logger.warning("LLM provider '%s' has no API key configured", provider.provider_name)
        raise MissingCredentialsError(
            provider.provider_name,
            f"{info.display_name} API key is not configured",
        )


def require_tool_support(provider: "LLMProvider", model_id: str | None = None) -> None:
    """
    Reject models the provider knows cannot call functions.

    Models missing from the provider's catalog (custom deployments, local
    models not listed) are given the benefit of the doubt.

    Raises:
        ToolCallingNotSupportedError: If the model is listed without tool support.
    """
    model_id = provider._get_model_id(model_id)
    model = provider.get_model(model_id)
    if model is not None and not model.supports_tools:
        raise ToolCallingNotSupportedError(provider.provider_name, model_id)
