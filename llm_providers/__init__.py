"""
LLM Provider Interface - Unified interface for LLM backends.

This module provides an abstraction layer for LLM operations, allowing
different providers (OpenAI, local OpenAI-compatible servers) to be used
interchangeably through a common interface.

Example usage:
    from llm_providers import LLMProviderRegistry, resolve_llm_config, ChatMessage

    # Get configured provider
    config = resolve_llm_config()
    provider = LLMProviderRegistry.from_config(config)

    # One step of a tool-calling exchange
    messages = [
        ChatMessage(role="system", content="You are a helpful assistant."),
        ChatMessage(role="user", content="What's on my plate today?"),
    ]
    response = await provider.complete_with_tools_async(messages, tools)
    for call in response.get_tool_calls():
        print(call.name, call.arguments)
"""

from .base import LLMProvider
from .config import (
    get_provider_api_key,
    require_credentials,
    require_tool_support,
    resolve_llm_config,
)
from .exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    LLMProviderError,
    MissingCredentialsError,
    ProviderNotFoundError,
    ProviderTimeoutError,
    ToolCallingNotSupportedError,
)
from .registry import LLMProviderRegistry
from .types import (
    ChatMessage,
    ChatResponse,
    LLMConfig,
    MessageRole,
    ModelInfo,
    ProviderInfo,
    ToolCall,
)

# Import providers to trigger registration
from . import providers  # noqa: F401

__all__ = [
    # Core classes
    "LLMProvider",
    "LLMProviderRegistry",
    # Config
    "resolve_llm_config",
    "get_provider_api_key",
    "require_credentials",
    "require_tool_support",
    # Types
    "ChatMessage",
    "ChatResponse",
    "LLMConfig",
    "MessageRole",
    "ModelInfo",
    "ProviderInfo",
    "ToolCall",
    # Exceptions
    "LLMProviderError",
    "ProviderNotFoundError",
    "AuthenticationError",
    "APIError",
    "ConfigurationError",
    "MissingCredentialsError",
    "ToolCallingNotSupportedError",
    "ProviderTimeoutError",
]
