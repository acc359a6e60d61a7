"""
LLM Provider implementations.

This package contains concrete implementations of the LLMProvider
interface for different services.

Available providers:
- openai: OpenAI API (GPT-4o, GPT-4 Turbo, etc.)
- local: Local models via OpenAI-compatible API (Ollama, LM Studio)
"""

from .local import LocalModelProvider
from .openai import OpenAIProvider

__all__ = ["OpenAIProvider", "LocalModelProvider"]
