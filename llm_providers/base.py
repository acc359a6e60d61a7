"""
Abstract base class for LLM providers.
"""

from abc import ABC, abstractmethod
from typing import Any

from .types import ChatMessage, ChatResponse, LLMConfig, ModelInfo, ProviderInfo


class LLMProvider(ABC):
    """
    Abstract interface for LLM providers.

    Each provider implementation handles authentication, model listing,
    and chat completion for a specific service (OpenAI, local servers, etc.).
    Callers that drive a tool-calling loop only need
    :meth:`complete_with_tools_async`.
    """

    def __init__(self, config: LLMConfig | None = None):
        """
        Initialize the provider.

        Args:
            config: Optional configuration with API key and settings.
        """
        self.config = config

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider identifier (e.g., 'openai', 'local')."""
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Return human-readable provider name."""
        pass

    @abstractmethod
    def get_info(self) -> ProviderInfo:
        """Return information about this provider."""
        pass

    # -------------------------------------------------------------------------
    # Model Discovery
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_models(self) -> list[ModelInfo]:
        """
        Return available models for this provider.

        Returns:
            List of ModelInfo objects describing available models.
        """
        pass

    def get_model(self, model_id: str) -> ModelInfo | None:
        """
        Get information about a specific model.

        Args:
            model_id: The model identifier.

        Returns:
            ModelInfo if found, None otherwise.
        """
        for model in self.list_models():
            if model.model_id == model_id:
                return model
        return None

    # -------------------------------------------------------------------------
    # Chat Completion
    # -------------------------------------------------------------------------

    @abstractmethod
    async def chat_async(
        self,
        messages: list[ChatMessage],
        model_id: str | None = None,
        **kwargs,
    ) -> ChatResponse:
        """
        Perform an asynchronous chat completion.

        Args:
            messages: List of chat messages.
            model_id: Model to use. If not provided, uses config default.
            **kwargs: Additional provider-specific parameters.

        Returns:
            ChatResponse with the completion.
        """
        pass

    async def complete_with_tools_async(
        self,
        messages: list[ChatMessage],
        tools: list[dict[str, Any]],
        model_id: str | None = None,
        **kwargs,
    ) -> ChatResponse:
        """
        Request the next step of a tool-calling exchange.

        The whole tool catalog is advertised and the model picks freely
        between answering and calling tools.

        Args:
            messages: Transcript so far, including prior tool results.
            tools: Function definitions in OpenAI ``{"type": "function", ...}`` form.
            model_id: Model to use. If not provided, uses config default.

        Returns:
            ChatResponse whose ``tool_calls`` is set when the model wants tools run.
        """
        return await self.chat_async(
            messages,
            model_id=model_id,
            tools=tools,
            tool_choice="auto",
            **kwargs,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_api_key(self, api_key: str | None = None) -> str | None:
        """Get API key from argument or config."""
        return api_key or (self.config.api_key if self.config else None)

    def _get_model_id(self, model_id: str | None = None) -> str:
        """Get model ID from argument or config."""
        if model_id:
            return model_id
        if self.config and self.config.model_id:
            return self.config.model_id
        raise ValueError("No model_id provided and no default configured")
