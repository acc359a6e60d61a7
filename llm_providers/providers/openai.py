"""
OpenAI LLM Provider implementation.
"""

import logging
from typing import Any

import openai

from ..base import LLMProvider
from ..exceptions import APIError, AuthenticationError, ProviderTimeoutError
from ..registry import LLMProviderRegistry
from ..types import (
    ChatMessage,
    ChatResponse,
    LLMConfig,
    ModelInfo,
    ProviderInfo,
)

logger = logging.getLogger(__name__)

# Well-known OpenAI models with their capabilities
OPENAI_MODELS = [
    ModelInfo(
        model_id="gpt-4o",
        display_name="GPT-4o",
        provider="openai",
        description="Most capable model for complex tasks",
        context_window=128000,
        max_output_tokens=16384,
        supports_tools=True,
    ),
    ModelInfo(
        model_id="gpt-4o-mini",
        display_name="GPT-4o Mini",
        provider="openai",
        description="Fast and affordable for focused tasks",
        context_window=128000,
        max_output_tokens=16384,
        supports_tools=True,
    ),
    ModelInfo(
        model_id="gpt-4-turbo",
        display_name="GPT-4 Turbo",
        provider="openai",
        description="Previous generation flagship model",
        context_window=128000,
        max_output_tokens=4096,
        supports_tools=True,
    ),
    ModelInfo(
        model_id="gpt-3.5-turbo",
        display_name="GPT-3.5 Turbo",
        provider="openai",
        description="Fast and cost-effective for simpler tasks",
        context_window=16385,
        max_output_tokens=4096,
        supports_tools=True,
    ),
    ModelInfo(
        model_id="o1-mini",
        display_name="o1 Mini",
        provider="openai",
        description="Fast reasoning model",
        context_window=128000,
        max_output_tokens=65536,
        supports_tools=False,
    ),
]


class OpenAIProvider(LLMProvider):
    """
    OpenAI API provider implementation.

    Speaks the Chat Completions API, including function calling. Any server
    exposing the same API can reuse this class by overriding the client setup.
    """

    def __init__(self, config: LLMConfig | None = None):
        """Initialize OpenAI provider."""
        super().__init__(config)
        self._async_client = None

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def display_name(self) -> str:
        return "OpenAI"

    def get_info(self) -> ProviderInfo:
        return ProviderInfo(
            name=self.provider_name,
            display_name=self.display_name,
            requires_api_key=True,
            supports_custom_endpoint=False,
            available_models=self.list_models(),
        )

    # -------------------------------------------------------------------------
    # Client Management
    # -------------------------------------------------------------------------

    def _client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for the OpenAI client constructor."""
        kwargs: dict[str, Any] = {"api_key": self._get_api_key()}
        if self.config and self.config.timeout:
            kwargs["timeout"] = self.config.timeout
        return kwargs

    def _get_async_client(self):
        """Get or create async OpenAI client."""
        if self._async_client is None:
            self._async_client = openai.AsyncOpenAI(**self._client_kwargs())
        return self._async_client

    # -------------------------------------------------------------------------
    # Model Discovery
    # -------------------------------------------------------------------------

    def list_models(self) -> list[ModelInfo]:
        """Return available OpenAI models."""
        return OPENAI_MODELS.copy()

    # -------------------------------------------------------------------------
    # Chat Completion
    # -------------------------------------------------------------------------

    def _convert_messages(self, messages: list[ChatMessage]) -> list[dict[str, Any]]:
        """Convert ChatMessage objects to OpenAI format."""
        result = []
        for msg in messages:
            role = msg.role.value if hasattr(msg.role, "value") else str(msg.role)
            entry: dict[str, Any] = {"role": role, "content": msg.content}
            if msg.name:
                entry["name"] = msg.name
            if msg.tool_calls:
                entry["tool_calls"] = msg.tool_calls
            if msg.tool_call_id:
                entry["tool_call_id"] = msg.tool_call_id
            result.append(entry)
        return result

    def _build_params(
        self,
        messages: list[ChatMessage],
        model_id: str | None,
        **kwargs,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "model": self._get_model_id(model_id),
            "messages": self._convert_messages(messages),
        }

        if self.config:
            if self.config.temperature is not None:
                params["temperature"] = self.config.temperature
            if self.config.max_tokens:
                params["max_tokens"] = self.config.max_tokens
            params.update(self.config.extra_params)

        # Allow kwargs to override
        params.update(kwargs)
        return params

    @staticmethod
    def _to_chat_response(completion) -> ChatResponse:
        message = completion.choices[0].message
        return ChatResponse(
            content=message.content or "",
            model=completion.model,
            finish_reason=completion.choices[0].finish_reason,
            usage={
                "prompt_tokens": completion.usage.prompt_tokens,
                "completion_tokens": completion.usage.completion_tokens,
                "total_tokens": completion.usage.total_tokens,
            } if completion.usage else None,
            tool_calls=(
                [tc.model_dump() for tc in message.tool_calls]
                if message.tool_calls
                else None
            ),
            raw_response=completion,
        )

    async def chat_async(
        self,
        messages: list[ChatMessage],
        model_id: str | None = None,
        **kwargs,
    ) -> ChatResponse:
        """Perform asynchronous chat completion."""
        client = self._get_async_client()
        params = self._build_params(messages, model_id, **kwargs)
        logger.debug(
            "%s request: model=%s messages=%d tools=%d",
            self.display_name, params["model"], len(params["messages"]), len(params.get("tools") or []),
        )

        try:
            completion = await client.chat.completions.create(**params)
        except openai.APITimeoutError as e:
            timeout = self.config.timeout if self.config else None
            logger.warning("%s request timed out (timeout=%s)", self.display_name, timeout)
            raise ProviderTimeoutError(f"{self.display_name} request timed out") from e
        except Exception as e:
            error_msg = str(e)
            if "authentication" in error_msg.lower() or "api key" in error_msg.lower():
                raise AuthenticationError(f"{self.display_name} authentication failed: {e}") from e
            raise APIError(
                f"{self.display_name} API error: {e}",
                status_code=getattr(e, "status_code", None),
            ) from e

        return self._to_chat_response(completion)


# Register the provider
LLMProviderRegistry.register("openai", OpenAIProvider, set_default=True)
