"""
Tests for the LLM provider layer: config resolution, registry, credentials
and the OpenAI-compatible providers.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest
from django.test import override_settings

from llm_providers import (
    APIError,
    AuthenticationError,
    ChatMessage,
    ConfigurationError,
    LLMConfig,
    LLMProviderRegistry,
    MessageRole,
    MissingCredentialsError,
    ProviderNotFoundError,
    ProviderTimeoutError,
    ToolCall,
    ToolCallingNotSupportedError,
    require_credentials,
    require_tool_support,
    resolve_llm_config,
)
from llm_providers.providers.local import LocalModelProvider, validate_local_endpoint
from llm_providers.providers.openai import OpenAIProvider

TOOLS = [{
    "type": "function",
    "function": {"name": "list_users", "description": "List users", "parameters": {"type": "object", "properties": {}}},
}]


def make_completion(content=None, tool_calls=None, usage=True):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(
        model="gpt-4o",
        choices=[SimpleNamespace(message=message, finish_reason="tool_calls" if tool_calls else "stop")],
        usage=SimpleNamespace(prompt_tokens=12, completion_tokens=3, total_tokens=15) if usage else None,
    )


def openai_provider(**overrides):
    config = LLMConfig(
        provider="openai",
        model_id="gpt-4o",
        api_key="sk-test",
        max_tokens=1024,
        timeout=60.0,
    )
    for key, value in overrides.items():
        setattr(config, key, value)
    return OpenAIProvider(config)


class TestResolveConfig:

    @override_settings(
        DEFAULT_LLM_PROVIDER="openai",
        DEFAULT_LLM_MODEL="gpt-4o",
        OPENAI_API_KEY="sk-from-settings",
        AI_MAX_TOKENS=1024,
        AI_REQUEST_TIMEOUT=60.0,
    )
    def test_app_defaults(self):
        config = resolve_llm_config()

        assert config.provider == "openai"
        assert config.model_id == "gpt-4o"
        assert config.api_key == "sk-from-settings"
        assert config.max_tokens == 1024
        assert config.timeout == 60.0
        assert config.endpoint is None

    @override_settings(
        DEFAULT_LLM_PROVIDER="ollama",
        DEFAULT_LLM_MODEL="llama3.2",
        OPENAI_API_KEY="sk-unused",
        LOCAL_MODEL_ENDPOINT="http://localhost:1234",
    )
    def test_local_provider_uses_local_endpoint(self):
        config = resolve_llm_config()

        assert config.provider == "ollama"
        assert config.model_id == "llama3.2"
        assert config.api_key is None
        assert config.endpoint == "http://localhost:1234"


class TestRegistry:

    def test_builtin_providers_registered(self):
        assert LLMProviderRegistry.resolve_name("openai") == "openai"
        assert LLMProviderRegistry.resolve_name("local") == "local"
        assert LLMProviderRegistry.resolve_name(None) == "openai"

    def test_unknown_provider(self):
        with pytest.raises(ProviderNotFoundError, match="not found"):
            LLMProviderRegistry.get("nope")

    def test_aliases_resolve_to_local(self):
        assert LLMProviderRegistry.resolve_name("ollama") == "local"
        assert LLMProviderRegistry.resolve_name("lmstudio") == "local"

    def test_from_config(self):
        config = LLMConfig(provider="ollama", model_id="llama3.2", endpoint="http://localhost:11434")

        provider = LLMProviderRegistry.from_config(config)

        assert isinstance(provider, LocalModelProvider)
        assert provider.config is config


class TestCredentials:

    def test_openai_without_key_is_not_configured(self):
        provider = openai_provider(api_key=None)

        with pytest.raises(MissingCredentialsError, match="OpenAI API key is not configured") as exc_info:
            require_credentials(provider)

        assert exc_info.value.provider == "openai"

    def test_openai_with_key(self):
        require_credentials(openai_provider())

    def test_local_provider_needs_no_key(self):
        provider = LocalModelProvider(LLMConfig(provider="local", model_id="llama3.2"))

        require_credentials(provider)


class TestLocalEndpoints:

    @pytest.mark.parametrize("endpoint", [
        "http://localhost:11434",
        "http://127.0.0.1:8000",
        "http://192.168.1.20:1234",
        "http://172.20.0.5:11434",
        "http://host.docker.internal:11434",
    ])
    def test_allowed(self, endpoint):
        assert validate_local_endpoint(endpoint)

    @pytest.mark.parametrize("endpoint", [
        "https://api.example.com",
        "http://172.40.0.1",
        "ftp://localhost",
        "localhost:11434",
    ])
    def test_rejected(self, endpoint):
        assert not validate_local_endpoint(endpoint)

    def test_provider_rejects_public_endpoint(self):
        with pytest.raises(ConfigurationError, match="Invalid local endpoint"):
            LocalModelProvider(LLMConfig(provider="local", model_id="x", endpoint="https://evil.example.com"))

    def test_client_points_at_v1(self):
        provider = LocalModelProvider(
            LLMConfig(provider="local", model_id="llama3.2", endpoint="http://localhost:1234/", timeout=30)
        )

        assert provider._client_kwargs() == {
            "api_key": "not-needed",
            "timeout": 30,
            "base_url": "http://localhost:1234/v1",
        }


class TestOpenAIProvider:

    def test_client_receives_key_and_timeout(self):
        provider = openai_provider()

        with patch("openai.AsyncOpenAI") as mock_client_cls:
            provider._get_async_client()

        mock_client_cls.assert_called_once_with(api_key="sk-test", timeout=60.0)

    @pytest.mark.asyncio
    async def test_complete_with_tools_sends_catalog(self):
        provider = openai_provider()
        raw_call = MagicMock()
        raw_call.model_dump.return_value = {
            "id": "call_1",
            "type": "function",
            "function": {"name": "list_users", "arguments": "{}"},
        }
        client = MagicMock()
        client.chat.completions.create = AsyncMock(
            return_value=make_completion(tool_calls=[raw_call])
        )

        messages = [
            ChatMessage(role=MessageRole.SYSTEM, content="sys"),
            ChatMessage(role=MessageRole.USER, content="who is on the team?"),
        ]
        with patch.object(provider, "_get_async_client", return_value=client):
            response = await provider.complete_with_tools_async(messages, TOOLS)

        params = client.chat.completions.create.call_args.kwargs
        assert params["model"] == "gpt-4o"
        assert params["max_tokens"] == 1024
        assert params["tools"] == TOOLS
        assert params["tool_choice"] == "auto"
        assert params["messages"] == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "who is on the team?"},
        ]

        assert response.content == ""
        assert response.usage == {"prompt_tokens": 12, "completion_tokens": 3, "total_tokens": 15}
        assert response.get_tool_calls() == [
            ToolCall(id="call_1", name="list_users", arguments="{}")
        ]

    @pytest.mark.asyncio
    async def test_tool_messages_round_trip(self):
        provider = openai_provider()
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=make_completion(content="Done", usage=False))
        call = ToolCall(id="call_1", name="list_users", arguments="{}")
        messages = [
            ChatMessage(role=MessageRole.ASSISTANT, content=None, tool_calls=[call.to_dict()]),
            ChatMessage(role=MessageRole.TOOL, content="[]", tool_call_id="call_1"),
        ]

        with patch.object(provider, "_get_async_client", return_value=client):
            response = await provider.complete_with_tools_async(messages, TOOLS)

        sent = client.chat.completions.create.call_args.kwargs["messages"]
        assert sent[0]["tool_calls"] == [call.to_dict()]
        assert sent[1] == {"role": "tool", "content": "[]", "tool_call_id": "call_1"}
        assert response.content == "Done"
        assert response.usage is None
        assert response.get_tool_calls() == []

    @pytest.mark.asyncio
    async def test_authentication_failure(self):
        provider = openai_provider()
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=Exception("Incorrect API key provided"))

        with patch.object(provider, "_get_async_client", return_value=client):
            with pytest.raises(AuthenticationError):
                await provider.chat_async([ChatMessage(role="user", content="hi")])

    @pytest.mark.asyncio
    async def test_api_failure(self):
        provider = openai_provider()
        client = MagicMock()
        error = Exception("rate limited")
        error.status_code = 429
        client.chat.completions.create = AsyncMock(side_effect=error)

        with patch.object(provider, "_get_async_client", return_value=client):
            with pytest.raises(APIError) as exc_info:
                await provider.chat_async([ChatMessage(role="user", content="hi")])

        assert exc_info.value.status_code == 429


class TestToolCall:

    def test_from_dict_defaults(self):
        call = ToolCall.from_dict({"id": "c1", "function": {"name": "list_tasks"}})

        assert call.name == "list_tasks"
        assert call.arguments == "{}"
        assert call.type == "function"


class TestToolSupport:

    def test_listed_tool_model_passes(self):
        require_tool_support(openai_provider())

    def test_listed_model_without_tools_is_rejected(self):
        with pytest.raises(ToolCallingNotSupportedError) as exc_info:
            require_tool_support(openai_provider(model_id="o1-mini"))

        assert exc_info.value.model_id == "o1-mini"

    def test_unlisted_model_is_allowed(self):
        require_tool_support(openai_provider(model_id="my-fine-tune"))


class TestTimeouts:

    @pytest.mark.asyncio
    async def test_timeout_is_reported_distinctly(self):
        provider = openai_provider()
        client = MagicMock()
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        client.chat.completions.create = AsyncMock(side_effect=openai.APITimeoutError(request=request))

        with patch.object(provider, "_get_async_client", return_value=client):
            with pytest.raises(ProviderTimeoutError):
                await provider.complete_with_tools_async([ChatMessage(role="user", content="hi")], TOOLS)
