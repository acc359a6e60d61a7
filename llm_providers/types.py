"""
Type definitions for the LLM Provider interface.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MessageRole(str, Enum):
    """Standard message roles."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass
class ToolCall:
    """A single function call requested by the model."""

    id: str
    name: str
    arguments: str  # raw JSON text as produced by the model
    type: str = "function"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ToolCall":
        """Build from the OpenAI wire shape ``{"id", "type", "function": {...}}``."""
        function = data.get("function") or {}
        return cls(
            id=data.get("id") or "",
            name=function.get("name") or "",
            arguments=function.get("arguments") or "{}",
            type=data.get("type") or "function",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "function": {"name": self.name, "arguments": self.arguments},
        }


@dataclass
class ChatMessage:
    """A message in a chat conversation.

    Assistant messages that request tools carry ``tool_calls`` in the OpenAI
    wire shape; tool results carry the ``tool_call_id`` they answer.
    """

    role: MessageRole | str
    content: str | None
    name: str | None = None
    tool_calls: list[dict[str, Any]] | None = None
    tool_call_id: str | None = None


@dataclass
class ModelInfo:
    """Information about an available model."""

    model_id: str
    display_name: str
    provider: str
    description: str | None = None
    context_window: int | None = None
    max_output_tokens: int | None = None
    supports_tools: bool = False


@dataclass
class ChatResponse:
    """Response from a chat completion."""

    content: str
    model: str
    finish_reason: str | None = None
    usage: dict[str, int] | None = None
    tool_calls: list[dict[str, Any]] | None = None
    raw_response: Any = None

    def get_tool_calls(self) -> list[ToolCall]:
        """Return requested tool calls as ``ToolCall`` objects (empty when none)."""
        return [ToolCall.from_dict(tc) for tc in self.tool_calls or []]


@dataclass
class LLMConfig:
    """Configuration for an LLM provider/model."""

    provider: str
    model_id: str
    api_key: str | None = None
    endpoint: str | None = None  # For local models
    temperature: float | None = None
    max_tokens: int | None = None
    timeout: float | None = None
    extra_params: dict[str, Any] = field(default_factory=dict)


@dataclass
class ProviderInfo:
    """Information about a provider."""

    name: str
    display_name: str
    requires_api_key: bool = True
    supports_custom_endpoint: bool = False
    default_endpoint: str | None = None
    available_models: list[ModelInfo] = field(default_factory=list)
