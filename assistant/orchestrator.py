"""
Tool-calling conversation loop.

One request runs one ``ConversationOrchestrator.run``: the model is asked for
the next step with the whole tool catalog advertised, requested tools are
executed in order, their results are appended to the transcript, and the
model is asked again until it answers in prose.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from asgiref.sync import sync_to_async
from django.conf import settings

from llm_providers import ChatMessage, LLMProvider, MessageRole

from .exceptions import ToolLoopLimitExceeded
from .executor import ToolExecutor
from .prompts import build_system_prompt
from .results import ToolError

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = "I apologize, but I could not generate a response."

HISTORY_ROLES = {MessageRole.USER.value, MessageRole.ASSISTANT.value}


@dataclass
class TokenUsage:
    """Token counts summed over every model call in a request."""

    input_tokens: int = 0
    output_tokens: int = 0
    reported: bool = False

    def add(self, usage: dict[str, int] | None) -> None:
        if not usage:
            return
        self.reported = True
        self.input_tokens += usage.get("prompt_tokens") or 0
        self.output_tokens += usage.get("completion_tokens") or 0

    def as_dict(self) -> dict[str, int] | None:
        if not self.reported:
            return None
        return {"input_tokens": self.input_tokens, "output_tokens": self.output_tokens}


@dataclass
class AssistantReply:
    """Outcome of one orchestrated request."""

    response: str
    usage: dict[str, int] | None = None
    tools_called: list[str] = field(default_factory=list)
    model_calls: int = 0


def _history_field(entry: Any, key: str):
    if isinstance(entry, dict):
        return entry.get(key)
    return getattr(entry, key, None)


def build_transcript(user, message: str, history: Iterable[Any] | None) -> list[ChatMessage]:
    """
    Seed the transcript for a request.

    History entries may be dicts or objects with ``role`` and ``content``;
    anything that is not a user or assistant turn is dropped.
    """
    messages = [ChatMessage(role=MessageRole.SYSTEM, content=build_system_prompt(user))]
    for entry in history or []:
        role = _history_field(entry, "role")
        content = _history_field(entry, "content")
        if not isinstance(role, str) or role not in HISTORY_ROLES or not isinstance(content, str):
            continue
        messages.append(ChatMessage(role=MessageRole(role), content=content))
    messages.append(ChatMessage(role=MessageRole.USER, content=message))
    return messages


class ConversationOrchestrator:
    """
    Drives a bounded tool-calling exchange with an LLM provider.

    Example:
        orchestrator = ConversationOrchestrator(provider, ToolExecutor(TaskStore()))
        reply = await orchestrator.run("Show my pending tasks", [], user)
        print(reply.response, reply.tools_called)
    """

    def __init__(
        self,
        provider: LLMProvider,
        executor: ToolExecutor,
        *,
        max_rounds: int | None = None,
        model_id: str | None = None,
    ):
        self.provider = provider
        self.executor = executor
        self.max_rounds = max_rounds if max_rounds is not None else settings.AI_MAX_TOOL_ROUNDS
        self.model_id = model_id

    async def run(self, message: str, history: Iterable[Any] | None, user) -> AssistantReply:
        """
        Run the loop to completion.

        Raises:
            ToolLoopLimitExceeded: If the model still wants tools after ``max_rounds``.
            MalformedToolCallError: If a tool call carries unparseable arguments.
            LLMProviderError: On provider failures; nothing is retried.
        """
        messages = build_transcript(user, message, history)
        catalog = self.executor.catalog()
        usage = TokenUsage()
        tools_called: list[str] = []
        model_calls = 0
        rounds = 0

        while True:
            response = await self.provider.complete_with_tools_async(
                messages, catalog, model_id=self.model_id
            )
            model_calls += 1
            usage.add(response.usage)

            tool_calls = response.get_tool_calls()
            if not tool_calls:
                break

            if rounds >= self.max_rounds:
                logger.warning(
                    "Tool loop for user %s hit the %d round limit (tools: %s)",
                    user.pk, self.max_rounds, tools_called,
                )
                raise ToolLoopLimitExceeded(self.max_rounds, tools_called)
            rounds += 1

            logger.debug("Round %d: model requested %d tool call(s)", rounds, len(tool_calls))
            messages.append(ChatMessage(
                role=MessageRole.ASSISTANT,
                content=response.content or None,
                tool_calls=[call.to_dict() for call in tool_calls],
            ))

            # One at a time, in the order the model returned them. Every call
            # id gets a tool turn, or the provider rejects the next request.
            for call in tool_calls:
                if call.type != "function":
                    logger.debug("Skipping non-function tool call %s (%s)", call.id, call.type)
                    result = ToolError(f"Unsupported tool call type: {call.type}")
                else:
                    logger.info("Executing tool '%s' (call %s)", call.name, call.id)
                    result = await sync_to_async(self.executor.execute)(
                        call.name, call.arguments, user
                    )
                    tools_called.append(call.name)
                messages.append(ChatMessage(
                    role=MessageRole.TOOL,
                    content=result.to_json(),
                    tool_call_id=call.id,
                ))

        final_usage = usage.as_dict()
        logger.info(
            "Assistant reply for user %s after %d model call(s); tools=%s usage=%s",
            user.pk, model_calls, tools_called, final_usage,
        )
        return AssistantReply(
            response=response.content or FALLBACK_RESPONSE,
            usage=final_usage,
            tools_called=tools_called,
            model_calls=model_calls,
        )
