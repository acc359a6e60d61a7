"""
Exception hierarchy for assistant orchestration errors.

Domain misses inside tools (unknown assignee, task not found) are not
exceptions; they come back as ``ToolError`` values. These classes cover
failures that abort the whole request.
"""


class AssistantError(Exception):
    """Base exception for assistant orchestration errors."""

    pass


class MalformedToolCallError(AssistantError):
    """Raised when the model's tool-call arguments are not a JSON object."""

    def __init__(self, tool_name: str, raw_arguments: str, reason: str):
        super().__init__(
            f"Malformed arguments for tool '{tool_name}': {reason}"
        )
        self.tool_name = tool_name
        self.raw_arguments = raw_arguments


class ToolLoopLimitExceeded(AssistantError):
    """Raised when the model keeps requesting tools past the round limit."""

    def __init__(self, max_rounds: int, tools_called: list[str] | None = None):
        super().__init__(
            f"Model still requested tools after {max_rounds} rounds"
        )
        self.max_rounds = max_rounds
        self.tools_called = tools_called or []
