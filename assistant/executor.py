"""
Dispatch of model tool calls to tool implementations.
"""

import json
import logging

from pydantic import ValidationError

from tasks.store import TaskStore

from .exceptions import MalformedToolCallError
from .results import ToolError
from .tools import DEFAULT_TOOLS

logger = logging.getLogger(__name__)


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "arguments"
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)


class ToolExecutor:
    """
    Maps ``(tool name, JSON arguments, calling user)`` to a ``ToolResult``.

    Domain misses and schema-invalid arguments come back as ``ToolError``
    so the model can recover. Arguments that are not a JSON object at all
    raise ``MalformedToolCallError``.

    Example:
        executor = ToolExecutor(TaskStore())
        result = executor.execute("list_tasks", '{"filter": "pending"}', user)
        transcript_text = result.to_json()
    """

    def __init__(self, store: TaskStore, tools=None):
        self.store = store
        self._tools = {}
        for tool_class in tools or DEFAULT_TOOLS:
            tool = tool_class(store)
            self._tools[tool.name] = tool

    def catalog(self) -> list[dict]:
        """Function definitions for every tool, in registration order."""
        return [tool.definition() for tool in self._tools.values()]

    def execute(self, name: str, raw_arguments: str | None, user):
        tool = self._tools.get(name)
        if tool is None:
            logger.warning("Model requested unknown tool '%s'", name)
            return ToolError(f"Unknown tool: {name}")

        arguments = self._parse_arguments(name, raw_arguments)

        try:
            args = tool.Arguments.model_validate(arguments)
        except ValidationError as e:
            logger.info("Invalid arguments for tool '%s': %s", name, e)
            return ToolError(
                f"Invalid arguments for {name}: {_describe_validation_error(e)}"
            )

        logger.debug("Running tool '%s' for user %s", name, user.pk)
        return tool.run(user, args)

    @staticmethod
    def _parse_arguments(name: str, raw_arguments: str | None) -> dict:
        if raw_arguments is None or not raw_arguments.strip():
            return {}
        try:
            arguments = json.loads(raw_arguments)
        except json.JSONDecodeError as e:
            raise MalformedToolCallError(name, raw_arguments, str(e)) from e
        if not isinstance(arguments, dict):
            raise MalformedToolCallError(
                name, raw_arguments, f"expected a JSON object, got {type(arguments).__name__}"
            )
        return arguments
