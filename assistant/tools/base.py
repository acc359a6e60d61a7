"""
Base class for assistant tools.

A tool pairs an OpenAI function definition (what the model sees) with a
pydantic model that validates the arguments the model sends back, and a
``run`` method that performs the operation against a ``TaskStore``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from tasks.store import TaskStore

    from ..results import ToolResult

logger = logging.getLogger(__name__)


class ToolArguments(BaseModel):
    """Base for tool argument models; unknown keys from the model are ignored."""

    model_config = ConfigDict(extra="ignore")


class NoArguments(ToolArguments):
    pass


class TaskTool(ABC):
    """
    A named operation the model can call.

    Subclasses set ``name``, ``description``, ``parameters`` (JSON schema
    advertised to the model) and ``Arguments`` (validation model), and
    implement ``run``.

    Example:
        tool = ListTasksTool(store)
        args = tool.Arguments.model_validate({"filter": "pending"})
        result = tool.run(user, args)
    """

    name: ClassVar[str]
    description: ClassVar[str]
    parameters: ClassVar[dict[str, Any]] = {"type": "object", "properties": {}}
    Arguments: ClassVar[type[ToolArguments]] = NoArguments

    def __init__(self, store: TaskStore):
        self.store = store

    def definition(self) -> dict[str, Any]:
        """Function definition in the Chat Completions ``tools`` format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    @abstractmethod
    def run(self, user, args: ToolArguments) -> ToolResult:
        """
        Execute against the store on behalf of ``user``.

        Runs synchronously; callers in async code wrap it in ``sync_to_async``.
        """
        pass


def serialize_timestamp(value):
    return value.isoformat() if value else None
