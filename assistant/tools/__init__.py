"""
Tools the workspace assistant can call.

``DEFAULT_TOOLS`` is the fixed catalog, in the order it is advertised.
"""

from .base import TaskTool, ToolArguments
from .tasks import (
    CompleteTaskTool,
    CreateTaskTool,
    ListTasksTool,
    SearchTasksTool,
    TaskSummaryTool,
)
from .users import ListUsersTool

DEFAULT_TOOLS = [
    ListTasksTool,
    CreateTaskTool,
    CompleteTaskTool,
    TaskSummaryTool,
    ListUsersTool,
    SearchTasksTool,
]

__all__ = [
    "DEFAULT_TOOLS",
    "TaskTool",
    "ToolArguments",
    "ListTasksTool",
    "CreateTaskTool",
    "CompleteTaskTool",
    "TaskSummaryTool",
    "ListUsersTool",
    "SearchTasksTool",
]
