"""
Task tools: list, create, complete, summarize and search.
"""

import logging
from datetime import datetime, time
from typing import Annotated

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from pydantic import StringConstraints

from tasks.models import Task
from tasks.store import DEFAULT_LIST_LIMIT, TaskFilter

from ..results import ToolError, ToolOk
from .base import TaskTool, ToolArguments, serialize_timestamp

logger = logging.getLogger(__name__)


def task_item(task, *, include_creator=True):
    item = {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status": task.status,
        "priority": task.priority,
        "assignedTo": task.assignee.name,
    }
    if include_creator:
        item["createdBy"] = task.created_by.name
        item["createdAt"] = serialize_timestamp(task.created_at)
    return item


def parse_due_date(value):
    """
    Parse an ISO date or datetime into an aware datetime.

    A bare date means midnight in the current timezone. Returns None when
    the value cannot be parsed.
    """
    value = value.strip()
    try:
        parsed = parse_datetime(value)
        if parsed is None:
            day = parse_date(value)
            if day is None:
                return None
            parsed = datetime.combine(day, time.min)
    except ValueError:
        return None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


class ListTasksTool(TaskTool):

    class Arguments(ToolArguments):
        filter: str | None = None
        limit: int | None = None

    name = "list_tasks"
    description = (
        "List tasks in the workspace. Use a filter to narrow to pending or "
        "completed tasks, tasks assigned to the current user, or tasks the "
        "current user created."
    )
    parameters = {
        "type": "object",
        "properties": {
            "filter": {
                "type": "string",
                "enum": [f.value for f in TaskFilter],
                "description": "Which tasks to list (default: all)",
            },
            "limit": {
                "type": "integer",
                "description": f"Maximum number of tasks to return (default: {DEFAULT_LIST_LIMIT})",
            },
        },
    }

    def run(self, user, args):
        tasks = self.store.list_tasks(
            user,
            TaskFilter.parse(args.filter),
            args.limit or DEFAULT_LIST_LIMIT,
        )
        return ToolOk([task_item(task) for task in tasks])


class CreateTaskTool(TaskTool):

    class Arguments(ToolArguments):
        title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
        description: str | None = None
        assignee: str | None = None
        priority: str | None = None
        due_date: str | None = None

    name = "create_task"
    description = (
        "Create a new task in the default project. The assignee can be given "
        "by email or by (part of) their name; omit it to assign the task to "
        "the current user."
    )
    parameters = {
        "type": "object",
        "properties": {
            "title": {
                "type": "string",
                "description": "Task title",
            },
            "description": {
                "type": "string",
                "description": "Optional details",
            },
            "assignee": {
                "type": "string",
                "description": "Email or name of the member to assign the task to",
            },
            "priority": {
                "type": "string",
                "enum": list(Task.Priority.values),
                "description": "Task priority (default: medium)",
            },
            "due_date": {
                "type": "string",
                "description": "Due date in ISO format (YYYY-MM-DD or full timestamp)",
            },
        },
        "required": ["title"],
    }

    def run(self, user, args):
        assignee = user
        if args.assignee:
            assignee = self.store.resolve_assignee(args.assignee)
            if assignee is None:
                return ToolError(
                    f'User "{args.assignee}" not found. '
                    'Use list_users to see available team members.'
                )

        project = self.store.default_project()
        if project is None:
            logger.warning("Default project is missing; cannot create task")
            return ToolError("Default project not configured")

        due_date = None
        if args.due_date:
            due_date = parse_due_date(args.due_date)
            if due_date is None:
                return ToolError(
                    f'Could not understand due date "{args.due_date}". '
                    'Use YYYY-MM-DD or an ISO 8601 timestamp.'
                )

        priority = (args.priority or "").lower()
        if priority not in Task.Priority.values:
            priority = Task.Priority.MEDIUM

        task = self.store.create_task(
            creator=user,
            assignee=assignee,
            project=project,
            title=args.title,
            description=args.description,
            priority=priority,
            due_date=due_date,
        )
        return ToolOk({
            "success": True,
            "task": {
                "id": task.id,
                "title": task.title,
                "assignedTo": assignee.name,
                "priority": task.priority,
                "dueDate": serialize_timestamp(task.due_date),
            },
        })


class CompleteTaskTool(TaskTool):

    class Arguments(ToolArguments):
        task_id: int | None = None
        task_title: str | None = None

    name = "complete_task"
    description = (
        "Mark a task as completed, either by its id or by part of its title. "
        "Title matching only considers tasks that are still open."
    )
    parameters = {
        "type": "object",
        "properties": {
            "task_id": {
                "type": "integer",
                "description": "ID of the task to complete",
            },
            "task_title": {
                "type": "string",
                "description": "Part of the title of an open task",
            },
        },
    }

    def run(self, user, args):
        task = None
        if args.task_id:
            task = self.store.get_task(args.task_id)
        elif args.task_title:
            task = self.store.find_open_task(args.task_title)

        if task is None:
            return ToolError("Task not found")

        if not self.store.complete_task(task):
            return ToolOk({"message": "Task is already completed"})

        return ToolOk({
            "success": True,
            "message": f'Task "{task.title}" marked as completed',
        })


class TaskSummaryTool(TaskTool):
    name = "get_task_summary"
    description = (
        "Get workspace task statistics: totals, the current user's open "
        "tasks, open tasks by priority and the most recent tasks."
    )

    def run(self, user, args):
        counts = self.store.status_counts()
        return ToolOk({
            "total": counts["total"],
            "pending": counts["pending"],
            "completed": counts["completed"],
            "myPendingTasks": self.store.pending_count_for(user),
            "byPriority": self.store.pending_by_priority(),
            "recentTasks": [
                {
                    "title": task.title,
                    "status": task.status,
                    "createdAt": serialize_timestamp(task.created_at),
                }
                for task in self.store.recent_tasks()
            ],
        })


class SearchTasksTool(TaskTool):

    class Arguments(ToolArguments):
        query: str = ""

    name = "search_tasks"
    description = "Search tasks by keyword in their title or description."
    parameters = {
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Text to look for",
            },
        },
        "required": ["query"],
    }

    def run(self, user, args):
        tasks = self.store.search_tasks(args.query)
        return ToolOk([task_item(task, include_creator=False) for task in tasks])
