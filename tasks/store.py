"""
Data access for the workspace assistant.

``TaskStore`` collects every query the assistant's tools run against tasks,
projects and members. It is passed to the tool executor rather than imported
by the tools.
"""

import logging
from enum import Enum

from django.contrib.auth import get_user_model

from .models import Project, Task

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 10
SEARCH_LIMIT = 10
RECENT_LIMIT = 5


class TaskFilter(str, Enum):
    """Views over the task list."""

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"
    MY_TASKS = "my_tasks"
    ASSIGNED_TO_ME = "assigned_to_me"
    CREATED_BY_ME = "created_by_me"

    @classmethod
    def parse(cls, value):
        """Map free-form input to a filter; anything unrecognised means ALL."""
        try:
            return cls(value)
        except ValueError:
            return cls.ALL


class TaskStore:
    """
    Synchronous repository over the task tables.

    All methods hit the database; call them from async code through
    ``sync_to_async``.
    """

    def list_tasks(self, user, task_filter=TaskFilter.ALL, limit=DEFAULT_LIST_LIMIT):
        """
        Newest tasks matching a filter.

        Args:
            user: The member the ``my_tasks``/``assigned_to_me``/``created_by_me``
                filters are relative to.
            task_filter: A ``TaskFilter`` or its string value.
            limit: Maximum number of tasks; non-positive values use the default.
        """
        task_filter = TaskFilter.parse(task_filter)
        if not limit or limit <= 0:
            limit = DEFAULT_LIST_LIMIT

        tasks = Task.objects.with_people()
        if task_filter == TaskFilter.PENDING:
            tasks = tasks.pending()
        elif task_filter == TaskFilter.COMPLETED:
            tasks = tasks.completed()
        elif task_filter in (TaskFilter.MY_TASKS, TaskFilter.ASSIGNED_TO_ME):
            tasks = tasks.assigned_to(user)
        elif task_filter == TaskFilter.CREATED_BY_ME:
            tasks = tasks.created_by_user(user)

        return list(tasks.newest_first()[:limit])

    def resolve_assignee(self, reference):
        """Active member matching an email or name fragment, or None."""
        return get_user_model().objects.active().match_reference(reference)

    def default_project(self):
        return Project.objects.default()

    def create_task(self, *, creator, assignee, project, title, description='',
                    priority=Task.Priority.MEDIUM, due_date=None):
        task = Task.objects.create(
            title=title,
            description=description or '',
            created_by=creator,
            assignee=assignee,
            project=project,
            priority=priority,
            due_date=due_date,
        )
        logger.info(
            "Task %s created by user %s for user %s", task.pk, creator.pk, assignee.pk
        )
        return task

    def get_task(self, task_id):
        """Task by id regardless of state, or None."""
        return Task.objects.with_people().filter(pk=task_id).first()

    def find_open_task(self, title_fragment):
        """Newest incomplete task whose title contains the fragment, or None."""
        return (
            Task.objects.pending()
            .filter(title__icontains=title_fragment)
            .newest_first()
            .first()
        )

    def complete_task(self, task):
        """
        Mark a task completed.

        Returns:
            True if the task changed, False if it was already completed.
        """
        changed = task.mark_completed()
        if changed:
            logger.info("Task %s marked completed", task.pk)
        return changed

    def status_counts(self):
        return Task.objects.status_counts()

    def pending_count_for(self, user):
        return Task.objects.pending().assigned_to(user).count()

    def pending_by_priority(self):
        return Task.objects.pending().count_by_priority()

    def recent_tasks(self, limit=RECENT_LIMIT):
        return list(Task.objects.newest_first()[:limit])

    def active_users(self):
        return list(get_user_model().objects.active().order_by('name', 'id'))

    def search_tasks(self, query, limit=SEARCH_LIMIT):
        """Case-insensitive substring search; an empty query matches everything."""
        tasks = Task.objects.with_people()
        if query:
            tasks = tasks.search(query)
        return list(tasks.newest_first()[:limit])
