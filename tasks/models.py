from django.conf import settings
from django.db import models
from django.utils import timezone

from tasks.managers import ProjectQuerySet, TaskQuerySet


class Project(models.Model):
    """
    A bucket of related tasks.

    One distinguished project (``settings.DEFAULT_PROJECT_NAME``, "Office Tasks"
    out of the box) receives tasks created without an explicit project.
    """

    name = models.CharField(
        max_length=255,
        unique=True,
        help_text="Project name"
    )
    description = models.TextField(
        blank=True,
        help_text="Project description"
    )
    icon = models.CharField(
        max_length=50,
        blank=True,
        help_text="Icon identifier shown next to the project name"
    )

    # Metadata
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProjectQuerySet.as_manager()

    class Meta:
        verbose_name = "Project"
        verbose_name_plural = "Projects"
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    @property
    def is_default(self):
        return self.name == settings.DEFAULT_PROJECT_NAME


class Task(models.Model):
    """
    A unit of work handed from one member (creator) to another (assignee).

    Completion only moves forward: ``completed`` flips from False to True.
    """

    class Priority(models.TextChoices):
        LOW = 'low', 'Low'
        MEDIUM = 'medium', 'Medium'
        HIGH = 'high', 'High'

    title = models.CharField(
        max_length=255,
        help_text="Short summary of the task"
    )
    description = models.TextField(
        blank=True,
        default='',
        help_text="Details"
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='created_tasks',
        help_text="Member who created (assigned) the task"
    )
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='assigned_tasks',
        help_text="Member responsible for the task"
    )
    project = models.ForeignKey(
        Project,
        on_delete=models.PROTECT,
        related_name='tasks',
        help_text="Project the task belongs to"
    )
    completed = models.BooleanField(default=False)
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
    )
    is_favorite = models.BooleanField(default=False)
    due_date = models.DateTimeField(
        blank=True,
        null=True,
        help_text="Deadline, if any"
    )

    # Metadata
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TaskQuerySet.as_manager()

    class Meta:
        verbose_name = "Task"
        verbose_name_plural = "Tasks"
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['completed', '-created_at'], name='task_completed_created_idx'),
        ]

    def __str__(self):
        return self.title

    @property
    def status(self):
        return 'completed' if self.completed else 'pending'

    def mark_completed(self):
        """
        Flip the task to completed with a single conditional UPDATE.

        Returns:
            True if this call completed the task, False if it was already done.
        """
        now = timezone.now()
        updated = Task.objects.filter(pk=self.pk, completed=False).update(
            completed=True, updated_at=now
        )
        if updated:
            self.completed = True
            self.updated_at = now
        return bool(updated)
