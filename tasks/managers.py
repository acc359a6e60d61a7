from django.conf import settings
from django.db import models
from django.db.models import Count, Q


class ProjectQuerySet(models.QuerySet):

    def default(self):
        """The project tasks fall back to when none is given, or None if missing."""
        return self.filter(name=settings.DEFAULT_PROJECT_NAME).first()


class TaskQuerySet(models.QuerySet):
    """
    Queryset helpers for tasks.

    Example usage:
        # Caller's open work, newest first, with names preloaded
        Task.objects.assigned_to(user).pending().with_people().newest_first()

        # Dashboard numbers from a single query
        Task.objects.status_counts()
    """

    def pending(self):
        return self.filter(completed=False)

    def completed(self):
        return self.filter(completed=True)

    def assigned_to(self, user):
        return self.filter(assignee=user)

    def created_by_user(self, user):
        return self.filter(created_by=user)

    def search(self, query):
        """Case-insensitive substring match on title or description."""
        return self.filter(
            Q(title__icontains=query) | Q(description__icontains=query)
        )

    def with_people(self):
        """Preload creator, assignee and project for display."""
        return self.select_related('created_by', 'assignee', 'project')

    def newest_first(self):
        return self.order_by('-created_at', '-id')

    def status_counts(self):
        """
        Count tasks by completion state in one query.

        Returns:
            dict with ``total``, ``pending`` and ``completed`` keys. Because the
            three numbers come from the same snapshot, total == pending + completed.
        """
        counts = self.aggregate(
            total=Count('id'),
            pending=Count('id', filter=Q(completed=False)),
            completed=Count('id', filter=Q(completed=True)),
        )
        return {key: value or 0 for key, value in counts.items()}

    def count_by_priority(self):
        """Return ``{priority: count}`` for the tasks in this queryset."""
        rows = self.order_by().values('priority').annotate(count=Count('id'))
        return {row['priority']: row['count'] for row in rows}
