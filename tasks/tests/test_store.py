"""Tests for task querysets and the TaskStore repository."""

import pytest
from django.conf import settings
from django.contrib.auth import get_user_model

from tasks.models import Project, Task
from tasks.store import TaskFilter, TaskStore

User = get_user_model()


@pytest.fixture
def store():
    return TaskStore()


@pytest.fixture
def people(db):
    alice = User.objects.create_user(email="alice@co.com", name="Alice", password="pw")
    bob = User.objects.create_user(email="bob@co.com", name="Bob", password="pw")
    return alice, bob


@pytest.fixture
def project(db):
    return Project.objects.get_or_create(name=settings.DEFAULT_PROJECT_NAME)[0]


def make_task(project, creator, assignee, title, **kwargs):
    return Task.objects.create(
        project=project,
        created_by=creator,
        assignee=assignee,
        title=title,
        **kwargs,
    )


class TestDefaultProject:

    def test_migration_seeds_default_project(self, db):
        project = Project.objects.default()

        assert project is not None
        assert project.name == settings.DEFAULT_PROJECT_NAME
        assert project.is_default

    def test_default_returns_none_when_missing(self, db):
        Project.objects.filter(name=settings.DEFAULT_PROJECT_NAME).delete()

        assert Project.objects.default() is None


class TestTaskFilter:

    def test_parse_known_values(self):
        assert TaskFilter.parse("pending") is TaskFilter.PENDING
        assert TaskFilter.parse("assigned_to_me") is TaskFilter.ASSIGNED_TO_ME

    def test_parse_unknown_falls_back_to_all(self):
        assert TaskFilter.parse("overdue") is TaskFilter.ALL
        assert TaskFilter.parse(None) is TaskFilter.ALL


class TestListTasks:

    def test_filters(self, store, people, project):
        alice, bob = people
        mine = make_task(project, bob, alice, "Mine")
        theirs = make_task(project, alice, bob, "Theirs", completed=True)

        assert store.list_tasks(alice, TaskFilter.PENDING) == [mine]
        assert store.list_tasks(alice, TaskFilter.COMPLETED) == [theirs]
        assert store.list_tasks(alice, TaskFilter.ASSIGNED_TO_ME) == [mine]
        assert store.list_tasks(alice, TaskFilter.MY_TASKS) == [mine]
        assert store.list_tasks(alice, TaskFilter.CREATED_BY_ME) == [theirs]

    def test_newest_first(self, store, people, project):
        alice, _bob = people
        first = make_task(project, alice, alice, "First")
        second = make_task(project, alice, alice, "Second")

        assert store.list_tasks(alice) == [second, first]

    def test_unknown_filter_matches_all(self, store, people, project):
        alice, bob = people
        make_task(project, alice, bob, "One")
        make_task(project, bob, alice, "Two", completed=True)

        assert store.list_tasks(alice, "bogus") == store.list_tasks(alice, "all")

    def test_limit_defaults_to_ten(self, store, people, project):
        alice, _bob = people
        for i in range(12):
            make_task(project, alice, alice, f"Task {i}")

        assert len(store.list_tasks(alice)) == 10
        assert len(store.list_tasks(alice, limit=0)) == 10
        assert len(store.list_tasks(alice, limit=-3)) == 10
        assert len(store.list_tasks(alice, limit=3)) == 3


class TestCompletion:

    def test_complete_task_only_changes_once(self, store, people, project):
        alice, _bob = people
        task = make_task(project, alice, alice, "Write report")

        assert store.complete_task(task) is True
        assert store.complete_task(Task.objects.get(pk=task.pk)) is False
        assert Task.objects.get(pk=task.pk).completed

    def test_find_open_task_ignores_completed(self, store, people, project):
        alice, _bob = people
        make_task(project, alice, alice, "Quarterly report", completed=True)

        assert store.find_open_task("report") is None

        open_task = make_task(project, alice, alice, "Monthly REPORT")
        assert store.find_open_task("report") == open_task


class TestAggregates:

    def test_status_counts_add_up(self, store, people, project):
        alice, bob = people
        make_task(project, alice, bob, "A")
        make_task(project, alice, bob, "B", completed=True)
        make_task(project, bob, alice, "C")

        counts = store.status_counts()

        assert counts == {"total": 3, "pending": 2, "completed": 1}
        assert counts["total"] == counts["pending"] + counts["completed"]

    def test_status_counts_empty(self, store, db):
        assert store.status_counts() == {"total": 0, "pending": 0, "completed": 0}

    def test_pending_by_priority_excludes_completed(self, store, people, project):
        alice, _bob = people
        make_task(project, alice, alice, "A", priority="high")
        make_task(project, alice, alice, "B", priority="high")
        make_task(project, alice, alice, "C", priority="low", completed=True)

        assert store.pending_by_priority() == {"high": 2}

    def test_pending_count_for(self, store, people, project):
        alice, bob = people
        make_task(project, bob, alice, "A")
        make_task(project, bob, alice, "B", completed=True)
        make_task(project, alice, bob, "C")

        assert store.pending_count_for(alice) == 1


class TestSearchAndUsers:

    def test_search_matches_title_or_description(self, store, people, project):
        alice, _bob = people
        by_title = make_task(project, alice, alice, "Budget review")
        by_description = make_task(project, alice, alice, "Email", description="about the BUDGET")
        make_task(project, alice, alice, "Unrelated")

        assert store.search_tasks("budget") == [by_description, by_title]

    def test_empty_search_matches_everything_capped(self, store, people, project):
        alice, _bob = people
        for i in range(11):
            make_task(project, alice, alice, f"Task {i}")

        assert len(store.search_tasks("")) == 10

    def test_active_users_only(self, store, people):
        User.objects.create_user(email="old@co.com", name="Old", password="pw", is_active=False)

        assert [u.email for u in store.active_users()] == ["alice@co.com", "bob@co.com"]

    def test_resolve_assignee(self, store, people):
        _alice, bob = people

        assert store.resolve_assignee("BOB@co.com") == bob
        assert store.resolve_assignee("bo") == bob
        assert store.resolve_assignee("carol") is None
