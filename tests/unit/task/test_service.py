"""Tests for TaskService ownership, listing and partial updates."""

from datetime import timedelta
from uuid import UUID, uuid4

import pytest

from taskboard.core.modules.task.models import Task, TaskStatus
from taskboard.core.pagination import MAX_PAGE
from taskboard.errors import AccessDeniedError, NotFoundError, ValidationError
from taskboard.utils import now

OWNER = UUID("87654321-4321-8765-4321-876543218765")
OTHER = UUID("11111111-2222-3333-4444-555555555555")


@pytest.fixture
def tasks(core):
    return core.services.task


@pytest.fixture
def seed_tasks(database):
    """Insert tasks directly with increasing creation times (oldest first)."""

    def _seed(owner_id: UUID, titles: list[str], description: str = "") -> list[Task]:
        collection = database.get_collection("tasks")
        start = now() - timedelta(hours=len(titles))
        seeded = []
        for offset, title in enumerate(titles):
            task = Task(owner_id=owner_id, title=title, description=description, created_at=start + timedelta(minutes=offset))
            collection.docs.append(task.to_mongo())
            seeded.append(task)
        return seeded

    return _seed


class TestCreateTask:
    async def test_defaults(self, tasks):
        task = await tasks.create_task(OWNER, "Buy milk")
        assert task.title == "Buy milk"
        assert task.description == ""
        assert task.status is TaskStatus.PENDING
        assert task.owner_id == OWNER
        assert task.created_at is not None
        assert task.updated_at is None

    @pytest.mark.parametrize("title", [None, "", "   "])
    async def test_blank_title_rejected(self, tasks, database, title):
        with pytest.raises(ValidationError, match="Title is required"):
            await tasks.create_task(OWNER, title)
        assert database.get_collection("tasks").docs == []

    async def test_explicit_fields(self, tasks):
        task = await tasks.create_task(OWNER, "  Report  ", "quarterly", TaskStatus.IN_PROGRESS)
        assert task.title == "Report"
        assert task.description == "quarterly"
        assert task.status is TaskStatus.IN_PROGRESS


class TestListTasks:
    async def test_newest_first(self, tasks, seed_tasks):
        seed_tasks(OWNER, ["first", "second", "third"])
        page = await tasks.list_tasks(OWNER)
        assert [task.title for task in page.tasks] == ["third", "second", "first"]

    async def test_only_owner_tasks(self, tasks, seed_tasks):
        seed_tasks(OWNER, ["mine"])
        seed_tasks(OTHER, ["theirs"])
        page = await tasks.list_tasks(OWNER)
        assert [task.title for task in page.tasks] == ["mine"]
        assert page.total == 1

    async def test_pagination(self, tasks, seed_tasks):
        seed_tasks(OWNER, [f"task {n}" for n in range(12)])

        first = await tasks.list_tasks(OWNER, page=1, limit=5)
        assert [task.title for task in first.tasks] == ["task 11", "task 10", "task 9", "task 8", "task 7"]
        assert first.total == 12
        assert first.total_pages == 3
        assert first.has_more is True

        last = await tasks.list_tasks(OWNER, page=3, limit=5)
        assert [task.title for task in last.tasks] == ["task 1", "task 0"]
        assert last.has_more is False

    async def test_page_past_end_is_empty(self, tasks, seed_tasks):
        seed_tasks(OWNER, ["only"])
        page = await tasks.list_tasks(OWNER, page=9, limit=5)
        assert page.tasks == []
        assert page.page == 9
        assert page.total == 1
        assert page.total_pages == 1

    async def test_huge_page_is_clamped_and_skips_the_find(self, tasks, seed_tasks, database, monkeypatch):
        seed_tasks(OWNER, ["only"])

        def fail_find(*args, **kwargs):
            raise AssertionError("find should not run for a page past the end")

        monkeypatch.setattr(database.get_collection("tasks"), "find", fail_find)
        page = await tasks.list_tasks(OWNER, page=10**19, limit=10)
        assert page.tasks == []
        assert page.page == MAX_PAGE
        assert page.total == 1
        assert page.has_more is False

    async def test_clamps_page_and_limit(self, tasks, seed_tasks):
        seed_tasks(OWNER, [f"task {n}" for n in range(60)])
        page = await tasks.list_tasks(OWNER, page=0, limit=1000)
        assert page.page == 1
        assert len(page.tasks) == 50
        assert page.total_pages == 2

        page = await tasks.list_tasks(OWNER, page=-3, limit=0)
        assert page.page == 1
        assert len(page.tasks) == 1

    async def test_empty_list_has_one_page(self, tasks):
        page = await tasks.list_tasks(OWNER)
        assert page.tasks == []
        assert page.total == 0
        assert page.total_pages == 1
        assert page.has_more is False

    async def test_search_title_or_description_case_insensitive(self, tasks):
        await tasks.create_task(OWNER, "ABC report")
        await tasks.create_task(OWNER, "groceries", "buy xabcx")
        await tasks.create_task(OWNER, "unrelated", "nothing here")
        await tasks.create_task(OTHER, "abc but not mine")

        page = await tasks.list_tasks(OWNER, search="abc")
        assert sorted(task.title for task in page.tasks) == ["ABC report", "groceries"]
        assert page.total == 2

    async def test_status_filter(self, tasks):
        await tasks.create_task(OWNER, "todo")
        await tasks.create_task(OWNER, "done", status=TaskStatus.COMPLETED)

        completed = await tasks.list_tasks(OWNER, status="Completed")
        assert [task.title for task in completed.tasks] == ["done"]

        everything = await tasks.list_tasks(OWNER, status="All")
        assert everything.total == 2


class TestOwnership:
    async def test_get_own_task(self, tasks):
        created = await tasks.create_task(OWNER, "mine")
        assert (await tasks.get_task(OWNER, created.id)).title == "mine"

    async def test_other_owner_is_forbidden(self, tasks):
        created = await tasks.create_task(OWNER, "mine")

        with pytest.raises(AccessDeniedError):
            await tasks.get_task(OTHER, created.id)
        with pytest.raises(AccessDeniedError):
            await tasks.update_task(OTHER, created.id, title="hijacked")
        with pytest.raises(AccessDeniedError):
            await tasks.delete_task(OTHER, created.id)

        unchanged = await tasks.get_task(OWNER, created.id)
        assert unchanged.title == "mine"

    async def test_missing_task_not_found(self, tasks):
        with pytest.raises(NotFoundError):
            await tasks.get_task(OWNER, uuid4())
        with pytest.raises(NotFoundError):
            await tasks.update_task(OWNER, uuid4(), title="x")
        with pytest.raises(NotFoundError):
            await tasks.delete_task(OWNER, uuid4())

    async def test_delete_twice(self, tasks):
        created = await tasks.create_task(OWNER, "once")
        await tasks.delete_task(OWNER, created.id)
        with pytest.raises(NotFoundError):
            await tasks.delete_task(OWNER, created.id)


class TestUpdateTask:
    async def test_only_supplied_fields_change(self, tasks):
        created = await tasks.create_task(OWNER, "title", "details")
        updated = await tasks.update_task(OWNER, created.id, status=TaskStatus.COMPLETED)
        assert updated.title == "title"
        assert updated.description == "details"
        assert updated.status is TaskStatus.COMPLETED
        assert updated.updated_at is not None
        assert updated.owner_id == OWNER

    async def test_empty_description_clears_it(self, tasks):
        created = await tasks.create_task(OWNER, "title", "details")
        updated = await tasks.update_task(OWNER, created.id, description="")
        assert updated.description == ""

    async def test_blank_title_rejected(self, tasks):
        created = await tasks.create_task(OWNER, "title")
        with pytest.raises(ValidationError):
            await tasks.update_task(OWNER, created.id, title="  ")
        assert (await tasks.get_task(OWNER, created.id)).title == "title"

    async def test_no_fields_is_a_no_op(self, tasks, database):
        created = await tasks.create_task(OWNER, "title", "details")
        before = database.get_collection("tasks").docs[0].copy()

        result = await tasks.update_task(OWNER, created.id)

        assert result == Task.model_validate(before)
        assert database.get_collection("tasks").docs[0] == before

    async def test_no_fields_still_checks_ownership(self, tasks):
        created = await tasks.create_task(OWNER, "title")
        with pytest.raises(AccessDeniedError):
            await tasks.update_task(OTHER, created.id)
