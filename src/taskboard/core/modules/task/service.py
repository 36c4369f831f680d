from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from taskboard.core.core import Service
from taskboard.core.db import owned_by
from taskboard.core.modules.task.models import Task, TaskPage, TaskStatus
from taskboard.core.modules.task.query import TASK_SORT, build_task_query
from taskboard.core.pagination import DEFAULT_PAGE_LIMIT, clamp_limit, clamp_page, count_pages
from taskboard.errors import AccessDeniedError, NotFoundError, UserError, ValidationError
from taskboard.utils import now

logger = structlog.get_logger(__name__)


def _require_title(title: str | None) -> str:
    if title is None or not title.strip():
        raise ValidationError("Title is required")
    return title.strip()


class TaskService(Service):
    """Manages tasks, every operation scoped to the owning user.

    Reads and writes on a single task match `_id` and `owner_id` in one query,
    so ownership cannot change between the check and the write.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("tasks")

    async def on_start(self) -> None:
        """Create index for per-owner listing, newest first."""
        await self._collection.create_index([("owner_id", 1), ("created_at", -1)])

    async def list_tasks(
        self,
        owner_id: UUID,
        page: int = 1,
        limit: int = DEFAULT_PAGE_LIMIT,
        search: str | None = None,
        status: str | None = None,
    ) -> TaskPage:
        """Get one page of the owner's tasks, newest first.

        Args:
            owner_id: The user whose tasks are listed
            page: 1-based page number, clamped to [1, MAX_PAGE]
            limit: Page size, clamped to [1, 50]
            search: Optional case-insensitive substring of title or description
            status: Optional status filter; unknown values are ignored

        Returns:
            The requested page; a page past the end has no tasks
        """
        page = clamp_page(page)
        limit = clamp_limit(limit)
        query = build_task_query(owner_id, search, status)

        tasks, total = await Task.find_page(self._collection, query, sort=TASK_SORT, page=page, limit=limit)

        logger.debug("list_tasks", owner_id=owner_id, query=query, total=total, page=page, limit=limit, returned=len(tasks))
        return TaskPage(
            tasks=tasks,
            total=total,
            page=page,
            total_pages=count_pages(total, limit),
            has_more=page * limit < total,
        )

    async def get_task(self, owner_id: UUID, task_id: UUID) -> Task:
        """Get a task owned by `owner_id`."""
        doc = await self._collection.find_one(owned_by(task_id, owner_id))
        if doc is None:
            raise await self._miss_error(task_id)
        return Task.model_validate(doc)

    async def create_task(
        self, owner_id: UUID, title: str | None, description: str | None = None, status: TaskStatus | None = None
    ) -> Task:
        """Create a task; description defaults to empty and status to Pending."""
        task = Task(
            owner_id=owner_id,
            title=_require_title(title),
            description=description or "",
            status=status or TaskStatus.PENDING,
        )
        await self._collection.insert_one(task.to_mongo())
        logger.info("task_created", task_id=task.id, owner_id=owner_id)
        return task

    async def update_task(
        self,
        owner_id: UUID,
        task_id: UUID,
        title: str | None = None,
        description: str | None = None,
        status: TaskStatus | None = None,
    ) -> Task:
        """Update supplied fields only (partial update).

        None means "not supplied". An empty description clears it, while an empty
        title is rejected. With nothing supplied the stored task is returned as is.
        """
        update_doc: dict[str, Any] = {}
        if title is not None:
            update_doc["title"] = _require_title(title)
        if description is not None:
            update_doc["description"] = description
        if status is not None:
            update_doc["status"] = status

        if not update_doc:
            return await self.get_task(owner_id, task_id)

        update_doc["updated_at"] = now()
        doc = await self._collection.find_one_and_update(
            owned_by(task_id, owner_id),
            {"$set": update_doc},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise await self._miss_error(task_id)

        logger.debug("task_updated", task_id=task_id, fields=sorted(update_doc))
        return Task.model_validate(doc)

    async def delete_task(self, owner_id: UUID, task_id: UUID) -> None:
        """Delete a task; deleting a missing task is an error."""
        result = await self._collection.delete_one(owned_by(task_id, owner_id))
        if result.deleted_count == 0:
            raise await self._miss_error(task_id)
        logger.info("task_deleted", task_id=task_id, owner_id=owner_id)

    async def _miss_error(self, task_id: UUID) -> UserError:
        """Explain why an owner-scoped lookup matched nothing."""
        if await self._collection.count_documents({"_id": task_id}, limit=1) > 0:
            return AccessDeniedError("Not authorized to access this task")
        return NotFoundError("Task not found")
