import asyncio
from dataclasses import dataclass, field, replace
from typing import Any

import structlog

from taskboard.client.api import ApiClient, ApiError
from taskboard.client.config import ClientConfig
from taskboard.core.modules.task.models import Task, TaskStatus

logger = structlog.get_logger(__name__)


@dataclass
class TaskQuery:
    page: int = 1
    limit: int = 6
    search: str = ""
    status: str = "All"


@dataclass
class TaskListState:
    tasks: list[Task] = field(default_factory=list)
    total: int = 0
    total_pages: int = 1
    has_more: bool = False
    error: str | None = None


class TaskList:
    """Drives a paginated, searchable task list against the API.

    Every fetch is tagged with a generation number; a response is applied only if no
    newer fetch was started after it, so a slow stale response never overwrites a newer one.
    Search input is debounced before a fetch starts.
    """

    def __init__(self, api: ApiClient, *, limit: int = 6, debounce_seconds: float = 0.4) -> None:
        self._api = api
        self._debounce_seconds = debounce_seconds
        self._generation = 0
        self._pending_search: asyncio.Task[bool] | None = None
        self.query = TaskQuery(limit=limit)
        self.state = TaskListState()

    @classmethod
    def from_config(cls, api: ApiClient, config: ClientConfig) -> "TaskList":
        return cls(api, limit=config.page_limit, debounce_seconds=config.search_debounce_seconds)

    @property
    def generation(self) -> int:
        return self._generation

    async def refresh(self) -> bool:
        """Fetch the page for the current query; returns False if the result was discarded or failed."""
        self._generation += 1
        generation = self._generation
        query = replace(self.query)

        try:
            page = await self._api.list_tasks(query.page, query.limit, query.search, query.status)
        except ApiError as e:
            if generation == self._generation:
                self.state.error = e.message
            return False

        if generation != self._generation:
            logger.debug("stale_task_page_discarded", generation=generation, latest=self._generation)
            return False

        self.state = TaskListState(
            tasks=page.tasks,
            total=page.total,
            total_pages=page.total_pages,
            has_more=page.has_more,
        )
        return True

    def set_search(self, text: str) -> asyncio.Task[bool]:
        """Update the search text; the fetch starts once input has been quiet for the debounce delay."""
        self.query.search = text
        self.query.page = 1
        self._cancel_pending_search()
        self._pending_search = asyncio.create_task(self._debounced_refresh())
        return self._pending_search

    async def set_status(self, status: str) -> bool:
        self._cancel_pending_search()
        self.query.status = status
        self.query.page = 1
        return await self.refresh()

    async def set_limit(self, limit: int) -> bool:
        self._cancel_pending_search()
        self.query.limit = limit
        self.query.page = 1
        return await self.refresh()

    async def set_page(self, page: int) -> bool:
        self._cancel_pending_search()
        self.query.page = max(1, page)
        return await self.refresh()

    async def save_task(
        self,
        title: str,
        description: str = "",
        status: TaskStatus | None = None,
        task_id: str | None = None,
    ) -> bool:
        """Create a task, or update `task_id` when given, then reload the current page.

        Returns False and records the error when the save fails.
        """
        try:
            if task_id is None:
                await self._api.create_task(title, description, status)
            else:
                fields: dict[str, Any] = {"title": title, "description": description}
                if status is not None:
                    fields["status"] = status
                await self._api.update_task(task_id, **fields)
        except ApiError as e:
            self.state.error = e.message
            return False
        return await self.refresh()

    async def delete_task(self, task_id: str) -> bool:
        """Delete a task and reload the current page."""
        try:
            await self._api.delete_task(task_id)
        except ApiError as e:
            self.state.error = e.message
            return False
        return await self.refresh()

    async def _debounced_refresh(self) -> bool:
        await asyncio.sleep(self._debounce_seconds)
        return await self.refresh()

    def _cancel_pending_search(self) -> None:
        if self._pending_search is not None and not self._pending_search.done():
            self._pending_search.cancel()
        self._pending_search = None
