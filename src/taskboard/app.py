from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase

from taskboard.config import Config
from taskboard.core.core import Core
from taskboard.core.modules.task.models import Task, TaskPage, TaskStatus
from taskboard.core.modules.token.models import AuthToken
from taskboard.core.modules.user.models import AuthView, User, UserView
from taskboard.core.pagination import DEFAULT_PAGE_LIMIT
from taskboard.errors import NotFoundError
from taskboard.utils import parse_uuid


class App:
    """Facade for all application operations, resolves the caller before delegating to Core."""

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, database)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def authenticate(self, auth_token: AuthToken) -> User:
        """Resolve the user behind a bearer token."""
        return await self._core.services.access.ensure_authenticated(auth_token)

    async def register(self, name: str | None, email: str | None, password: str | None) -> AuthView:
        """Create an account and sign it in."""
        user = await self._core.services.user.create_user(name, email, password)
        return AuthView.from_user(user, self._core.services.token.issue_token(user.id))

    async def login(self, email: str | None, password: str | None) -> AuthView:
        """Check credentials and issue a session token."""
        user = await self._core.services.user.authenticate(email, password)
        return AuthView.from_user(user, self._core.services.token.issue_token(user.id))

    def get_current_user(self, current_user: User) -> UserView:
        """Get current authenticated user profile."""
        return UserView.from_domain(current_user)

    async def list_tasks(
        self,
        current_user: User,
        page: int = 1,
        limit: int = DEFAULT_PAGE_LIMIT,
        search: str | None = None,
        status: str | None = None,
    ) -> TaskPage:
        """Get a page of the caller's tasks, optionally searched and filtered by status."""
        return await self._core.services.task.list_tasks(current_user.id, page, limit, search, status)

    async def get_task(self, current_user: User, task_id: str) -> Task:
        """Get one of the caller's tasks."""
        return await self._core.services.task.get_task(current_user.id, self._resolve_task_id(task_id))

    async def create_task(
        self, current_user: User, title: str | None, description: str | None = None, status: TaskStatus | None = None
    ) -> Task:
        """Create a task owned by the caller."""
        return await self._core.services.task.create_task(current_user.id, title, description, status)

    async def update_task(
        self,
        current_user: User,
        task_id: str,
        title: str | None = None,
        description: str | None = None,
        status: TaskStatus | None = None,
    ) -> Task:
        """Partially update one of the caller's tasks."""
        task_uuid = self._resolve_task_id(task_id)
        return await self._core.services.task.update_task(current_user.id, task_uuid, title, description, status)

    async def delete_task(self, current_user: User, task_id: str) -> None:
        """Delete one of the caller's tasks."""
        await self._core.services.task.delete_task(current_user.id, self._resolve_task_id(task_id))

    # === Private resolver methods ===
    def _resolve_task_id(self, task_id: str) -> UUID:
        """Parse a task ID from a URL. Raises NotFoundError if it cannot name a task."""
        task_uuid = parse_uuid(task_id)
        if task_uuid is None:
            raise NotFoundError("Task not found")
        return task_uuid
