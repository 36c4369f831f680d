from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from taskboard.core.modules.task.models import Task, TaskPage, TaskStatus
from taskboard.core.pagination import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from taskboard.web.deps import AppDep, CurrentUserDep
from taskboard.web.openapi import ErrorResponse, MessageResponse

router: APIRouter = APIRouter(tags=["tasks"])


class CreateTaskRequest(BaseModel):
    """Request to create a new task."""

    title: str | None = Field(None, description="Task title, required and non-blank")
    description: str | None = Field(None, description="Optional details, defaults to empty")
    status: TaskStatus | None = Field(None, description="Initial status, defaults to Pending")

    model_config = {"json_schema_extra": {"examples": [{"title": "Buy milk", "description": "2 liters"}]}}


class UpdateTaskRequest(BaseModel):
    """Request to update a task (partial update).

    Omitted or null fields keep their stored value.
    """

    title: str | None = Field(None, description="New title, must not be blank when given")
    description: str | None = Field(None, description="New description, an empty string clears it")
    status: TaskStatus | None = Field(None, description="New status")

    model_config = {"json_schema_extra": {"examples": [{"status": "Completed"}]}}


@router.get(
    "/tasks",
    summary="List tasks",
    description=f"""Get a page of the current user's tasks, newest first.

- `search` matches title or description, case-insensitive substring
- `status` is one of `Pending`, `In Progress`, `Completed`; any other value (e.g. `All`) is ignored
- `page` is clamped to at least 1, `limit` to 1..{MAX_PAGE_LIMIT}""",
    operation_id="listTasks",
    responses={
        200: {"description": "Page of tasks"},
        400: {"model": ErrorResponse, "description": "Non-numeric page or limit"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_tasks(
    app: AppDep,
    current_user: CurrentUserDep,
    page: Annotated[int, Query(description="Page number, 1-based")] = 1,
    limit: Annotated[int, Query(description="Tasks per page")] = DEFAULT_PAGE_LIMIT,
    search: Annotated[str | None, Query(description="Text to look for in title or description")] = None,
    status: Annotated[str | None, Query(description="Status to filter by")] = None,
) -> TaskPage:
    return await app.list_tasks(current_user, page, limit, search, status)


@router.get(
    "/tasks/{task_id}",
    summary="Get task",
    description="Get a single task. Only its owner can read it.",
    operation_id="getTask",
    responses={
        200: {"description": "Task details"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Task belongs to another user"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def get_task(task_id: str, app: AppDep, current_user: CurrentUserDep) -> Task:
    return await app.get_task(current_user, task_id)


@router.post(
    "/tasks",
    summary="Create task",
    description="Create a task owned by the current user.",
    operation_id="createTask",
    status_code=201,
    responses={
        201: {"description": "Task created"},
        400: {"model": ErrorResponse, "description": "Missing title or invalid status"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_task(request: CreateTaskRequest, app: AppDep, current_user: CurrentUserDep) -> Task:
    return await app.create_task(current_user, request.title, request.description, request.status)


@router.put(
    "/tasks/{task_id}",
    summary="Update task",
    description="Partially update a task. Only the fields provided are changed. Only its owner can update it.",
    operation_id="updateTask",
    responses={
        200: {"description": "Task updated"},
        400: {"model": ErrorResponse, "description": "Blank title or invalid status"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Task belongs to another user"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def update_task(task_id: str, request: UpdateTaskRequest, app: AppDep, current_user: CurrentUserDep) -> Task:
    return await app.update_task(current_user, task_id, request.title, request.description, request.status)


@router.delete(
    "/tasks/{task_id}",
    summary="Delete task",
    description="Delete a task. Only its owner can delete it; deleting twice yields 404.",
    operation_id="deleteTask",
    responses={
        200: {"description": "Task deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Task belongs to another user"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def delete_task(task_id: str, app: AppDep, current_user: CurrentUserDep) -> MessageResponse:
    await app.delete_task(current_user, task_id)
    return MessageResponse(message="Task deleted successfully")
