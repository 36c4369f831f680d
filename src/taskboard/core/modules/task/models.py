from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from taskboard.core.db import MongoModel
from taskboard.utils import now


class TaskStatus(StrEnum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class Task(MongoModel):
    """To-do item owned by exactly one user.

    Indexed on (owner_id, created_at desc).
    """

    owner_id: UUID  # never changes after creation
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime | None = None  # Last effective update


class TaskPage(BaseModel):
    """One page of a user's tasks."""

    tasks: list[Task] = Field(..., description="Tasks on the current page, newest first")
    total: int = Field(..., description="Number of matching tasks across all pages", ge=0)
    page: int = Field(..., description="Current page number, 1-based", ge=1)
    total_pages: int = Field(..., alias="totalPages", description="Number of pages, at least 1", ge=1)
    has_more: bool = Field(..., alias="hasMore", description="Whether pages follow the current one")

    model_config = ConfigDict(populate_by_name=True)
