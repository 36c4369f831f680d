"""Pure helpers turning list parameters into MongoDB queries."""

import re
from typing import Any
from uuid import UUID

from taskboard.core.modules.task.models import TaskStatus

TASK_SORT = [("created_at", -1), ("_id", -1)]


def parse_status_filter(status: str | None) -> TaskStatus | None:
    """Return the status to filter by, or None when the value is not a known status (e.g. "All")."""
    if status is None:
        return None
    try:
        return TaskStatus(status)
    except ValueError:
        return None


def build_task_query(owner_id: UUID, search: str | None = None, status: str | None = None) -> dict[str, Any]:
    """Build the list query for one owner.

    Search is a case-insensitive substring match on title or description.
    """
    query: dict[str, Any] = {"owner_id": owner_id}

    search = (search or "").strip()
    if search:
        pattern = {"$regex": re.escape(search), "$options": "i"}
        query["$or"] = [{"title": pattern}, {"description": pattern}]

    status_filter = parse_status_filter(status)
    if status_filter is not None:
        query["status"] = status_filter

    return query
