from taskboard.web.routers.auth import router as auth_router
from taskboard.web.routers.tasks import router as tasks_router

__all__ = [
    "auth_router",
    "tasks_router",
]
