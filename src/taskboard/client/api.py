"""HTTP client for the Taskboard REST API."""

from collections.abc import Callable
from typing import Any

import httpx
import structlog

from taskboard.core.modules.task.models import Task, TaskPage, TaskStatus
from taskboard.core.modules.user.models import AuthView, UserView

logger = structlog.get_logger(__name__)

NETWORK_ERROR_MESSAGE = "Could not reach the server. Please try again."
INVALID_RESPONSE_MESSAGE = "The server sent a response that could not be read."


class ApiError(Exception):
    """Failed API call; `message` is safe to show to the user as is."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiClient:
    """Calls the REST API, attaching the bearer token to every request once one is set.

    When an authenticated request is answered with 401, `on_unauthorized` is called
    so the owner of the session can drop it.
    """

    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._http = httpx.AsyncClient(base_url=base_url.rstrip("/") + "/", transport=transport)
        self.on_unauthorized: Callable[[], None] | None = None

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def token(self) -> str | None:
        header = self._http.headers.get("Authorization")
        return header.removeprefix("Bearer ") if header else None

    def set_token(self, token: str) -> None:
        self._http.headers["Authorization"] = f"Bearer {token}"

    def clear_token(self) -> None:
        self._http.headers.pop("Authorization", None)

    # === Auth ===
    async def register(self, name: str, email: str, password: str) -> AuthView:
        data = await self._request(
            "POST", "auth/register", json={"name": name, "email": email, "password": password}, public=True
        )
        return AuthView.model_validate(data)

    async def login(self, email: str, password: str) -> AuthView:
        data = await self._request("POST", "auth/login", json={"email": email, "password": password}, public=True)
        return AuthView.model_validate(data)

    async def me(self) -> UserView:
        return UserView.model_validate(await self._request("GET", "auth/me"))

    # === Tasks ===
    async def list_tasks(
        self, page: int = 1, limit: int | None = None, search: str = "", status: str | None = None
    ) -> TaskPage:
        params: dict[str, Any] = {}
        if page > 1:
            params["page"] = page
        if limit:
            params["limit"] = limit
        if search.strip():
            params["search"] = search.strip()
        if status and status != "All":
            params["status"] = status
        return TaskPage.model_validate(await self._request("GET", "tasks", params=params))

    async def get_task(self, task_id: str) -> Task:
        return Task.model_validate(await self._request("GET", f"tasks/{task_id}"))

    async def create_task(self, title: str, description: str = "", status: TaskStatus | None = None) -> Task:
        body: dict[str, Any] = {"title": title, "description": description}
        if status is not None:
            body["status"] = status
        return Task.model_validate(await self._request("POST", "tasks", json=body))

    async def update_task(self, task_id: str, **fields: Any) -> Task:
        """Send only the given fields (title, description, status)."""
        return Task.model_validate(await self._request("PUT", f"tasks/{task_id}", json=fields))

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"tasks/{task_id}")

    async def health(self) -> str:
        data = await self._request("GET", "health")
        return str(data.get("message", ""))

    async def _request(self, method: str, path: str, *, public: bool = False, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body.

        A 401 on a public endpoint (login, register) is a plain failure and leaves the session alone.
        """
        authenticated = self.token is not None and not public
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.warning("api_request_failed", method=method, path=path, error=str(e))
            raise ApiError(NETWORK_ERROR_MESSAGE) from e

        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                logger.warning("api_response_not_json", method=method, path=path, status_code=response.status_code)
                raise ApiError(INVALID_RESPONSE_MESSAGE, response.status_code) from e

        if response.status_code == 401 and authenticated and self.on_unauthorized is not None:
            self.on_unauthorized()
        raise ApiError(_error_message(response), response.status_code)


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return f"Request failed with status {response.status_code}"
