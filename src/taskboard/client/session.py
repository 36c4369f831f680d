from enum import StrEnum

import structlog

from taskboard.client.api import ApiClient, ApiError
from taskboard.client.config import ClientConfig
from taskboard.client.storage import TokenStorage
from taskboard.core.modules.user.models import AuthView, UserView

logger = structlog.get_logger(__name__)


class SessionState(StrEnum):
    ANONYMOUS = "anonymous"
    PENDING_VALIDATION = "pending_validation"  # stored token attached, not yet confirmed by the server
    AUTHENTICATED = "authenticated"
    INVALID = "invalid"  # anonymous after a token was rejected


class Session:
    """Client-side sign-in state, passed explicitly to whatever needs the current user.

    The token lives in memory on the API client and is mirrored to `storage` so it
    survives restarts.
    """

    def __init__(self, api: ApiClient, storage: TokenStorage) -> None:
        self._api = api
        self._storage = storage
        self.state = SessionState.ANONYMOUS
        self.user: UserView | None = None
        api.on_unauthorized = self._on_unauthorized

    @classmethod
    def from_config(cls, config: ClientConfig) -> "Session":
        return cls(ApiClient(config.api_url), TokenStorage(config.token_path))

    @property
    def api(self) -> ApiClient:
        return self._api

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    async def restore(self) -> SessionState:
        """Validate a previously stored token, if any."""
        token = self._storage.load()
        if token is None:
            return self.state

        self._api.set_token(token)
        self._set_state(SessionState.PENDING_VALIDATION)
        try:
            self.user = await self._api.me()
        except ApiError as e:
            logger.info("stored_token_rejected", status_code=e.status_code)
            self._reset(SessionState.INVALID)
        else:
            self._set_state(SessionState.AUTHENTICATED)
        return self.state

    async def login(self, email: str, password: str) -> UserView:
        """Sign in; on failure the session is left as it was and ApiError carries the server message."""
        auth = await self._api.login(email, password)
        return self._sign_in(auth)

    async def register(self, name: str, email: str, password: str) -> UserView:
        auth = await self._api.register(name, email, password)
        return self._sign_in(auth)

    def logout(self) -> None:
        self._reset(SessionState.ANONYMOUS)

    def _sign_in(self, auth: AuthView) -> UserView:
        self._storage.save(auth.token)
        self._api.set_token(auth.token)
        self.user = UserView.model_validate(auth.model_dump(exclude={"token"}))
        self._set_state(SessionState.AUTHENTICATED)
        return self.user

    def _on_unauthorized(self) -> None:
        if self.state is not SessionState.PENDING_VALIDATION:
            logger.info("session_expired")
            self._reset(SessionState.INVALID)

    def _reset(self, state: SessionState) -> None:
        self._storage.clear()
        self._api.clear_token()
        self.user = None
        self._set_state(state)

    def _set_state(self, state: SessionState) -> None:
        logger.debug("session_state_changed", old=self.state, new=state)
        self.state = state
