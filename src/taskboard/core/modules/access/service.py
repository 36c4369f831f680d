import structlog

from taskboard.core.core import Service
from taskboard.core.modules.token.models import AuthToken
from taskboard.core.modules.user.models import User
from taskboard.errors import AuthenticationError, NotFoundError

logger = structlog.get_logger(__name__)


class AccessService(Service):
    async def ensure_authenticated(self, auth_token: AuthToken) -> User:
        """Resolve the user behind a bearer token, raise AuthenticationError if there is none."""
        user_id = self.core.services.token.verify_token(auth_token)
        try:
            return await self.core.services.user.get_user(user_id)
        except NotFoundError as e:
            logger.info("token_for_missing_user", user_id=user_id)
            raise AuthenticationError("User not found") from e
