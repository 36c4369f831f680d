from datetime import timedelta
from uuid import UUID

import jwt

from taskboard.core.core import Service
from taskboard.core.modules.token.models import REQUIRED_CLAIMS, TOKEN_ALGORITHM, AuthToken
from taskboard.errors import AuthenticationError
from taskboard.utils import now, parse_uuid


class TokenService(Service):
    """Issues and verifies stateless signed session tokens.

    Tokens are never persisted: validity is decided by signature and expiry alone,
    so there is no server-side revocation.
    """

    def issue_token(self, user_id: UUID) -> AuthToken:
        issued_at = now()
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + timedelta(days=self.core.config.jwt_ttl_days),
        }
        return AuthToken(jwt.encode(payload, self.core.config.jwt_secret, algorithm=TOKEN_ALGORITHM))

    def verify_token(self, auth_token: AuthToken) -> UUID:
        """Return the user ID carried by a valid token."""
        try:
            claims = jwt.decode(
                auth_token,
                self.core.config.jwt_secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid or expired token") from e

        user_id = parse_uuid(str(claims["sub"]))
        if user_id is None:
            raise AuthenticationError("Invalid or expired token")
        return user_id
