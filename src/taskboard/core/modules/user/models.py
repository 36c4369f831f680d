from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from taskboard.core.db import MongoModel
from taskboard.utils import now


class User(MongoModel):
    """User domain model with credentials.

    Indexed on email - unique.
    """

    name: str
    email: str  # stored trimmed and lower-cased
    password_hash: str  # bcrypt hash
    created_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    created_at: datetime = Field(..., description="Registration time (UTC)")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, name=user.name, email=user.email, created_at=user.created_at)


class AuthView(UserView):
    """User account information together with a freshly issued session token."""

    token: str = Field(..., description="Bearer token for subsequent requests")

    @classmethod
    def from_user(cls, user: User, token: str) -> "AuthView":
        return cls(id=user.id, name=user.name, email=user.email, created_at=user.created_at, token=token)
