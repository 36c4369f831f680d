from typing import Any
from uuid import UUID

import bcrypt
import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from taskboard.core.core import Service
from taskboard.core.modules.user.models import User
from taskboard.core.modules.user.validators import (
    MAX_PASSWORD_BYTES,
    normalize_email,
    password_too_long,
    validate_registration,
)
from taskboard.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Stores user accounts and verifies their credentials."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")
        self._dummy_hash: bytes | None = None

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("email", 1)], unique=True)

    async def get_user(self, user_id: UUID) -> User:
        """Get user by ID."""
        doc = await self._collection.find_one({"_id": user_id})
        if doc is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return User.model_validate(doc)

    async def find_user_by_email(self, email: str) -> User | None:
        doc = await self._collection.find_one({"email": normalize_email(email)})
        return None if doc is None else User.model_validate(doc)

    async def has_email(self, email: str) -> bool:
        """Check if an account with this email exists."""
        return await self._collection.count_documents({"email": normalize_email(email)}, limit=1) > 0

    async def create_user(self, name: str | None, email: str | None, password: str | None) -> User:
        """Create user with hashed password."""
        name, email, password = validate_registration(name, email, password)
        if await self.has_email(email):
            raise ConflictError("User already exists")

        user = User(name=name, email=email, password_hash=self._hash_password(password))
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise ConflictError("User already exists") from e

        logger.info("user_registered", user_id=user.id)
        return user

    async def authenticate(self, email: str | None, password: str | None) -> User:
        """Return the user owning these credentials.

        Every rejected login raises the same error after running a bcrypt comparison.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        password_bytes = password.encode("utf-8")
        user = await self.find_user_by_email(email)
        if user is None or password_too_long(password):
            bcrypt.checkpw(password_bytes[:MAX_PASSWORD_BYTES], self._get_dummy_hash())
            reason = "unknown_email" if user is None else "password_too_long"
            logger.info("login_failed", reason=reason)
            raise AuthenticationError("Invalid credentials")

        if not bcrypt.checkpw(password_bytes, user.password_hash.encode("utf-8")):
            logger.info("login_failed", reason="wrong_password", user_id=user.id)
            raise AuthenticationError("Invalid credentials")

        return user

    def _hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.core.config.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def _get_dummy_hash(self) -> bytes:
        if self._dummy_hash is None:
            self._dummy_hash = self._hash_password("not-a-real-password").encode("utf-8")
        return self._dummy_hash
