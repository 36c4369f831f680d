from fastapi import APIRouter
from pydantic import BaseModel, Field

from taskboard.core.modules.user.models import AuthView, UserView
from taskboard.web.deps import AppDep, CurrentUserDep
from taskboard.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class RegisterRequest(BaseModel):
    """Account registration request."""

    name: str | None = Field(None, description="Display name")
    email: str | None = Field(None, description="Email address, used to log in")
    password: str | None = Field(None, description="Password, at least 6 characters")


class LoginRequest(BaseModel):
    """Authentication request."""

    email: str | None = Field(None, description="Email address")
    password: str | None = Field(None, description="Password")


@router.post(
    "/auth/register",
    summary="Register account",
    description="Create a new account and receive an authentication token for it.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "Account created"},
        400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def register(request: RegisterRequest, app: AppDep) -> AuthView:
    return await app.register(request.name, request.email, request.password)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with email and password to receive an authentication token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Missing fields"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(request: LoginRequest, app: AppDep) -> AuthView:
    return await app.login(request.email, request.password)


@router.get(
    "/auth/me",
    summary="Get current user",
    description="Get the account behind the bearer token.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def me(app: AppDep, current_user: CurrentUserDep) -> UserView:
    return app.get_current_user(current_user)
