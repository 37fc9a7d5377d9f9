from fastapi import APIRouter
from pydantic import BaseModel, Field, field_validator

from activityrec.core.modules.user.models import UserView
from activityrec.core.modules.user.validators import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    is_email,
)
from activityrec.web.deps import AppDep, AuthTokenDep
from activityrec.web.openapi import ErrorResponse, ValidationErrorResponse

router = APIRouter(tags=["auth"])


def _check_email(value: str) -> str:
    if not is_email(value):
        raise ValueError("Invalid email address")
    return value


class RegisterRequest(BaseModel):
    """Account registration request."""

    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH, description="Display name")
    email: str = Field(..., description="Email address, used to log in")
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH, description="Password")

    # Length limits apply to the trimmed name
    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _check_email(value)


class LoginRequest(BaseModel):
    """Authentication request."""

    email: str = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _check_email(value)


class AuthResponse(BaseModel):
    """Authentication response."""

    message: str
    token: str = Field(..., description="Bearer token for subsequent requests")
    user: UserView


@router.post(
    "/auth/register",
    summary="Register account",
    description="Create an account and receive an authentication token.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "Account created"},
        400: {"model": ValidationErrorResponse, "description": "Invalid input"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def register(register_data: RegisterRequest, app: AppDep) -> AuthResponse:
    result = await app.register(register_data.name, register_data.email, register_data.password)
    return AuthResponse(message="User registered successfully", token=result.token, user=result.user)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with email and password to receive an authentication token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ValidationErrorResponse, "description": "Invalid input"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep) -> AuthResponse:
    result = await app.login(login_data.email, login_data.password)
    return AuthResponse(message="Login successful", token=result.token, user=result.user)


@router.get(
    "/auth/me",
    summary="Get current user",
    description="Get the profile of the user the bearer token was issued to.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "User no longer exists"},
    },
)
async def get_current_user(app: AppDep, auth_token: AuthTokenDep) -> UserView:
    return await app.get_current_user(auth_token)
