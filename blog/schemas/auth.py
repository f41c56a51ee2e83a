"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field

from blog.schemas.user import UserCreate, UserResponse


class UserRegister(UserCreate):
    """User registration request."""


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse
