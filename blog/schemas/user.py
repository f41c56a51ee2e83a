"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    """Create a local user."""

    name: str = Field(..., min_length=1, max_length=255)
    lastname: str | None = Field(None, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)


class UserUpdate(BaseModel):
    """Update a user's profile fields."""

    name: str | None = Field(None, min_length=1, max_length=255)
    lastname: str | None = Field(None, max_length=255)
    email: EmailStr | None = Field(None, max_length=255)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    lastname: str | None
    email: str
    profile_picture: str | None
    auth_provider: str
    created_at: datetime
    updated_at: datetime


class AuthorResponse(BaseModel):
    """Author embedded in a post."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    lastname: str | None
    email: str
