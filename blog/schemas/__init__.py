"""Pydantic schemas for API requests and responses."""

from blog.schemas.auth import AuthResponse, UserLogin, UserRegister
from blog.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from blog.schemas.post import (
    PostCategoriesUpdate,
    PostCreate,
    PostResponse,
    PostUpdate,
)
from blog.schemas.user import AuthorResponse, UserCreate, UserResponse, UserUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "AuthorResponse",
    "PostCreate",
    "PostUpdate",
    "PostResponse",
    "PostCategoriesUpdate",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
]
