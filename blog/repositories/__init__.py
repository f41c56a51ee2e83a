"""Data access layer: one repository per table family."""

from blog.repositories.category import CategoryRepository, SqlCategoryRepository
from blog.repositories.post import PostRepository, SqlPostRepository
from blog.repositories.user import SqlUserRepository, UserRepository

__all__ = [
    "UserRepository",
    "SqlUserRepository",
    "PostRepository",
    "SqlPostRepository",
    "CategoryRepository",
    "SqlCategoryRepository",
]
