"""SQLAlchemy models."""

from blog.models.category import Category
from blog.models.post import Post, PostCategory
from blog.models.user import User

__all__ = [
    "User",
    "Post",
    "PostCategory",
    "Category",
]
