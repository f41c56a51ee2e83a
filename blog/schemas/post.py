"""Post schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from blog.schemas.category import CategoryResponse
from blog.schemas.user import AuthorResponse
from blog.schemas.validators import Title


class PostCreate(BaseModel):
    """Create a new post. The author is the authenticated user."""

    title: Title
    content: str = Field(..., min_length=3)


class PostUpdate(BaseModel):
    """Update a post. Omitted fields keep their stored values."""

    title: Title | None = None
    content: str | None = Field(None, min_length=3)


class PostCategoriesUpdate(BaseModel):
    """Replace the full set of categories on a post."""

    category_ids: list[str] = Field(default_factory=list)


class PostResponse(BaseModel):
    """Post response with author and categories."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    content: str
    created_at: datetime
    author: AuthorResponse
    categories: list[CategoryResponse] = []
