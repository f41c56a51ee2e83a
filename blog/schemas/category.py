"""Category schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from blog.schemas.validators import Title


class CategoryCreate(BaseModel):
    """Create a new category."""

    title: Title


class CategoryUpdate(BaseModel):
    """Update a category."""

    title: Title | None = None


class CategoryResponse(BaseModel):
    """Category response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    created_at: datetime
