"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from blog.api.dependencies import get_category_repository, get_current_user, is_uuid
from blog.models.user import User
from blog.repositories.category import SqlCategoryRepository
from blog.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def get_categories(
    current_user: Annotated[User, Depends(get_current_user)],
    categories: Annotated[SqlCategoryRepository, Depends(get_category_repository)],
):
    """Get all categories."""
    return categories.find_all()


@router.get("/{slug_or_id}", response_model=CategoryResponse)
def get_category(
    slug_or_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    categories: Annotated[SqlCategoryRepository, Depends(get_category_repository)],
):
    """Get a category by id or slug."""
    if is_uuid(slug_or_id):
        return categories.find_by_id(slug_or_id)
    return categories.find_by_slug(slug_or_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    categories: Annotated[SqlCategoryRepository, Depends(get_category_repository)],
):
    """Create a new category."""
    return categories.create(category_data)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    category_data: CategoryUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    categories: Annotated[SqlCategoryRepository, Depends(get_category_repository)],
):
    """Update a category."""
    return categories.update(category_id, category_data)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    categories: Annotated[SqlCategoryRepository, Depends(get_category_repository)],
):
    """Delete a category. Its links to posts are removed with it."""
    categories.delete(category_id)
