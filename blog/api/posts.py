"""Post API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from blog.api.dependencies import get_current_user, get_post_repository, is_uuid
from blog.errors import ForbiddenError
from blog.models.post import Post
from blog.models.user import User
from blog.repositories.post import SqlPostRepository
from blog.schemas.category import CategoryResponse
from blog.schemas.post import PostCategoriesUpdate, PostCreate, PostResponse, PostUpdate

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


def get_owned_post(posts: SqlPostRepository, post_id: str, user: User) -> Post:
    """Get a post the user authored."""
    post = posts.find_by_id(post_id)
    if post.user_id != user.id:
        raise ForbiddenError("You don't have permission to modify this post")
    return post


@router.get("", response_model=list[PostResponse])
def get_posts(
    response: Response,
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[SqlPostRepository, Depends(get_post_repository)],
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=100),
):
    """Get posts, newest first. The unpaginated total is sent in X-Total-Count."""
    response.headers["X-Total-Count"] = str(posts.count())
    return posts.find_all(skip=skip, limit=limit)


@router.get("/{slug_or_id}", response_model=PostResponse)
def get_post(
    slug_or_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[SqlPostRepository, Depends(get_post_repository)],
):
    """Get a post by id or slug."""
    if is_uuid(slug_or_id):
        return posts.find_by_id(slug_or_id)
    return posts.find_by_slug(slug_or_id)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[SqlPostRepository, Depends(get_post_repository)],
):
    """Create a post authored by the current user."""
    return posts.create(post_data, author_id=current_user.id)


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    post_data: PostUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[SqlPostRepository, Depends(get_post_repository)],
):
    """Update a post's title or content."""
    get_owned_post(posts, post_id, current_user)
    return posts.update(post_id, post_data)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[SqlPostRepository, Depends(get_post_repository)],
):
    """Delete a post."""
    get_owned_post(posts, post_id, current_user)
    posts.delete(post_id)


# --- Categories ---


@router.get("/{post_id}/categories", response_model=list[CategoryResponse])
def get_post_categories(
    post_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[SqlPostRepository, Depends(get_post_repository)],
):
    """Get the categories linked to a post."""
    posts.find_by_id(post_id)
    return posts.get_categories_for_post(post_id)


@router.put("/{post_id}/categories", response_model=PostResponse)
def replace_post_categories(
    post_id: str,
    request: PostCategoriesUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[SqlPostRepository, Depends(get_post_repository)],
):
    """Replace all categories on a post in one transaction."""
    get_owned_post(posts, post_id, current_user)
    posts.replace_categories_for_post(post_id, request.category_ids)
    return posts.find_by_id(post_id)


@router.post("/{post_id}/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def assign_post_category(
    post_id: str,
    category_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[SqlPostRepository, Depends(get_post_repository)],
):
    """Link a category to a post."""
    get_owned_post(posts, post_id, current_user)
    posts.assign_category(post_id, category_id)


@router.delete("/{post_id}/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def unassign_post_category(
    post_id: str,
    category_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    posts: Annotated[SqlPostRepository, Depends(get_post_repository)],
):
    """Unlink a category from a post. Unlinking twice is not an error."""
    get_owned_post(posts, post_id, current_user)
    posts.unassign_category(post_id, category_id)
