"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from blog.api.dependencies import get_current_user, get_user_repository
from blog.errors import ForbiddenError
from blog.models.enums import AuthProvider
from blog.models.user import User
from blog.repositories.user import SqlUserRepository
from blog.schemas.user import UserCreate, UserResponse, UserUpdate
from blog.services.auth import get_password_hash

router = APIRouter(prefix="/api/v1/users", tags=["users"])


def require_self(user_id: str, current_user: User) -> None:
    """Users may only modify their own account."""
    if user_id != current_user.id:
        raise ForbiddenError("You don't have permission to modify this user")


@router.get("", response_model=list[UserResponse])
def get_users(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[SqlUserRepository, Depends(get_user_repository)],
):
    """Get all users."""
    return users.find_all()


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[SqlUserRepository, Depends(get_user_repository)],
):
    """Get a user by id."""
    return users.find_by_id(user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[SqlUserRepository, Depends(get_user_repository)],
):
    """Create a local user."""
    user = User(
        name=user_data.name,
        lastname=user_data.lastname,
        email=user_data.email,
        password_hash=get_password_hash(user_data.password),
        auth_provider=AuthProvider.LOCAL.value,
    )
    return users.create(user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    user_data: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[SqlUserRepository, Depends(get_user_repository)],
):
    """Update the current user's profile."""
    require_self(user_id, current_user)
    return users.update(user_id, user_data.model_dump(exclude_none=True))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[SqlUserRepository, Depends(get_user_repository)],
):
    """Delete the current user's account and their posts."""
    require_self(user_id, current_user)
    users.delete(user_id)
