"""FastAPI dependencies for authentication, repositories and services."""

import uuid
from typing import Annotated

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from blog.config import Settings, get_settings
from blog.database import get_db
from blog.errors import UnauthorizedError, UserNotFoundError
from blog.models.user import User
from blog.repositories.category import SqlCategoryRepository
from blog.repositories.post import SqlPostRepository
from blog.repositories.user import SqlUserRepository
from blog.services.auth import AuthService
from blog.services.files import FileService
from blog.services.google_oauth import GoogleOAuthClient

ACCESS_TOKEN_COOKIE = "access_token"  # noqa: S105

security = HTTPBearer(auto_error=False)


def is_uuid(value: str) -> bool:
    """Tell an entity id apart from a slug in a path segment."""
    try:
        parsed = uuid.UUID(value)
    except ValueError:
        return False
    # Ids are stored in canonical form; hex-only or braced spellings are slugs
    return str(parsed) == value


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> SqlUserRepository:
    """Get user repository bound to the request session."""
    return SqlUserRepository(db)


def get_post_repository(db: Annotated[Session, Depends(get_db)]) -> SqlPostRepository:
    """Get post repository bound to the request session."""
    return SqlPostRepository(db)


def get_category_repository(db: Annotated[Session, Depends(get_db)]) -> SqlCategoryRepository:
    """Get category repository bound to the request session."""
    return SqlCategoryRepository(db)


def get_auth_service(
    users: Annotated[SqlUserRepository, Depends(get_user_repository)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    """Get auth service with the configured signing secret."""
    return AuthService(users, settings)


def get_google_client(settings: Annotated[Settings, Depends(get_settings)]) -> GoogleOAuthClient:
    """Get Google OAuth client."""
    return GoogleOAuthClient(settings)


def get_file_service(settings: Annotated[Settings, Depends(get_settings)]) -> FileService:
    """Get file service rooted at the configured upload directory."""
    return FileService(settings.upload_dir)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    access_token: Annotated[str | None, Cookie()] = None,
) -> User:
    """Get the current authenticated user from a bearer header or session cookie."""
    token = credentials.credentials if credentials else access_token
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return auth_service.parse_token(token)
    except (UnauthorizedError, UserNotFoundError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
