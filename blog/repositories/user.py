"""User repository."""

from typing import Any, Protocol

from sqlalchemy.orm import Session

from blog.errors import ConflictError, NotFoundError
from blog.models.user import User
from blog.repositories.base import storage_errors

# Columns a caller may change through update()
UPDATABLE_FIELDS = frozenset(
    {"name", "lastname", "email", "password_hash", "google_id", "profile_picture", "auth_provider"}
)


class UserRepository(Protocol):
    """Persistence operations for users."""

    def find_all(self) -> list[User]: ...

    def find_by_email(self, email: str) -> User: ...

    def find_by_id(self, user_id: str) -> User: ...

    def create(self, user: User) -> User: ...

    def update(self, user_id: str, changes: dict[str, Any]) -> User: ...

    def delete(self, user_id: str) -> None: ...


class SqlUserRepository:
    """User repository backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> list[User]:
        with storage_errors(self.db, "list users"):
            return self.db.query(User).order_by(User.created_at).all()

    def find_by_email(self, email: str) -> User:
        with storage_errors(self.db, "find user"):
            user = self.db.query(User).filter(User.email == email).first()
        if user is None:
            raise NotFoundError(f"No user found with email: {email}")
        return user

    def find_by_id(self, user_id: str) -> User:
        with storage_errors(self.db, "find user"):
            user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError(f"No user found with id: {user_id}")
        return user

    def create(self, user: User) -> User:
        """Insert a user. A duplicate e-mail raises ConflictError."""
        self._ensure_email_free(user.email)

        with storage_errors(self.db, "create user"):
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        return user

    def _ensure_email_free(self, email: str, exclude_id: str | None = None) -> None:
        with storage_errors(self.db, "check user email"):
            query = self.db.query(User.id).filter(User.email == email)
            if exclude_id is not None:
                query = query.filter(User.id != exclude_id)
            taken = query.first()
        if taken is not None:
            raise ConflictError(f"User with email {email} already exists")

    def update(self, user_id: str, changes: dict[str, Any]) -> User:
        """Apply ``changes`` to a user, keeping e-mail unique across users."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update user fields: {', '.join(sorted(unknown))}")

        user = self.find_by_id(user_id)

        email = changes.get("email")
        if email is not None and email != user.email:
            self._ensure_email_free(email, exclude_id=user_id)

        with storage_errors(self.db, "update user"):
            for field, value in changes.items():
                setattr(user, field, value)
            self.db.commit()
            self.db.refresh(user)
        return user

    def delete(self, user_id: str) -> None:
        with storage_errors(self.db, "delete user"):
            deleted = (
                self.db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
            )
            self.db.commit()
        if deleted == 0:
            raise NotFoundError(f"No user found with id {user_id} to delete")
