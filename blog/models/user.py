"""User model."""

from sqlalchemy import CheckConstraint, Column, String

from blog.database import Base
from blog.models.enums import AuthProvider
from blog.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """User model for authentication and post ownership."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "(auth_provider = 'local') = (password_hash IS NOT NULL)",
            name="ck_users_password_matches_provider",
        ),
    )

    name = Column(String(255), nullable=False)
    lastname = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)  # NULL for identity-provider accounts
    google_id = Column(String(255), nullable=True)
    profile_picture = Column(String(1024), nullable=True)
    auth_provider = Column(String(20), nullable=False, default=AuthProvider.LOCAL.value)
