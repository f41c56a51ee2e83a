"""Category model."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from blog.database import Base
from blog.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Category(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Category model for grouping posts."""

    __tablename__ = "categories"

    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)

    # Relationships
    posts = relationship(
        "Post", secondary="post_categories", back_populates="categories", viewonly=True
    )
