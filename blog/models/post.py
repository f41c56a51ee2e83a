"""Post and PostCategory models."""

from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import backref, relationship

from blog.database import Base
from blog.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Post(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Blog post owned by a single author."""

    __tablename__ = "posts"

    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    content = Column(Text, nullable=False)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    author = relationship("User", backref=backref("posts", passive_deletes=True))
    # Rows are written through PostCategory only; this side is read-only.
    categories = relationship(
        "Category", secondary="post_categories", back_populates="posts", viewonly=True
    )


class PostCategory(Base):
    """Join row linking a post to a category."""

    __tablename__ = "post_categories"

    post_id = Column(String(36), ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(
        String(36), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True, index=True
    )
