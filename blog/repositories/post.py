"""Post repository, including post/category association management."""

import logging
from collections.abc import Sequence
from typing import Protocol

from sqlalchemy import delete, exists, func, insert
from sqlalchemy.orm import Session, selectinload

from blog.errors import NotFoundError
from blog.models.category import Category
from blog.models.post import Post, PostCategory
from blog.models.user import User
from blog.repositories.base import storage_errors
from blog.schemas.post import PostCreate, PostUpdate
from blog.services.slug import generate_unique_slug, slugify_title

logger = logging.getLogger(__name__)


class PostRepository(Protocol):
    """Persistence operations for posts and their categories."""

    def find_all(self, skip: int = 0, limit: int | None = None) -> list[Post]: ...

    def count(self) -> int: ...

    def find_by_slug(self, slug: str) -> Post: ...

    def find_by_id(self, post_id: str) -> Post: ...

    def create(self, data: PostCreate, author_id: str) -> Post: ...

    def update(self, post_id: str, data: PostUpdate) -> Post: ...

    def delete(self, post_id: str) -> None: ...

    def assign_category(self, post_id: str, category_id: str) -> None: ...

    def unassign_category(self, post_id: str, category_id: str) -> None: ...

    def get_categories_for_post(self, post_id: str) -> list[Category]: ...

    def replace_categories_for_post(self, post_id: str, category_ids: Sequence[str]) -> None: ...


class SqlPostRepository:
    """Post repository backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Post).options(
            selectinload(Post.author), selectinload(Post.categories)
        )

    def find_all(self, skip: int = 0, limit: int | None = None) -> list[Post]:
        """List posts newest first, optionally windowed by offset/limit."""
        with storage_errors(self.db, "list posts"):
            query = self._query().order_by(Post.created_at.desc(), Post.id).offset(skip)
            if limit is not None:
                query = query.limit(limit)
            return query.all()

    def count(self) -> int:
        with storage_errors(self.db, "count posts"):
            return self.db.query(func.count(Post.id)).scalar()

    def find_by_slug(self, slug: str) -> Post:
        with storage_errors(self.db, "find post"):
            post = self._query().filter(Post.slug == slug).first()
        if post is None:
            raise NotFoundError(f"No post found with slug: {slug}")
        return post

    def find_by_id(self, post_id: str) -> Post:
        with storage_errors(self.db, "find post"):
            post = self._query().filter(Post.id == post_id).first()
        if post is None:
            raise NotFoundError(f"No post found with id: {post_id}")
        return post

    def create(self, data: PostCreate, author_id: str) -> Post:
        """Insert a post under a freshly generated unique slug.

        The author must already exist. A slug taken by a concurrent insert
        after the uniqueness check surfaces as ConflictError.
        """
        with storage_errors(self.db, "create post"):
            if self.db.get(User, author_id) is None:
                raise NotFoundError(f"No user found with id: {author_id}")

            slug = generate_unique_slug(slugify_title(data.title), self.slug_exists)
            post = Post(title=data.title, slug=slug, content=data.content, user_id=author_id)
            self.db.add(post)
            self.db.commit()
            self.db.refresh(post)
        return post

    def update(self, post_id: str, data: PostUpdate) -> Post:
        """Apply the provided fields; the author is never changed."""
        post = self.find_by_id(post_id)

        with storage_errors(self.db, "update post"):
            if data.title is not None and data.title != post.title:
                post.slug = generate_unique_slug(
                    slugify_title(data.title), self.slug_exists, exclude_id=post.id
                )
                post.title = data.title
            if data.content is not None:
                post.content = data.content
            self.db.commit()
            self.db.refresh(post)
        return post

    def delete(self, post_id: str) -> None:
        with storage_errors(self.db, "delete post"):
            deleted = (
                self.db.query(Post).filter(Post.id == post_id).delete(synchronize_session=False)
            )
            self.db.commit()
        if deleted == 0:
            raise NotFoundError(f"No post found with id {post_id} to delete")

    def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        """Check whether another post already uses ``slug``."""
        condition = Post.slug == slug
        if exclude_id is not None:
            condition = condition & (Post.id != exclude_id)
        return self.db.query(exists().where(condition)).scalar()

    # --- Categories ---

    def assign_category(self, post_id: str, category_id: str) -> None:
        """Link one category. A duplicate pair or dangling id is a ConflictError."""
        with storage_errors(self.db, "assign category to post"):
            self.db.execute(insert(PostCategory).values(post_id=post_id, category_id=category_id))
            self.db.commit()

    def unassign_category(self, post_id: str, category_id: str) -> None:
        """Unlink one category. Removing a link that does not exist succeeds."""
        with storage_errors(self.db, "unassign category from post"):
            self.db.execute(
                delete(PostCategory).where(
                    PostCategory.post_id == post_id,
                    PostCategory.category_id == category_id,
                )
            )
            self.db.commit()

    def get_categories_for_post(self, post_id: str) -> list[Category]:
        with storage_errors(self.db, "list post categories"):
            return (
                self.db.query(Category)
                .join(PostCategory, PostCategory.category_id == Category.id)
                .filter(PostCategory.post_id == post_id)
                .all()
            )

    def replace_categories_for_post(self, post_id: str, category_ids: Sequence[str]) -> None:
        """Atomically replace every category link on a post.

        The delete and all inserts run in the session's transaction. The
        first failing statement rolls the whole transaction back, so the
        previous links stay in place and the error is raised.
        """
        with storage_errors(self.db, "replace post categories"):
            self.db.execute(delete(PostCategory).where(PostCategory.post_id == post_id))
            for category_id in category_ids:
                self.db.execute(
                    insert(PostCategory).values(post_id=post_id, category_id=category_id)
                )
            self.db.commit()
        logger.info(f"Replaced categories for post {post_id}: {len(category_ids)} linked")
