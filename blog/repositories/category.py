"""Category repository."""

from typing import Protocol

from sqlalchemy import exists
from sqlalchemy.orm import Session

from blog.errors import NotFoundError
from blog.models.category import Category
from blog.repositories.base import storage_errors
from blog.schemas.category import CategoryCreate, CategoryUpdate
from blog.services.slug import generate_unique_slug, slugify_title


class CategoryRepository(Protocol):
    """Persistence operations for categories."""

    def find_all(self) -> list[Category]: ...

    def find_by_slug(self, slug: str) -> Category: ...

    def find_by_id(self, category_id: str) -> Category: ...

    def create(self, data: CategoryCreate) -> Category: ...

    def update(self, category_id: str, data: CategoryUpdate) -> Category: ...

    def delete(self, category_id: str) -> None: ...


class SqlCategoryRepository:
    """Category repository backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> list[Category]:
        with storage_errors(self.db, "list categories"):
            return self.db.query(Category).order_by(Category.title).all()

    def find_by_slug(self, slug: str) -> Category:
        with storage_errors(self.db, "find category"):
            category = self.db.query(Category).filter(Category.slug == slug).first()
        if category is None:
            raise NotFoundError(f"No category found with slug: {slug}")
        return category

    def find_by_id(self, category_id: str) -> Category:
        with storage_errors(self.db, "find category"):
            category = self.db.query(Category).filter(Category.id == category_id).first()
        if category is None:
            raise NotFoundError(f"No category found with id: {category_id}")
        return category

    def create(self, data: CategoryCreate) -> Category:
        with storage_errors(self.db, "create category"):
            slug = generate_unique_slug(slugify_title(data.title), self.slug_exists)
            category = Category(title=data.title, slug=slug)
            self.db.add(category)
            self.db.commit()
            self.db.refresh(category)
        return category

    def update(self, category_id: str, data: CategoryUpdate) -> Category:
        category = self.find_by_id(category_id)

        with storage_errors(self.db, "update category"):
            if data.title is not None and data.title != category.title:
                category.slug = generate_unique_slug(
                    slugify_title(data.title), self.slug_exists, exclude_id=category.id
                )
                category.title = data.title
            self.db.commit()
            self.db.refresh(category)
        return category

    def delete(self, category_id: str) -> None:
        with storage_errors(self.db, "delete category"):
            deleted = (
                self.db.query(Category)
                .filter(Category.id == category_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        if deleted == 0:
            raise NotFoundError(f"No category found with id {category_id} to delete")

    def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        """Check whether another category already uses ``slug``."""
        condition = Category.slug == slug
        if exclude_id is not None:
            condition = condition & (Category.id != exclude_id)
        return self.db.query(exists().where(condition)).scalar()
