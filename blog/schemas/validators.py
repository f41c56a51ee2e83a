"""Field types shared by request schemas."""

from typing import Annotated

from pydantic import AfterValidator, Field

from blog.services.slug import slugify_title


def require_sluggable(title: str) -> str:
    """Reject titles that would produce an empty slug."""
    if not slugify_title(title):
        raise ValueError("must contain at least one letter or digit")
    return title


Title = Annotated[str, Field(min_length=3, max_length=50), AfterValidator(require_sluggable)]
