"""URL slug generation.

A slug is the lower-cased title with every run of characters outside
``[a-z0-9]`` collapsed to a single hyphen. Uniqueness is resolved against
storage through an ``exists`` predicate supplied by the repository, by
appending ``-1``, ``-2``, ... to the base slug until a free candidate is found.
"""

import re
from collections.abc import Callable

from blog.errors import ValidationFailedError

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")

SlugExists = Callable[[str, str | None], bool]


def slugify_title(title: str) -> str:
    """Turn a title into its base slug.

    Examples:
        >>> slugify_title("Hello, World! 2024")
        'hello-world-2024'
        >>> slugify_title("  --Already-a-slug--  ")
        'already-a-slug'
    """
    return _NON_ALPHANUMERIC.sub("-", title.lower()).strip("-")


def generate_unique_slug(base_slug: str, exists: SlugExists, exclude_id: str | None = None) -> str:
    """Return the first candidate slug that ``exists`` reports as free.

    ``exclude_id`` is handed to the predicate so an entity being updated does
    not collide with its own row. Errors raised by the predicate propagate.
    """
    if not base_slug:
        raise ValidationFailedError("Title must contain at least one letter or digit")

    candidate = base_slug
    counter = 1
    while exists(candidate, exclude_id):
        candidate = f"{base_slug}-{counter}"
        counter += 1
    return candidate
