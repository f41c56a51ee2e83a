"""Error taxonomy shared by repositories, services and the HTTP layer.

Repositories and services raise these; ``blog.main`` maps each class to a
status code. Nothing here knows about HTTP.
"""


class BlogError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(BlogError):
    """A point lookup matched no row, or a delete affected zero rows."""


class UserNotFoundError(NotFoundError):
    """A token subject no longer resolves to a user."""


class ConflictError(BlogError):
    """A unique or foreign key constraint rejected the write."""


class ValidationFailedError(BlogError):
    """Input failed field constraints before reaching storage."""


class StorageUnavailableError(BlogError):
    """Any other storage error, passed through with context."""


class UnauthorizedError(BlogError):
    """Authentication failed."""


class InvalidCredentialsError(UnauthorizedError):
    """Unknown e-mail or wrong password."""

    def __init__(self, message: str = "Incorrect email or password"):
        super().__init__(message)


class InvalidTokenError(UnauthorizedError):
    """Token signature, expiry or claims are invalid."""

    def __init__(self, message: str = "Invalid authentication credentials"):
        super().__init__(message)


class ForbiddenError(BlogError):
    """Authenticated, but not allowed to touch this resource."""


class OAuthExchangeError(BlogError):
    """The identity provider rejected the code exchange or profile request."""
