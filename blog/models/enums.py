"""Enums for model fields."""

from enum import Enum


class AuthProvider(str, Enum):
    """Where a user's credentials live."""

    LOCAL = "local"
    GOOGLE = "google"
