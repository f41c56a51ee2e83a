"""Helpers shared by the SQL repositories."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from blog.errors import ConflictError, StorageUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(db: Session, action: str) -> Iterator[None]:
    """Roll back and translate SQLAlchemy errors raised while doing ``action``.

    Constraint violations become ConflictError; anything else from the
    driver becomes StorageUnavailableError. The original error is chained.
    """
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Constraint violation while trying to {action}: {e.orig}")
        raise ConflictError(f"Could not {action}: {e.orig}") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Storage error while trying to {action}: {e}")
        raise StorageUnavailableError(f"Could not {action}: {e}") from e
