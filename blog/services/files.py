"""Per-user file storage for uploads."""

import logging
import shutil
import uuid
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from blog.errors import NotFoundError, ValidationFailedError
from blog.models.user import User

logger = logging.getLogger(__name__)


class FileService:
    """Stores uploads under ``<upload_dir>/<user id>/``."""

    def __init__(self, upload_dir: str | Path):
        self.upload_dir = Path(upload_dir).resolve()
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def generate_unique_filename(self, filename: str) -> str:
        """Return ``<stem>_<timestamp>_<8 hex chars><ext>`` for a client filename."""
        path = Path(Path(filename).name)
        if not path.stem:
            raise ValidationFailedError("Filename is required")
        timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
        unique_id = uuid.uuid4().hex[:8]
        return f"{path.stem}_{timestamp}_{unique_id}{path.suffix}"

    def _user_path(self, filename: str, user: User) -> Path:
        name = Path(filename).name
        if name in {"", ".", ".."} or name != filename:
            raise ValidationFailedError(f"Invalid filename: {filename}")
        return self.upload_dir / user.id / name

    def save_file(self, source: BinaryIO, filename: str, user: User) -> Path:
        """Copy an uploaded stream into the user's directory."""
        destination = self._user_path(filename, user)
        destination.parent.mkdir(parents=True, exist_ok=True)
        with destination.open("wb") as out:
            shutil.copyfileobj(source, out)
        logger.info(f"Saved upload {filename} for user {user.id}")
        return destination

    def delete_file(self, filename: str, user: User) -> None:
        """Remove one of the user's files."""
        path = self._user_path(filename, user)
        try:
            path.unlink()
        except FileNotFoundError:
            raise NotFoundError(f"File not found: {filename}") from None
        logger.info(f"Deleted upload {filename} for user {user.id}")
