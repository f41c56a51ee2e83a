"""File upload API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from blog.api.dependencies import get_current_user, get_file_service
from blog.errors import ValidationFailedError
from blog.models.user import User
from blog.services.files import FileService

router = APIRouter(prefix="/api/v1/files", tags=["files"])


@router.post("")
def upload_file(
    file: Annotated[UploadFile, File(description="File to store for the current user")],
    current_user: Annotated[User, Depends(get_current_user)],
    files: Annotated[FileService, Depends(get_file_service)],
):
    """Upload a file under a generated unique name."""
    if not file.filename:
        raise ValidationFailedError("Filename is required")

    filename = files.generate_unique_filename(file.filename)
    files.save_file(file.file, filename, current_user)
    return {"message": "File uploaded successfully", "filename": filename}


@router.delete("/{filename}")
def delete_file(
    filename: str,
    current_user: Annotated[User, Depends(get_current_user)],
    files: Annotated[FileService, Depends(get_file_service)],
):
    """Delete one of the current user's files."""
    files.delete_file(filename, current_user)
    return {"message": "File deleted successfully"}
