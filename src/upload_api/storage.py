"""
Local filesystem storage for uploaded files.

Files are written to a temporary name inside the storage directory and
renamed into place, so a failed write never leaves a partial file under its
final name.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from fastapi.staticfiles import StaticFiles

from upload_api.content_types import resolve_extension
from upload_api.errors import (
    ExtensionLookupError,
    InternalError,
    RandomSourceError,
)
from upload_api.tokens import generate_token

logger = logging.getLogger(__name__)

TEMP_PREFIX = ".upload-"
TEMP_SUFFIX = ".part"


class StorageFiles(StaticFiles):
    """
    Serves the storage directory, hiding uploads that are still being written.

    In-progress files live next to the stored files (the final rename must stay
    on one filesystem), so their names are answered with 404.
    """

    def lookup_path(self, path: str):
        if any(part.startswith(TEMP_PREFIX) for part in Path(path).parts):
            return "", None
        return super().lookup_path(path)


@dataclass(frozen=True)
class UploadResult:
    """A file that has been persisted to the storage directory."""
    file_type: str
    path: Path

    def describe(self) -> str:
        return f"FileType: {self.file_type}, File: {self.path}"


def ensure_storage_dir(storage_dir: Union[str, Path]) -> Path:
    """Create the storage directory if it does not exist and return it."""
    path = Path(storage_dir)
    if not path.exists():
        path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created storage directory {path}")
    return path


def write_atomically(destination: Path, content: bytes) -> None:
    """
    Write ``content`` to ``destination`` via a temporary file and a rename.

    Raises:
        OSError: If the temporary file cannot be created, written or renamed.
            The temporary file is removed before the error propagates.
    """
    fd, temp_name = tempfile.mkstemp(
        dir=destination.parent, prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX
    )
    try:
        with os.fdopen(fd, "wb") as temp_file:
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_name, destination)
    except BaseException:
        try:
            os.unlink(temp_name)
        except FileNotFoundError:
            pass
        raise


def store_file(
    storage_dir: Union[str, Path],
    content: bytes,
    file_type: str,
    token_bytes: int = 12,
) -> UploadResult:
    """
    Persist ``content`` under a freshly generated name.

    Args:
        storage_dir: Directory to write into
        content: File bytes
        file_type: Detected MIME type, used to pick the extension
        token_bytes: Random bytes in the generated name

    Returns:
        UploadResult: Detected type and final path

    Raises:
        InternalError: On entropy, extension lookup or filesystem failure
    """
    try:
        file_name = generate_token(token_bytes)
    except RandomSourceError as e:
        raise InternalError("Failed generating rand token") from e

    try:
        extension = resolve_extension(file_type)
    except ExtensionLookupError as e:
        raise InternalError("Can not read file type") from e

    destination = Path(storage_dir) / f"{file_name}{extension}"
    try:
        write_atomically(destination, content)
    except OSError as e:
        raise InternalError(str(e)) from e

    logger.info(f"Stored {len(content)} bytes of {file_type} at {destination}")
    return UploadResult(file_type=file_type, path=destination)
