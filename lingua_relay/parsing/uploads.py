"""Temporary storage for uploaded files.

Each upload lives on disk only for the duration of one request. Filenames
are unique per upload (epoch millis plus a random suffix) so concurrent
requests never collide.
"""

import logging
import random
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pydantic import BaseModel, Field

from lingua_relay.parsing.extractor import file_extension

logger = logging.getLogger(__name__)

# Constants
MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # 10MB
MAX_UPLOAD_FILES = 1


class UploadedFile(BaseModel):
    """A multipart upload stored on local disk.

    Attributes:
        path: Location of the stored bytes.
        original_name: Filename as supplied by the client.
        declared_extension: Lowercased extension of the original name.
        size_bytes: Number of bytes written.
    """

    path: Path
    original_name: str
    declared_extension: str
    size_bytes: int = Field(ge=0)


def unique_filename(original_name: str) -> str:
    """Build a collision-free storage name that keeps the original extension."""
    suffix = round(random.random() * 1e9)
    return f"{int(time.time() * 1000)}-{suffix}{file_extension(original_name)}"


def save_upload(content: bytes, original_name: str, upload_dir: Path | str) -> UploadedFile:
    """Write upload bytes to a uniquely named file.

    Args:
        content: Raw file content.
        original_name: Filename as supplied by the client.
        upload_dir: Directory for temporary uploads, created if missing.

    Returns:
        UploadedFile describing the stored file.
    """
    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / unique_filename(original_name)
    path.write_bytes(content)

    return UploadedFile(
        path=path,
        original_name=original_name,
        declared_extension=file_extension(original_name),
        size_bytes=len(content),
    )


def discard(upload: UploadedFile) -> None:
    """Delete a stored upload. Failures are logged, never raised."""
    try:
        upload.path.unlink()
    except OSError as e:
        logger.error(f"Error cleaning up upload {upload.original_name}: {e}")


@contextmanager
def temporary_upload(
    content: bytes,
    original_name: str,
    upload_dir: Path | str,
) -> Iterator[UploadedFile]:
    """Store an upload for the duration of a block, then delete it.

    The file is discarded exactly once on exit, whether the block
    returns normally or raises.

    Yields:
        The stored UploadedFile.
    """
    upload = save_upload(content, original_name, upload_dir)
    try:
        yield upload
    finally:
        discard(upload)
