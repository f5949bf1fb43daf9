"""Text extraction for uploaded documents using pypdf.

Supports PDF and plain-text files. The extension allow-list defined here is
the single validation point for accepted upload types.
"""

import logging
from pathlib import Path, PurePath

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from lingua_relay.errors import ExtractionError, FailureKind

logger = logging.getLogger(__name__)

# Constants
SUPPORTED_EXTENSIONS = (".pdf", ".txt")


def file_extension(original_name: str) -> str:
    """Return the lowercased extension of a user-supplied filename."""
    return PurePath(original_name).suffix.lower()


def ensure_supported(original_name: str) -> str:
    """Validate that a filename carries a supported extension.

    Args:
        original_name: The filename as supplied by the user.

    Returns:
        The lowercased extension.

    Raises:
        ExtractionError: UNSUPPORTED_TYPE if the extension is not allowed.
    """
    ext = file_extension(original_name)
    if ext not in SUPPORTED_EXTENSIONS:
        raise ExtractionError(
            FailureKind.UNSUPPORTED_TYPE,
            "Only PDF and TXT files are allowed",
        )
    return ext


def _extract_pdf(file_path: Path, original_name: str) -> str:
    """Extract text from all pages of a PDF file.

    Args:
        file_path: Location of the stored upload.
        original_name: User-supplied name, used in log and error messages.

    Returns:
        Page texts joined with blank lines.

    Raises:
        ExtractionError: If the PDF is unreadable or contains no text.
    """
    try:
        reader = PdfReader(file_path)
        pages = list(reader.pages)
    except PdfReadError as e:
        raise ExtractionError(
            FailureKind.UNKNOWN_FAILURE,
            f"Corrupt or invalid PDF: {original_name}",
        ) from e
    except Exception as e:
        raise ExtractionError(
            FailureKind.UNKNOWN_FAILURE,
            f"Failed to read PDF: {original_name}",
        ) from e

    text_parts: list[str] = []
    for i, page in enumerate(pages):
        try:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1} of {original_name}: {e}")
            continue

    text = "\n\n".join(text_parts)

    if not text.strip():
        raise ExtractionError(FailureKind.EMPTY_CONTENT, "PDF contains no readable text")

    return text


def _extract_txt(file_path: Path) -> str:
    text = file_path.read_bytes().decode("utf-8", errors="replace")
    if not text.strip():
        raise ExtractionError(FailureKind.EMPTY_CONTENT, "Text file is empty")
    return text


def extract_text(file_path: Path | str, original_name: str) -> str:
    """Extract plain text from a stored upload.

    Read-only: the caller owns the file and is responsible for deleting it.

    Args:
        file_path: Location of the stored upload on disk.
        original_name: Filename as supplied by the user; its extension
            selects the extraction routine.

    Returns:
        Extracted text, guaranteed non-empty after trimming.

    Raises:
        ExtractionError: UNSUPPORTED_TYPE, EMPTY_CONTENT, or UNKNOWN_FAILURE.
    """
    ext = ensure_supported(original_name)
    path = Path(file_path)

    if ext == ".pdf":
        return _extract_pdf(path, original_name)
    return _extract_txt(path)
