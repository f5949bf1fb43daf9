"""Upload handling and text extraction.

Responsibilities:
    - Temporary, collision-free storage of uploaded files
    - PDF text extraction with pypdf
    - UTF-8 decoding of plain-text uploads
    - Single-point validation of the accepted file types
"""

from lingua_relay.parsing.extractor import SUPPORTED_EXTENSIONS, ensure_supported, extract_text
from lingua_relay.parsing.uploads import (
    MAX_UPLOAD_SIZE,
    UploadedFile,
    discard,
    save_upload,
    temporary_upload,
)

__all__ = [
    "MAX_UPLOAD_SIZE",
    "SUPPORTED_EXTENSIONS",
    "UploadedFile",
    "discard",
    "ensure_supported",
    "extract_text",
    "save_upload",
    "temporary_upload",
]
