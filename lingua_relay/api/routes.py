"""Translation and chat endpoints.

Handles multipart upload validation at the transport boundary and hands
the request to the orchestrator.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Form, Request, UploadFile, status

from lingua_relay.errors import FailureKind
from lingua_relay.models.schemas import ChatResponse, ErrorResponse, TranslateResponse
from lingua_relay.orchestrator import OrchestrationError, Orchestrator, get_orchestrator
from lingua_relay.parsing.uploads import MAX_UPLOAD_FILES, MAX_UPLOAD_SIZE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Args:
        file: The uploaded file.

    Returns:
        File content as bytes.

    Raises:
        OrchestrationError: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_UPLOAD_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise OrchestrationError(
            status.HTTP_413_CONTENT_TOO_LARGE,
            ErrorResponse(
                error="File too large",
                kind=FailureKind.INVALID_INPUT,
                message=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
            ),
        )

    return content


@router.post(
    "/translate",
    response_model=TranslateResponse,
    responses={**ERROR_RESPONSES, 413: {"model": ErrorResponse}},
)
async def translate(
    request: Request,
    orchestrator: Annotated[Orchestrator, Depends(get_orchestrator)],
    file: UploadFile | None = None,
    target_language: Annotated[str | None, Form(alias="targetLanguage")] = None,
) -> TranslateResponse:
    """Translate an uploaded PDF or TXT document.

    Extracts the document text, truncates it, and asks the model for a
    translation into the target language.

    Args:
        file: The uploaded document (multipart/form-data).
        target_language: Target language, Chinese by default.

    Returns:
        TranslateResponse with truncated original and translated text.

    Raises:
        400: No file uploaded, or more than one file.
        413: File exceeds 10MB limit.
        500: Extraction or model failure.
    """
    form = await request.form()
    if len(form.getlist("file")) > MAX_UPLOAD_FILES:
        raise OrchestrationError(
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(
                error="Too many files",
                kind=FailureKind.INVALID_INPUT,
                message=f"Only {MAX_UPLOAD_FILES} file can be uploaded per request",
            ),
        )

    if file is None:
        return await orchestrator.translate(None, None, target_language)

    content = await _read_and_validate_size(file)
    return await orchestrator.translate(content, file.filename, target_language)


@router.post("/chat", response_model=ChatResponse, responses=ERROR_RESPONSES)
async def chat(
    request: Request,
    orchestrator: Annotated[Orchestrator, Depends(get_orchestrator)],
) -> ChatResponse:
    """Reply to a chat message in the requested language.

    Body: `{"message": str, "language": str | None}`. The body is parsed
    leniently so malformed input yields the 400 envelope rather than a
    framework validation error.
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    if not isinstance(payload, dict):
        payload = {}

    return await orchestrator.chat(payload.get("message"), payload.get("language"))
