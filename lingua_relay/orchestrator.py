"""Request orchestration for translation and chat.

Composes upload storage, text extraction, and the model gateway into the
two public operations, and maps every failure onto a uniform error
envelope. No state is shared between requests apart from immutable
configuration.

Translate flow:
    Received -> Validated -> Extracted -> Translated -> Responded,
    with an exit to Failed from any step. The temporary upload is
    deleted exactly once on every path.
"""

import logging
import os
from pathlib import Path
from typing import Any

from fastapi import status
from pydantic import ValidationError

from lingua_relay.errors import FailureKind, RelayError
from lingua_relay.gateway.config import (
    CHAT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    TRANSLATION_MAX_TOKENS,
)
from lingua_relay.gateway.model_gateway import ModelGateway, get_model_gateway
from lingua_relay.models.schemas import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    TranslateResponse,
)
from lingua_relay.parsing.extractor import ensure_supported, extract_text
from lingua_relay.parsing.uploads import temporary_upload
from lingua_relay.prompts import DEFAULT_LANGUAGE, chat_system_prompt, translation_system_prompt

logger = logging.getLogger(__name__)

# Extracted text sent for translation is capped at this many characters
TRUNCATION_LIMIT = 2000

TRANSLATION_SUGGESTION = (
    "Please ensure you upload a valid PDF or text file with readable content"
)


class OrchestrationError(Exception):
    """Raised with the HTTP status and envelope to return to the caller."""

    def __init__(self, status_code: int, body: ErrorResponse) -> None:
        super().__init__(body.message or body.error)
        self.status_code = status_code
        self.body = body

    @property
    def kind(self) -> FailureKind | None:
        return self.body.kind


def _translation_failed(kind: FailureKind, message: str) -> OrchestrationError:
    return OrchestrationError(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            error="Translation failed",
            kind=kind,
            message=message,
            suggestion=TRANSLATION_SUGGESTION,
        ),
    )


def _chat_failed(kind: FailureKind, message: str) -> OrchestrationError:
    return OrchestrationError(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(error="Chat failed", kind=kind, message=message),
    )


class Orchestrator:
    """Runs the translate and chat operations.

    Args:
        gateway: Model gateway to use. Resolved lazily from
            `get_model_gateway` when omitted, so configuration errors
            surface as request failures rather than at import time.
        upload_dir: Directory for temporary uploads.
    """

    def __init__(
        self,
        gateway: ModelGateway | None = None,
        upload_dir: Path | str = "uploads",
    ) -> None:
        self._gateway = gateway
        self.upload_dir = Path(upload_dir)

    @property
    def gateway(self) -> ModelGateway:
        if self._gateway is None:
            self._gateway = get_model_gateway()
        return self._gateway

    async def translate(
        self,
        content: bytes | None,
        original_name: str | None,
        target_language: str | None = None,
    ) -> TranslateResponse:
        """Extract text from an uploaded file and translate it.

        Args:
            content: Raw upload bytes, or None when no file was attached.
            original_name: Filename as supplied by the client.
            target_language: Language to translate into; Chinese if missing
                or blank.

        Returns:
            TranslateResponse with the truncated source text and translation.

        Raises:
            OrchestrationError: 400 when no file is attached, 500 for any
                extraction or gateway failure.
        """
        if content is None or not original_name:
            raise OrchestrationError(
                status.HTTP_400_BAD_REQUEST,
                ErrorResponse(error="No file uploaded", kind=FailureKind.MISSING_FILE),
            )

        language = (target_language or "").strip() or DEFAULT_LANGUAGE
        logger.info(f"Processing file: {original_name}")

        try:
            ensure_supported(original_name)
            with temporary_upload(content, original_name, self.upload_dir) as upload:
                text = extract_text(upload.path, upload.original_name)
                truncated = text[:TRUNCATION_LIMIT]

                translated = await self.gateway.complete(
                    system_prompt=translation_system_prompt(language),
                    user_content=truncated,
                    model_id=self.gateway.model_name,
                    temperature=DEFAULT_TEMPERATURE,
                    max_tokens=TRANSLATION_MAX_TOKENS,
                )
        except RelayError as e:
            logger.warning(f"Translation error for {original_name}: {e.message}")
            raise _translation_failed(e.kind, e.message) from e
        except Exception as e:
            logger.error(f"Translation error for {original_name}: {e}")
            raise _translation_failed(FailureKind.UNKNOWN_FAILURE, str(e)) from e

        logger.info(f"Translated {original_name} ({len(text)} chars) to {language}")

        return TranslateResponse(
            original_text=truncated,
            translated_text=translated,
            language=language,
            original_length=len(text),
        )

    async def chat(self, message: Any, language: Any = None) -> ChatResponse:
        """Reply to a message in the requested language.

        Args:
            message: User message; must be a non-empty string.
            language: One of the supported languages. Unknown or missing
                values use the Chinese prompt.

        Returns:
            ChatResponse with the generated text and the echoed language.

        Raises:
            OrchestrationError: 400 for invalid input, 500 if the model
                call fails.
        """
        try:
            request = ChatRequest(message=message, language=language)
        except ValidationError as e:
            raise OrchestrationError(
                status.HTTP_400_BAD_REQUEST,
                ErrorResponse(error="Valid message is required", kind=FailureKind.INVALID_INPUT),
            ) from e

        reply_language = request.language or DEFAULT_LANGUAGE

        try:
            reply = await self.gateway.complete(
                system_prompt=chat_system_prompt(request.language),
                user_content=request.message,
                model_id=self.gateway.model_name,
                temperature=DEFAULT_TEMPERATURE,
                max_tokens=CHAT_MAX_TOKENS,
            )
        except RelayError as e:
            logger.error(f"Chat error: {e.message}")
            raise _chat_failed(e.kind, e.message) from e
        except Exception as e:
            logger.error(f"Chat error: {e}")
            raise _chat_failed(FailureKind.UNKNOWN_FAILURE, str(e)) from e

        return ChatResponse(response=reply, language=reply_language)


# Module-level singleton instance
_orchestrator: Orchestrator | None = None


def get_orchestrator() -> Orchestrator:
    """Get or create the global orchestrator.

    Returns:
        The Orchestrator instance.
    """
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = Orchestrator(upload_dir=os.getenv("UPLOAD_DIR", "uploads"))
    return _orchestrator
