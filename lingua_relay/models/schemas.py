from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel

from lingua_relay.errors import FailureKind


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        message: User's prompt; must be a non-empty string.
        language: Reply language; non-string values are treated as absent.
    """

    message: StrictStr = Field(..., min_length=1)
    language: str | None = None

    @field_validator("language", mode="before")
    @classmethod
    def drop_non_string_language(cls, v: Any) -> str | None:
        """Treat a non-string language as unspecified."""
        if isinstance(v, str):
            return v
        return None


class ChatResponse(BaseModel):
    """Reply from the chat endpoint.

    Attributes:
        response: Generated text, possibly empty.
        language: The language the caller asked for.
    """

    response: str
    language: str


class TranslateResponse(BaseModel):
    """Result of translating an uploaded document.

    Attributes:
        success: Always True for a completed translation.
        original_text: Extracted text after truncation.
        translated_text: Generated translation, possibly empty.
        language: Target language used.
        original_length: Length of the extracted text before truncation.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    original_text: str
    translated_text: str
    language: str
    original_length: int = Field(ge=0)


class ErrorResponse(BaseModel):
    """Uniform JSON error envelope.

    Attributes:
        error: Short error title (e.g. "Translation failed").
        kind: Failure kind for programmatic handling.
        message: Underlying failure message.
        suggestion: Actionable hint for the user.
    """

    error: str
    kind: FailureKind | None = None
    message: str | None = None
    suggestion: str | None = None


class HealthResponse(BaseModel):
    """Liveness payload for the health probe."""

    status: str = "healthy"
    services: dict[str, str]
    timestamp: datetime
