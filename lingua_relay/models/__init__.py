"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatRequest: Incoming chat request payload
    - ChatResponse: Generated reply and echoed language
    - TranslateResponse: Document translation result
    - ErrorResponse: Uniform error envelope
    - HealthResponse: Liveness payload
"""

from lingua_relay.models.schemas import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HealthResponse,
    TranslateResponse,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
    "TranslateResponse",
]
