"""Failure taxonomy shared by the extractor, gateway, and orchestrator."""

from enum import Enum


class FailureKind(str, Enum):
    """Machine-checkable failure kinds reported in error envelopes."""

    MISSING_FILE = "missing_file"
    INVALID_INPUT = "invalid_input"
    UNSUPPORTED_TYPE = "unsupported_type"
    EMPTY_CONTENT = "empty_content"
    TRANSPORT_FAILURE = "transport_failure"
    UNKNOWN_FAILURE = "unknown_failure"


class RelayError(Exception):
    """Base error carrying a failure kind and a user-facing message."""

    def __init__(self, kind: FailureKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class ExtractionError(RelayError):
    """Raised when text cannot be extracted from an uploaded file."""

    pass


class GatewayError(RelayError):
    """Raised when the external model call fails in transport."""

    def __init__(self, message: str) -> None:
        super().__init__(FailureKind.TRANSPORT_FAILURE, message)
