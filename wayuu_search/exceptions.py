"""Application exception hierarchy.

All custom exceptions inherit from WayuuSearchError.
Each exception has an error code for structured error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "WS-1000"
    CONFIGURATION_ERROR = "WS-1001"
    SERVICE_UNAVAILABLE = "WS-1003"

    # Embedding errors (3xxx)
    EMBEDDING_SERVICE_ERROR = "WS-3000"
    EMBEDDING_DIMENSION_MISMATCH = "WS-3001"
    EMBEDDING_ZERO_VECTOR = "WS-3002"

    # Vector store errors (4xxx)
    VECTOR_STORE_ERROR = "WS-4000"
    COLLECTION_NOT_FOUND = "WS-4001"
    VECTOR_STORE_AUTH_ERROR = "WS-4003"

    # LLM errors (5xxx)
    LLM_SERVICE_ERROR = "WS-5000"
    LLM_TIMEOUT = "WS-5001"
    LLM_RATE_LIMIT = "WS-5002"
    LLM_CONTENT_BLOCKED = "WS-5004"

    # Retrieval errors (6xxx)
    RETRIEVAL_ERROR = "WS-6000"


class WayuuSearchError(Exception):
    """Base exception for all search service errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logs and API responses."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(WayuuSearchError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class EmbeddingError(WayuuSearchError):
    """Embedding generation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.EMBEDDING_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class VectorStoreError(WayuuSearchError):
    """Vector store operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VECTOR_STORE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class LLMError(WayuuSearchError):
    """Generative model error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.LLM_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class RetrievalError(WayuuSearchError):
    """Retrieval operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RETRIEVAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
