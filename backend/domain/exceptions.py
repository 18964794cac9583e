"""
Custom exception classes for the note refinery application.

These exceptions provide more specific error handling and better error messages
for common failure scenarios in the application. HTTP-facing errors subclass
HTTPException so routers and services can raise them directly.
"""

from fastapi import HTTPException, status


class EntryNotFoundError(HTTPException):
    """Raised when a requested entry does not exist."""

    def __init__(self, entry_id: int):
        self.entry_id = entry_id
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"Entry with id {entry_id} not found")


class DeleteNotConfirmedError(HTTPException):
    """Raised when a delete request arrives without explicit confirmation."""

    def __init__(self, entry_id: int):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Deleting entry {entry_id} requires confirm=true",
        )


class InvalidVideoLinkError(HTTPException):
    """Raised when a supplied video link is not a recognizable YouTube URL."""

    def __init__(self, link: str):
        self.link = link
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid YouTube link: '{link}'",
        )


class LLMServiceError(HTTPException):
    """Raised when the language model call fails or returns nothing."""

    def __init__(self, message: str = "Language model request failed"):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=message)


class ResponseParseError(HTTPException):
    """Raised when language model output is not JSON or has the wrong shape."""

    def __init__(self, message: str = "Failed to parse language model response"):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=message)


class StoreUnavailableError(HTTPException):
    """Raised when the document store cannot be reached or a query fails."""

    def __init__(self, message: str = "Entry store is unavailable"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=message)


class IngestionError(HTTPException):
    """Raised when a stage of the ingestion pipeline fails.

    Carries the failing stage name and the original exception.
    """

    def __init__(self, stage: str, cause: Exception):
        self.stage = stage
        self.cause = cause
        reason = cause.detail if isinstance(cause, HTTPException) else str(cause)
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Ingestion failed during '{stage}': {reason}",
        )


class ConfigurationError(ValueError):
    """Raised when there's an error in configuration parsing or validation."""

    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")
