"""
Custom exceptions for the extraction engine.
Separates extraction exceptions from HTTP exceptions.
"""
from fastapi import HTTPException, status


class DocumentExtractionError(Exception):
    """Base class for extraction engine errors."""
    pass


class SizeExceeded(DocumentExtractionError):
    """Raised when an upload is larger than the configured ceiling."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"File too large. Maximum size is {limit // (1024 * 1024)}MB.")


class MissingInput(DocumentExtractionError):
    """Raised when no file or no bytes were supplied."""

    def __init__(self, message: str = "No file provided"):
        super().__init__(message)


class ContainerCorrupt(DocumentExtractionError):
    """Raised when a ZIP container cannot be opened or decompressed."""
    pass


class ExtractionError(DocumentExtractionError):
    """Raised when a format-specific parse cannot produce any content."""
    pass


def handle_business_exception(e: Exception) -> HTTPException:
    """
    Convert extraction exceptions to HTTP exceptions.
    This keeps extraction logic clean of HTTP concerns.
    """
    if isinstance(e, (SizeExceeded, MissingInput)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
