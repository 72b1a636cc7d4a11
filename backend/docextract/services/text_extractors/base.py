"""
Base Text Extractor Interface.

All text extractors must inherit from this base class and implement
the extract() method.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from ...core.config import ExtractionLimits, DEFAULT_LIMITS
from ...core.logging_config import get_logger
from ...domain.entities import ExtractionOutcome
from ...domain.value_objects import DocumentFormat

logger = get_logger(__name__)


class BaseTextExtractor(ABC):
    """
    Abstract base class for text extractors.

    Each file format has its own extractor class that inherits from this
    base class and implements the extract() method. Extractors never raise
    for malformed input: failures come back as degraded outcomes.
    """

    def __init__(
        self,
        document_format: DocumentFormat,
        file_extension: str,
        format_name: str,
        limits: Optional[ExtractionLimits] = None
    ):
        """
        Initialize the extractor.

        Args:
            document_format: Format this extractor handles
            file_extension: File extension (e.g., '.pdf', '.docx')
            format_name: Human-readable format name (e.g., 'PDF', 'DOCX')
            limits: Extraction limits (defaults to configured limits)
        """
        self.document_format = document_format
        self.file_extension = file_extension.lower()
        self.format_name = format_name
        self.limits = limits or DEFAULT_LIMITS

    @abstractmethod
    def extract(self, file_bytes: bytes, filename: str = "") -> ExtractionOutcome:
        """
        Extract text from file bytes.

        Args:
            file_bytes: Raw file content as bytes
            filename: Original filename (used in placeholder text)

        Returns:
            ExtractionOutcome with text and format-specific metadata
        """
        pass

    def get_failure_message(self, filename: str = "", error: Optional[Exception] = None) -> str:
        """
        Placeholder text used when extraction fails.

        Override in subclasses for a format-specific message.
        """
        return f"{self.format_name} uploaded successfully. Text extraction encountered an issue."

    def degrade(
        self,
        error: Exception,
        filename: str = "",
        metadata: Optional[Dict[str, Any]] = None
    ) -> ExtractionOutcome:
        """
        Convert a failure into a degraded outcome carrying placeholder text.

        Args:
            error: The failure that stopped extraction
            filename: Original filename
            metadata: Format-specific metadata gathered before the failure

        Returns:
            Degraded ExtractionOutcome with ``error`` set
        """
        logger.warning(f"{self.format_name} extraction failed for '{filename}': {error}")
        merged = {"type": self.document_format.value}
        merged.update(metadata or {})
        return ExtractionOutcome.degraded(
            text=self.get_failure_message(filename, error),
            reason=type(error).__name__,
            error=str(error),
            metadata=merged
        )
