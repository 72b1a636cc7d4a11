"""
Plain Text Extractor.

Passes TXT and CSV content through as text and derives line, header and
row information.
"""
from typing import Any, Dict, Optional
from .base import BaseTextExtractor
from ...core.config import ExtractionLimits
from ...core.logging_config import get_logger
from ...domain.entities import ExtractionOutcome
from ...domain.value_objects import DocumentFormat

logger = get_logger(__name__)


class TextExtractor(BaseTextExtractor):
    """Extractor for plain text files."""

    def __init__(
        self,
        document_format: DocumentFormat = DocumentFormat.TXT,
        file_extension: str = ".txt",
        format_name: str = "TXT",
        limits: Optional[ExtractionLimits] = None
    ):
        super().__init__(document_format, file_extension, format_name, limits)

    def decode(self, file_bytes: bytes) -> str:
        """Decode as UTF-8, replacing undecodable bytes."""
        return file_bytes.decode("utf-8", errors="replace")

    def describe(self, text: str) -> Dict[str, Any]:
        """Format-specific metadata for decoded text."""
        return {"lineCount": len(text.split("\n"))}

    def extract(self, file_bytes: bytes, filename: str = "") -> ExtractionOutcome:
        """
        Extract text from plain text file.

        Args:
            file_bytes: Text file content as bytes
            filename: Original filename

        Returns:
            The decoded text verbatim
        """
        text = self.decode(file_bytes)
        return ExtractionOutcome.ok(text, metadata=self.describe(text))


class CSVExtractor(TextExtractor):
    """
    Extractor for CSV files.

    Headers come from splitting the first non-blank line on commas; quoted
    fields are not handled. ``rowCount`` is the number of non-blank lines
    minus one for the header, so a header-only file reports 0 and an empty
    file reports -1.
    """

    def __init__(self, limits: Optional[ExtractionLimits] = None):
        super().__init__(DocumentFormat.CSV, ".csv", "CSV", limits)

    def describe(self, text: str) -> Dict[str, Any]:
        metadata = super().describe(text)
        lines = [line for line in text.split("\n") if line.strip()]
        metadata["headers"] = [h.strip() for h in lines[0].split(",")] if lines else []
        metadata["rowCount"] = len(lines) - 1
        return metadata
