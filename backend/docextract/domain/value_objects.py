"""
Value Objects - Immutable objects that represent domain concepts.
These have no identity and are compared by value.
"""
from enum import Enum


class DocumentFormat(str, Enum):
    """Document formats the extraction engine knows how to handle."""
    PDF = "pdf"
    DOCX = "docx"
    XLSX = "xlsx"
    PPTX = "pptx"
    CSV = "csv"
    TXT = "txt"
    UNKNOWN = "unknown"


class OutcomeStatus(str, Enum):
    """Whether an extractor produced genuine content or a placeholder."""
    OK = "ok"
    DEGRADED = "degraded"


# Reasons attached to degraded outcomes
REASON_UNSUPPORTED_FORMAT = "unsupported_format"
REASON_LOW_CONFIDENCE = "low_confidence"
