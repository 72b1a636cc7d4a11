"""
Domain entities - Core extraction objects.
These represent the extraction concepts, independent of the HTTP layer.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from .value_objects import OutcomeStatus


@dataclass
class RawInput:
    """
    Raw upload handed to the engine.

    Transient: owned by a single extraction call.
    """
    content: Optional[bytes]
    content_type: str
    filename: str

    @property
    def size(self) -> int:
        """Byte length of the buffer."""
        return len(self.content) if self.content is not None else 0


@dataclass
class ExtractionOutcome:
    """
    Tagged result returned by every extractor.

    An ``ok`` outcome carries genuinely extracted text. A ``degraded`` outcome
    carries placeholder text plus a machine-readable reason, and ``error`` when
    the degradation came from a failure rather than from low confidence.
    """
    status: OutcomeStatus
    text: str
    reason: Optional[str] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    structured_data: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(
        cls,
        text: str,
        metadata: Optional[Dict[str, Any]] = None,
        structured_data: Optional[Dict[str, Any]] = None
    ) -> "ExtractionOutcome":
        return cls(
            status=OutcomeStatus.OK,
            text=text,
            metadata=metadata or {},
            structured_data=structured_data
        )

    @classmethod
    def degraded(
        cls,
        text: str,
        reason: str,
        error: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "ExtractionOutcome":
        return cls(
            status=OutcomeStatus.DEGRADED,
            text=text,
            reason=reason,
            error=error,
            metadata=metadata or {}
        )

    @property
    def is_degraded(self) -> bool:
        return self.status == OutcomeStatus.DEGRADED


@dataclass
class ExtractionResult:
    """
    Unified, normalized result of one extraction call.
    The engine keeps no reference to it after returning.
    """
    plain_text: str
    structured_data: Optional[Dict[str, Any]]
    metadata: Dict[str, Any]
    preview: str
    character_count: int
    word_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase keys upstream consumers expect."""
        return {
            "plainText": self.plain_text,
            "structuredData": self.structured_data,
            "metadata": self.metadata,
            "preview": self.preview,
            "characterCount": self.character_count,
            "wordCount": self.word_count,
        }


@dataclass
class Sheet:
    """One worksheet of a spreadsheet grid: rows of pipe-joined cell text."""
    identifier: str
    rows: List[str] = field(default_factory=list)


@dataclass
class Table:
    """Slide table: ordered rows of ordered cell text."""
    rows: List[List[str]] = field(default_factory=list)


@dataclass
class Slide:
    """
    A single slide of a deck.

    ``title`` is always a string (empty when the slide has no title placeholder).
    """
    slide_number: int
    title: str = ""
    subtitle: Optional[str] = None
    body_text: List[str] = field(default_factory=list)
    tables: List[Table] = field(default_factory=list)
    notes: Optional[str] = None

    @property
    def has_notes(self) -> bool:
        return bool(self.notes)

    @property
    def content_length(self) -> int:
        return len(" ".join(self.body_text))


@dataclass
class DeckMetadata:
    """Presentation-level properties read from docProps/core.xml."""
    title: str = ""
    author: str = ""
    slide_count: int = 0
    created: Optional[str] = None
    modified: Optional[str] = None


@dataclass
class SlideDeck:
    """Structured in-memory model of a presentation."""
    metadata: DeckMetadata
    slides: List[Slide] = field(default_factory=list)
