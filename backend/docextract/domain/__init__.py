"""
Domain layer - Contains extraction entities and value objects.
This layer is independent of infrastructure and frameworks.
"""
from .entities import (
    RawInput,
    ExtractionOutcome,
    ExtractionResult,
    Sheet,
    Table,
    Slide,
    DeckMetadata,
    SlideDeck,
)
from .value_objects import DocumentFormat, OutcomeStatus

__all__ = [
    "RawInput",
    "ExtractionOutcome",
    "ExtractionResult",
    "Sheet",
    "Table",
    "Slide",
    "DeckMetadata",
    "SlideDeck",
    "DocumentFormat",
    "OutcomeStatus",
]
