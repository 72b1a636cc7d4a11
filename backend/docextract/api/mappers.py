"""
Mappers to convert between domain entities and DTOs.
Keeps API contracts separate from the extraction domain.
"""
from .dto import ParseDocumentResponseDTO
from ..domain.entities import ExtractionResult


def result_to_dto(result: ExtractionResult) -> ParseDocumentResponseDTO:
    """Convert an ExtractionResult to the parse-document response DTO."""
    return ParseDocumentResponseDTO(
        success=True,
        content=result.plain_text,
        structured_data=result.structured_data,
        preview=result.preview,
        metadata=result.metadata,
        character_count=result.character_count,
        word_count=result.word_count,
    )
