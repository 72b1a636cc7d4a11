"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from domain entities.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class ParseDocumentResponseDTO(BaseModel):
    """Response DTO for a parsed document."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    content: str
    structured_data: Optional[Dict[str, Any]] = Field(None, alias="structuredData")
    preview: str
    metadata: Dict[str, Any]
    character_count: int = Field(alias="characterCount")
    word_count: int = Field(alias="wordCount")


class SupportedFormatsDTO(BaseModel):
    """Formats and extensions the engine recognizes."""
    model_config = ConfigDict(populate_by_name=True)

    formats: List[str]
    extensions: List[str]
    max_file_size: int = Field(alias="maxFileSize")


class ErrorResponseDTO(BaseModel):
    """Error body returned by the route and the gateway exception handlers."""
    error: str
    details: Optional[str] = None
    status_code: Optional[int] = None
    path: Optional[str] = None
    request_id: Optional[str] = None
