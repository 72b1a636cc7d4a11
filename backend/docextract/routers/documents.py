"""
Documents Router - Handles document parsing.

This router is the request/response boundary of the extraction engine:
- Reads the multipart upload
- Hands bytes, content-type and filename to ExtractionService
- Returns the normalized result

Example Usage:
    POST /parse-document - Extract text from one uploaded file
    GET /formats - List supported formats
"""
from typing import Optional
from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from .dependencies import get_extraction_service
from ..api.dto import ErrorResponseDTO, ParseDocumentResponseDTO, SupportedFormatsDTO
from ..api.exceptions import DocumentExtractionError, MissingInput
from ..api.mappers import result_to_dto
from ..core.logging_config import get_logger
from ..domain.entities import RawInput
from ..middleware.rate_limit import rate_limit_per_minute
from ..services.extraction_service import ExtractionService
from ..utils.validators import normalize_filename, validate_size

logger = get_logger(__name__)

# Create router instance
router = APIRouter()


@router.post(
    "/parse-document",
    response_model=ParseDocumentResponseDTO,
    responses={
        400: {"model": ErrorResponseDTO, "description": "No file, or file over the size ceiling"},
        500: {"model": ErrorResponseDTO, "description": "Unexpected parsing failure"},
    }
)
@rate_limit_per_minute
async def parse_document(
    request: Request,
    file: Optional[UploadFile] = File(None),
    service: ExtractionService = Depends(get_extraction_service)
):
    """
    Extract text and metadata from one uploaded document.

    Supported: PDF, DOCX, XLSX, PPTX, CSV, TXT (other text files are
    decoded as UTF-8). Malformed documents still return 200 with
    placeholder text and ``metadata.error``.

    Args:
        request: Incoming request (used for rate limiting)
        file: The file to parse
        service: Extraction service (injected)

    Returns:
        ParseDocumentResponseDTO with content, preview, counts and metadata

    Raises:
        MissingInput: If no file was uploaded (400)
        SizeExceeded: If the file is over the size ceiling (400)
    """
    if file is None:
        raise MissingInput()

    # Reject early when the multipart part already reports its size
    if file.size is not None:
        validate_size(file.size, service.limits.max_file_size)

    try:
        content = await file.read()
        raw = RawInput(
            content=content,
            content_type=file.content_type or "",
            filename=normalize_filename(file.filename)
        )
        result = await run_in_threadpool(service.extract, raw)
    except DocumentExtractionError:
        raise
    except Exception as e:
        logger.error(f"Parse document error: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponseDTO(error="Failed to parse document", details=str(e)).model_dump(exclude_none=True)
        )
    finally:
        await file.close()

    return result_to_dto(result)


@router.get("/formats", response_model=SupportedFormatsDTO)
async def get_supported_formats(service: ExtractionService = Depends(get_extraction_service)):
    """List the document formats and extensions the engine recognizes."""
    return SupportedFormatsDTO(
        formats=service.factory.get_supported_formats(),
        extensions=service.factory.get_supported_extensions(),
        max_file_size=service.limits.max_file_size
    )
