"""
Error Handling Middleware

Centralized error handling and response formatting.
"""
import traceback
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import status
from starlette.exceptions import HTTPException
from ...core.config import ENVIRONMENT
from ...core.logging_config import get_logger
from ...api.exceptions import DocumentExtractionError, handle_business_exception

logger = get_logger(__name__)


def _error_response(request: Request, status_code: int, error: str, **extra) -> JSONResponse:
    content = {
        "error": error,
        "status_code": status_code,
        "path": request.url.path,
        "request_id": getattr(request.state, "request_id", None),
    }
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Format HTTPException as the standard JSON error body."""
    logger.debug(f"HTTP exception for {request.method} {request.url.path}: {exc.status_code} - {exc.detail}")
    return _error_response(request, exc.status_code, exc.detail)


async def extraction_exception_handler(request: Request, exc: DocumentExtractionError) -> JSONResponse:
    """Map extraction errors (SizeExceeded, MissingInput, ...) to HTTP status codes."""
    http_exception = handle_business_exception(exc)
    logger.warning(f"Extraction error for {request.method} {request.url.path}: {http_exception.detail}")
    return _error_response(request, http_exception.status_code, http_exception.detail)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that turns unexpected exceptions into JSON 500 responses.

    Error details and tracebacks are only included outside production.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            is_development = ENVIRONMENT != "production"
            logger.error(f"Unexpected error for {request.method} {request.url.path}: {e}", exc_info=True)

            return _error_response(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                str(e) if is_development else "Internal server error",
                traceback=traceback.format_exc() if is_development else None
            )
