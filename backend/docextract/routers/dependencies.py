"""
Shared dependencies for routers.
Provides extraction service initialization.
"""
from ..services.extraction_service import ExtractionService
from ..core.config import DEFAULT_LIMITS
from ..core.logging_config import get_logger

logger = get_logger(__name__)

# Global service (initialized on startup or first use)
# The service is stateless, so one instance is shared across request handlers
extraction_service = None


def initialize_services():
    """Initialize the extraction service with the configured limits."""
    global extraction_service

    extraction_service = ExtractionService(DEFAULT_LIMITS)
    logger.info("Extraction service initialized")
    logger.info(f"  → Max file size: {DEFAULT_LIMITS.max_file_size} bytes")
    logger.info(f"  → Preview length: {DEFAULT_LIMITS.preview_length} characters")
    logger.info(f"  → Rows per sheet: {DEFAULT_LIMITS.max_rows_per_sheet}")
    logger.info(f"  → PDF confidence threshold: {DEFAULT_LIMITS.pdf_min_text_length} characters")
    logger.info(f"  → Supported formats: {', '.join(extraction_service.factory.get_supported_formats())}")


def get_extraction_service() -> ExtractionService:
    """Get the shared extraction service."""
    if extraction_service is None:
        initialize_services()
    return extraction_service
