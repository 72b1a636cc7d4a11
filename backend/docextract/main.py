from .gateway import APIGateway
from .routers import documents
from .routers.dependencies import initialize_services
from .core.config import ENVIRONMENT, RATE_LIMIT_ENABLED, RATE_LIMIT_PER_MINUTE, CORS_ORIGINS
from .core.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Initialize API Gateway
gateway = APIGateway(
    title="DocExtract API",
    description="Extracts plain text and structured content from PDF, DOCX, XLSX, PPTX, CSV and TXT uploads",
    version="1.0.0"
)

# Setup middleware (CORS, request IDs, logging, error handling)
gateway.setup_middleware()

# Register routers with API versioning
gateway.register_router(documents.router, prefix="/api/v1", tags=["Documents"])

# Also register without version prefix for backward compatibility
gateway.register_router(documents.router, tags=["Documents"])

# Register health check endpoints
gateway.register_health_endpoints()

# Get FastAPI app instance
app = gateway.get_app()


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("=" * 60)
    logger.info("Starting DocExtract Backend...")
    logger.info("=" * 60)

    logger.info("API Gateway Configuration:")
    logger.info(f"  → API Title: {app.title}")
    logger.info(f"  → API Version: {app.version}")
    logger.info(f"  → Docs URL: {app.docs_url if app.docs_url else 'Disabled (production)'}")
    logger.info(f"  → Environment: {ENVIRONMENT}")

    logger.info("Rate Limiting:")
    logger.info(f"  → Enabled: {RATE_LIMIT_ENABLED}")
    if RATE_LIMIT_ENABLED:
        logger.info(f"  → Limit: {RATE_LIMIT_PER_MINUTE} requests/minute")

    logger.info("CORS Configuration:")
    logger.info(f"  → Allowed Origins: {', '.join(CORS_ORIGINS)}")

    initialize_services()

    logger.info("API Endpoints:")
    logger.info("  → Parse: /parse-document and /api/v1/parse-document")
    logger.info("  → Formats: /formats and /api/v1/formats")
    logger.info("  ✅ All routers registered with API Gateway")


@app.on_event("shutdown")
async def shutdown_event():
    """Log application shutdown."""
    logger.info("Shutting down DocExtract Backend...")
