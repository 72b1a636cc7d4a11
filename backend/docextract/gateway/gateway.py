"""
API Gateway

Main gateway class that wires middleware, exception handlers and routers.
Acts as the single entry point for all API requests.
"""
from typing import Optional, List
from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..api.exceptions import DocumentExtractionError
from ..core.config import CORS_ORIGINS, ENVIRONMENT
from ..core.logging_config import get_logger
from ..middleware.rate_limit import limiter
from .middleware import (
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    ErrorHandlingMiddleware,
    http_exception_handler,
    extraction_exception_handler
)

logger = get_logger(__name__)


class APIGateway:
    """
    API Gateway that manages routing, middleware and error handling.

    Responsibilities:
    - Initialize FastAPI application
    - Register middleware (CORS, rate limiting, logging, error handling)
    - Register routers under their prefixes
    - Provide service info and health endpoints
    """

    def __init__(
        self,
        title: str = "DocExtract API",
        description: str = "Multi-format document text extraction",
        version: str = "1.0.0",
        enable_docs: Optional[bool] = None
    ):
        """
        Initialize API Gateway.

        Args:
            title: API title
            description: API description
            version: API version
            enable_docs: Enable API docs (auto-detected from ENVIRONMENT if None)
        """
        self.title = title
        self.description = description
        self.version = version
        self.enable_docs = enable_docs if enable_docs is not None else (
            ENVIRONMENT != "production"
        )
        self.prefixes: List[str] = []

        self.app = FastAPI(
            title=self.title,
            description=self.description,
            version=self.version,
            docs_url="/docs" if self.enable_docs else None,
            redoc_url="/redoc" if self.enable_docs else None
        )

        # Rate limiter
        self.app.state.limiter = limiter
        self.app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

        # Exception handlers
        self.app.add_exception_handler(StarletteHTTPException, http_exception_handler)
        self.app.add_exception_handler(DocumentExtractionError, extraction_exception_handler)

        logger.info("API Gateway initialized")

    def setup_middleware(self):
        """Configure all middleware."""
        logger.info("Setting up middleware...")

        # Error handling (added first, so it sits innermost around the routes)
        self.app.add_middleware(ErrorHandlingMiddleware)
        logger.debug("  → Error handling middleware added")

        # Request logging
        self.app.add_middleware(RequestLoggingMiddleware)
        logger.debug("  → Request logging middleware added")

        # Request ID (outermost of the custom middleware, so logging can see it)
        self.app.add_middleware(RequestIDMiddleware)
        logger.debug("  → Request ID middleware added")

        # CORS
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.debug(f"  → CORS middleware added (origins: {', '.join(CORS_ORIGINS)})")

    def register_router(self, router: APIRouter, prefix: str = "", tags: Optional[List[str]] = None):
        """
        Register a router with the gateway.

        Args:
            router: FastAPI router instance
            prefix: URL prefix for the router (e.g., "/api/v1")
            tags: OpenAPI tags for documentation
        """
        self.app.include_router(router, prefix=prefix, tags=tags or [])
        self.prefixes.append(prefix)
        logger.info(f"Registered router at prefix '{prefix}'")

    def register_health_endpoints(self):
        """Register service info and health check endpoints."""

        @self.app.get("/")
        async def root():
            """Root endpoint - API information."""
            return {
                "message": f"{self.title} is running",
                "version": self.version,
                "status": "healthy",
            }

        @self.app.get("/health")
        async def health_check():
            """
            Health check endpoint for container orchestration.

            The engine holds no connections, so it is healthy once the
            extraction service can be built.
            """
            from ..routers.dependencies import get_extraction_service
            service = get_extraction_service()
            return {
                "status": "healthy",
                "formats": service.factory.get_supported_formats(),
            }

        logger.info("Health check endpoints registered")

    def get_app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self.app
