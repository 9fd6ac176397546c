"""
FastAPI application for rental application extraction.

Provides endpoints for:
- Uploading rental application PDFs for field extraction
- Extracting fields from already-acquired document text
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import get_settings
from .models import HealthResponse
from .routers import applications
from .services.extraction import (
    ExtractionError,
    get_extraction_service,
    shutdown_extraction_service,
)
from .services.text_service import get_text_service

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Rental Application Extraction Service...")
    # Initialize services on startup
    get_text_service()
    get_extraction_service()
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down Rental Application Extraction Service...")
    shutdown_extraction_service()


# Create FastAPI application
app = FastAPI(
    title="Rental Application Extraction API",
    description="Confidence-scored applicant field extraction from rental application PDFs",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        message="Rental Application Extraction API is running",
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy", version=__version__, message="Service is healthy"
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(applications.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(ExtractionError)
async def extraction_error_handler(request, exc: ExtractionError):
    """Map extraction failures, such as a document without usable text, to 422."""
    logger.warning("Extraction failed for %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)},
    )
