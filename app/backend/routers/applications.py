"""
Router for rental application extraction endpoints.

Handles:
- PDF upload and field extraction
- Field extraction from text acquired by the caller
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from ..config import Settings, get_settings
from ..models import ExtractionResponse, ExtractTextRequest
from ..services.extraction import (
    ExtractionError,
    ExtractionService,
    get_extraction_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])


def _is_pdf(upload: UploadFile) -> bool:
    content_type = upload.content_type or ""
    return "pdf" in content_type or upload.filename.lower().endswith(".pdf")


@router.post("/extract-pdf", response_model=ExtractionResponse)
async def extract_pdf(
    pdf: Annotated[UploadFile, File(description="Rental application PDF")],
    service: ExtractionService = Depends(get_extraction_service),
    settings: Settings = Depends(get_settings),
) -> ExtractionResponse:
    """
    Upload a rental application PDF and extract the applicant fields.

    Text acquisition runs first; documents without enough text fall back to
    layout-specific extraction from the raw bytes.
    """
    if not pdf.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No PDF file provided",
        )

    if not _is_pdf(pdf):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File must be a PDF",
        )

    try:
        file_bytes = await pdf.read()

        if not file_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Empty file provided",
            )

        if len(file_bytes) > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    f"PDF file too large (max {settings.max_upload_bytes // (1024 * 1024)}MB)"
                ),
            )

        logger.info("Processing PDF: %s (%d bytes)", pdf.filename, len(file_bytes))

        data = await run_in_threadpool(service.extract, file_bytes)
        return ExtractionResponse(success=True, data=data)

    except (HTTPException, ExtractionError):
        raise
    except Exception as e:
        logger.exception("Unexpected error processing PDF")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to process PDF: {e}",
        )
    finally:
        await pdf.close()


@router.post("/extract-text", response_model=ExtractionResponse)
async def extract_text(
    request: ExtractTextRequest,
    service: ExtractionService = Depends(get_extraction_service),
) -> ExtractionResponse:
    """Extract the applicant fields from text the caller already acquired."""
    data = await run_in_threadpool(service.extract_text, request.text)
    return ExtractionResponse(success=True, data=data)
