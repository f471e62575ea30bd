"""
Monitoring endpoints.

Provides a health check including OCR engine availability.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ocr_validation import __version__
from ocr_validation.schemas.validation import HealthResponse
from ocr_validation.services.ocr_service import OCRService, get_ocr_service

router = APIRouter()


@router.get("/health", response_model=HealthResponse, tags=["Monitoring"])
async def health_check(ocr_service: OCRService = Depends(get_ocr_service)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the server is running; `tesseract` reports whether the
    OCR engine binary was found.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
        tesseract=ocr_service.is_available,
    )
