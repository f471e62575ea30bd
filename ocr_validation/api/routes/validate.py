"""
Validation API routes.

Accepts a PDF upload, runs OCR and the line validation pipeline, and returns
the export document.
"""
import io
import json
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, File, Response, UploadFile

from ocr_validation.config import get_settings
from ocr_validation.exceptions import FileTooLargeError, InvalidFileTypeError
from ocr_validation.pipeline.models import DocumentResult
from ocr_validation.pipeline.scoring import rate_score
from ocr_validation.schemas.validation import ErrorResponse, ValidationResponse
from ocr_validation.services.export_service import build_export, export_filename
from ocr_validation.services.validation_service import (
    ValidationService,
    get_validation_service,
)

logger = structlog.get_logger(__name__)

router = APIRouter()

PDF_CONTENT_TYPES = ["application/pdf", "application/x-pdf"]

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid file"},
    413: {"model": ErrorResponse, "description": "File too large"},
    422: {"model": ErrorResponse, "description": "Unreadable PDF"},
}


def validate_pdf_file(file: UploadFile) -> None:
    """
    Validate that uploaded file is a PDF.

    Raises:
        InvalidFileTypeError: If content type or extension is not PDF.
    """
    filename = file.filename or ""
    if file.content_type not in PDF_CONTENT_TYPES or not filename.lower().endswith(".pdf"):
        raise InvalidFileTypeError(filename=filename, expected_types=[".pdf"])


def read_upload(file: UploadFile) -> bytes:
    """
    Read the upload into memory, enforcing the size limit.

    Raises:
        FileTooLargeError: If the file exceeds max_upload_size_mb.
    """
    settings = get_settings()
    file.file.seek(0, 2)
    size = file.file.tell()
    file.file.seek(0)

    if size > settings.max_upload_size_bytes:
        raise FileTooLargeError(size=size, max_size=settings.max_upload_size_bytes)

    return file.file.read()


def _run_validation(file: UploadFile, service: ValidationService) -> DocumentResult:
    validate_pdf_file(file)
    content = read_upload(file)
    logger.info("File uploaded", filename=file.filename, size=len(content))
    return service.validate_pdf(io.BytesIO(content), file_name=file.filename or "")


@router.post(
    "/validate",
    response_model=ValidationResponse,
    responses=ERROR_RESPONSES,
    summary="Validate OCR lines of a PDF",
    description="Upload a scanned statement PDF; every recognized line is routed to "
    "auto_accept, quick_review or manual_review.",
)
def validate_document(
    file: UploadFile = File(..., description="PDF file to validate"),
    service: ValidationService = Depends(get_validation_service),
) -> dict:
    result = _run_validation(file, service)
    payload = build_export(result)
    payload["rating"] = rate_score(result.summary.overall_score)
    return payload


@router.post(
    "/validate/export",
    responses=ERROR_RESPONSES,
    summary="Validate a PDF and download the JSON export",
)
def export_document(
    file: UploadFile = File(..., description="PDF file to validate"),
    service: ValidationService = Depends(get_validation_service),
) -> Response:
    result = _run_validation(file, service)
    now = datetime.now(timezone.utc)
    payload = build_export(result, processed_at=now)
    return Response(
        content=json.dumps(payload, indent=2, ensure_ascii=False),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(now)}"'},
    )
