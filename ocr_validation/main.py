"""
OCR Validation API - Main Application Entry Point.
"""
import traceback

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ocr_validation import __version__
from ocr_validation.api.routes import monitoring, validate
from ocr_validation.config import get_settings
from ocr_validation.exceptions import OCRValidationError
from ocr_validation.logging_config import configure_logging
from ocr_validation.middleware.logging import CorrelationIdMiddleware, RequestLoggingMiddleware

settings = get_settings()
configure_logging(settings.log_level, settings.log_json)

logger = structlog.get_logger(__name__)

app = FastAPI(
    title="OCR Validation API",
    description="""
## OCR Line Validation for Financial Statements

Upload a scanned statement PDF. Every recognized line is normalized, labeled,
checked against structural rules and scored for anomalies, then routed to
**auto_accept**, **quick_review** or **manual_review**. The response carries a
document-level validation score (0-100).
    """,
    version=__version__,
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Validation", "description": "PDF upload, validation and export"},
        {"name": "Monitoring", "description": "Health checks"},
    ],
)

# Order matters: correlation ID first
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(validate.router, prefix="/api/v1", tags=["Validation"])
app.include_router(monitoring.router, tags=["Monitoring"])


@app.exception_handler(OCRValidationError)
async def ocr_validation_exception_handler(request: Request, exc: OCRValidationError):
    """Handle all custom exceptions."""
    logger.error(
        "ocr_validation_error",
        error_code=exc.error_code,
        message=exc.message,
        details=exc.details,
        path=str(request.url.path),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with consistent format."""
    logger.error(
        "unhandled_error",
        error_type=type(exc).__name__,
        message=str(exc),
        path=str(request.url.path),
        traceback=traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "error_code": "OCV-999",
            "message": "An unexpected error occurred. Please try again.",
            "details": {},
        },
    )
