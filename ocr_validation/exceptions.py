"""
Custom exceptions for the OCR validation service.

Provides a hierarchy of exceptions with error codes for consistent error handling.
"""
from typing import Any, Dict, Optional


class OCRValidationError(Exception):
    """
    Base exception for all OCR validation errors.

    Attributes:
        error_code: Unique error code (e.g., OCV-001)
        message: Human-readable error message
        details: Additional error context
    """
    error_code: str = "OCV-000"
    http_status: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        return {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


# Document Processing Errors (OCV-1XX)
class DocumentProcessingError(OCRValidationError):
    """Error during document processing."""
    error_code = "OCV-100"
    http_status = 422

    def __init__(self, message: str = "Failed to process document", **kwargs):
        super().__init__(message, **kwargs)


class InvalidFileTypeError(OCRValidationError):
    """Invalid file type uploaded."""
    error_code = "OCV-102"
    http_status = 400

    def __init__(self, filename: str, expected_types: list, **kwargs):
        message = f"Invalid file type. Expected: {', '.join(expected_types)}"
        super().__init__(message, details={"filename": filename, "expected_types": expected_types}, **kwargs)


class FileTooLargeError(OCRValidationError):
    """File exceeds maximum size limit."""
    error_code = "OCV-103"
    http_status = 413

    def __init__(self, size: int, max_size: int, **kwargs):
        message = f"File too large. Maximum size: {max_size // (1024*1024)}MB"
        super().__init__(message, details={"size": size, "max_size": max_size}, **kwargs)


# Export Errors (OCV-3XX)
class ExportError(OCRValidationError):
    """Error while writing validation results."""
    error_code = "OCV-300"
    http_status = 500

    def __init__(self, message: str = "Failed to export validation results", **kwargs):
        super().__init__(message, **kwargs)


# Validation Errors (OCV-7XX)
class ValidationError(OCRValidationError):
    """Input validation failed."""
    error_code = "OCV-700"
    http_status = 400

    def __init__(self, message: str = "Validation failed", errors: list = None, **kwargs):
        details = kwargs.pop("details", {})
        details["errors"] = errors or []
        super().__init__(message, details=details, **kwargs)
