"""
Validation service.

Connects the OCR boundary to the pipeline: each page is recognized, then
validated, before the next page is touched.
"""
from typing import List, Optional

import structlog

from ocr_validation.middleware.logging import log_performance
from ocr_validation.pipeline.models import DocumentResult, PageResult
from ocr_validation.pipeline.orchestrator import ValidationPipeline
from ocr_validation.services.ocr_service import OCRService, PDFSource, get_ocr_service

logger = structlog.get_logger(__name__)


class ValidationService:
    """Runs OCR and the validation pipeline over a PDF document."""

    def __init__(
        self,
        ocr_service: Optional[OCRService] = None,
        pipeline: Optional[ValidationPipeline] = None,
    ):
        self.ocr_service = ocr_service or get_ocr_service()
        self.pipeline = pipeline or ValidationPipeline()

    @log_performance("document_validation")
    def validate_pdf(self, source: PDFSource, file_name: str = "") -> DocumentResult:
        """
        Validate every page of a PDF.

        Args:
            source: Path or binary stream of the PDF.
            file_name: Original file name, echoed into the result.

        Returns:
            DocumentResult with per-page results and the document summary.
        """
        page_results: List[PageResult] = []
        for page_number, tokens in self.ocr_service.iter_pages(source):
            if not tokens:
                logger.warning("No tokens recognized", file_name=file_name, page=page_number)
            page_results.append(self.pipeline.validate_page(tokens, page_number))

        return self.pipeline.combine_pages(page_results, file_name)


_validation_service_instance: Optional[ValidationService] = None


def get_validation_service() -> ValidationService:
    """Get singleton ValidationService instance."""
    global _validation_service_instance
    if _validation_service_instance is None:
        _validation_service_instance = ValidationService()
    return _validation_service_instance
