"""
OCR service for scanned statement pages.

Rasterizes each PDF page with pdfplumber and runs Tesseract word-level
recognition on the image. Pages are processed strictly one at a time; a
page whose recognition fails yields no tokens instead of aborting the
document.
"""
from pathlib import Path
from typing import Any, BinaryIO, Dict, Iterator, List, Optional, Tuple, Union

import pdfplumber
import pytesseract
from PIL import Image
import structlog

from ocr_validation.config import Settings, get_settings
from ocr_validation.exceptions import DocumentProcessingError
from ocr_validation.pipeline.models import OCRToken

logger = structlog.get_logger(__name__)

PDFSource = Union[str, Path, BinaryIO]


class OCRService:
    """
    Service for recognizing text tokens on PDF pages.

    Each token carries its pixel bounding box on the rendered page and a
    recognition confidence in [0, 1].
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize OCR service."""
        self.settings = settings or get_settings()
        self._tesseract_available = self._check_tesseract()

    @property
    def is_available(self) -> bool:
        return self._tesseract_available

    def _check_tesseract(self) -> bool:
        """Check if Tesseract OCR is available."""
        try:
            if self.settings.tesseract_cmd:
                pytesseract.pytesseract.tesseract_cmd = self.settings.tesseract_cmd

            pytesseract.get_tesseract_version()
            return True
        except Exception as e:
            logger.warning("Tesseract OCR not available", error=str(e))
            return False

    def get_page_count(self, source: PDFSource) -> int:
        """
        Get the number of pages in a PDF.

        Args:
            source: Path or binary stream of the PDF.

        Returns:
            Number of pages.
        """
        try:
            with pdfplumber.open(source) as pdf:
                return len(pdf.pages)
        except Exception as e:
            raise DocumentProcessingError(
                "Unable to open PDF document", details={"error": str(e)}
            ) from e

    def iter_pages(self, source: PDFSource) -> Iterator[Tuple[int, List[OCRToken]]]:
        """
        Recognize a PDF page by page.

        Args:
            source: Path or binary stream of the PDF.

        Yields:
            (page_number, tokens) with page numbers starting at 1.

        Raises:
            DocumentProcessingError: If the PDF cannot be opened.
        """
        try:
            pdf = pdfplumber.open(source)
        except Exception as e:
            logger.error("Failed to open PDF", error=str(e))
            raise DocumentProcessingError(
                "Unable to open PDF document", details={"error": str(e)}
            ) from e

        with pdf:
            logger.info("Recognizing PDF", pages=len(pdf.pages))
            for page_num, page in enumerate(pdf.pages, start=1):
                yield page_num, self.recognize_page(page, page_num)

    def extract_tokens(self, source: PDFSource) -> List[List[OCRToken]]:
        """Recognize every page and return the tokens per page."""
        return [tokens for _, tokens in self.iter_pages(source)]

    def recognize_page(self, page: Any, page_num: int) -> List[OCRToken]:
        """
        Rasterize and recognize a single pdfplumber page.

        Args:
            page: pdfplumber page object.
            page_num: Page number (1-indexed).

        Returns:
            Recognized tokens, empty if OCR fails for this page.
        """
        try:
            image: Image.Image = page.to_image(resolution=self.settings.ocr_resolution).original
            ocr_data = pytesseract.image_to_data(
                image,
                lang=self.settings.ocr_language,
                output_type=pytesseract.Output.DICT,
            )
        except Exception as e:
            logger.warning("OCR failed for page", page=page_num, error=str(e))
            return []

        tokens = self.tokens_from_ocr_data(ocr_data)
        logger.info("Page recognized", page=page_num, tokens=len(tokens))
        return tokens

    def tokens_from_ocr_data(self, ocr_data: Dict[str, List[Any]]) -> List[OCRToken]:
        """
        Convert Tesseract image_to_data output into OCR tokens.

        Blank words are dropped. Tesseract confidence (0-100, -1 for
        non-word rows) is scaled to [0, ocr_max_confidence].
        """
        tokens: List[OCRToken] = []
        for i, text in enumerate(ocr_data.get("text", [])):
            if not text or not str(text).strip():
                continue
            tokens.append(
                OCRToken(
                    text=str(text),
                    bbox=(
                        float(ocr_data["left"][i]),
                        float(ocr_data["top"][i]),
                        float(ocr_data["left"][i] + ocr_data["width"][i]),
                        float(ocr_data["top"][i] + ocr_data["height"][i]),
                    ),
                    confidence=self._scale_confidence(ocr_data["conf"][i]),
                )
            )
        return tokens

    def _scale_confidence(self, raw_conf: Any) -> float:
        try:
            confidence = float(raw_conf) / 100.0
        except (TypeError, ValueError):
            confidence = 0.0
        return min(max(confidence, 0.0), self.settings.ocr_max_confidence)


# Singleton instance
_ocr_service_instance: Optional[OCRService] = None


def get_ocr_service() -> OCRService:
    """Get singleton OCRService instance."""
    global _ocr_service_instance
    if _ocr_service_instance is None:
        _ocr_service_instance = OCRService()
    return _ocr_service_instance
