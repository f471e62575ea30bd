"""
Pytest configuration and fixtures.
"""
import tempfile
from pathlib import Path
from typing import Dict, Generator, Iterator, List, Sequence, Tuple

import pytest
from fastapi.testclient import TestClient

from ocr_validation.exceptions import DocumentProcessingError
from ocr_validation.main import app
from ocr_validation.pipeline.models import LineRecord, OCRToken
from ocr_validation.pipeline.orchestrator import ValidationPipeline
from ocr_validation.services.ocr_service import get_ocr_service
from ocr_validation.services.validation_service import (
    ValidationService,
    get_validation_service,
)


class FakeOCRService:
    """Stands in for Tesseract: returns preset tokens per page."""

    def __init__(self, pages: Sequence[Sequence[OCRToken]], fail_open: bool = False):
        self.pages = pages
        self.fail_open = fail_open
        self.is_available = True

    def iter_pages(self, source) -> Iterator[Tuple[int, List[OCRToken]]]:
        if self.fail_open:
            raise DocumentProcessingError("Unable to open PDF document")
        for page_number, tokens in enumerate(self.pages, start=1):
            yield page_number, list(tokens)


def token(text: str, confidence: float = 0.95, bbox=(10.0, 20.0, 110.0, 40.0)) -> OCRToken:
    return OCRToken(text=text, bbox=bbox, confidence=confidence)


def make_line(raw: str, confidence: float = 0.95, line_id: int = 1, **fields) -> LineRecord:
    """Build an ingested line record, optionally with later-stage fields."""
    return LineRecord(id=line_id, raw=raw, confidence=confidence, **fields)


@pytest.fixture
def sample_pages() -> List[List[OCRToken]]:
    """Two pages of recognized statement tokens."""
    return [
        [
            token("Balance Sheet", 0.97),
            token("Cash", 0.95),
            token("12,500", 0.96),
            token("Total l23,456", 0.80),
        ],
        [
            token("Inventory", 0.93),
            token("4O0", 0.91),
        ],
    ]


@pytest.fixture
def fake_ocr_service(sample_pages) -> FakeOCRService:
    return FakeOCRService(sample_pages)


@pytest.fixture
def validation_service(fake_ocr_service) -> ValidationService:
    return ValidationService(ocr_service=fake_ocr_service, pipeline=ValidationPipeline())


@pytest.fixture(scope="function")
def client(validation_service, fake_ocr_service) -> Generator[TestClient, None, None]:
    """Create a test client with the OCR engine replaced."""
    app.dependency_overrides[get_validation_service] = lambda: validation_service
    app.dependency_overrides[get_ocr_service] = lambda: fake_ocr_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_pdf_content() -> bytes:
    """Generate simple PDF content for testing."""
    return b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] >>
endobj
xref
0 4
0000000000 65535 f
0000000009 00000 n
0000000058 00000 n
0000000115 00000 n
trailer
<< /Size 4 /Root 1 0 R >>
startxref
190
%%EOF"""


@pytest.fixture
def upload_files(sample_pdf_content) -> Dict[str, tuple]:
    return {"file": ("statement.pdf", sample_pdf_content, "application/pdf")}


@pytest.fixture
def line_factory():
    """Factory for ingested line records."""
    return make_line


@pytest.fixture
def token_factory():
    """Factory for OCR tokens."""
    return token
