"""
Diagnostic script for OCR line validation.

Runs a PDF through OCR and the validation pipeline, prints the score summary
and the lines routed to review, and writes the JSON export.

Usage:
    python scripts/validate_pdf.py statement.pdf [--export-dir exports]
"""
import argparse
import sys
from pathlib import Path

import structlog

from ocr_validation.config import get_settings
from ocr_validation.exceptions import OCRValidationError
from ocr_validation.logging_config import configure_logging
from ocr_validation.pipeline.models import RoutingStatus
from ocr_validation.pipeline.scoring import rate_score
from ocr_validation.services.export_service import write_export
from ocr_validation.services.validation_service import ValidationService

logger = structlog.get_logger(__name__)


def diagnose_pdf(pdf_path: Path, export_dir: Path) -> int:
    if not pdf_path.exists():
        print(f"File not found: {pdf_path}")
        return 1

    service = ValidationService()
    if not service.ocr_service.is_available:
        print("  Tesseract is MISSING; pages will yield no lines.")

    try:
        result = service.validate_pdf(pdf_path, file_name=pdf_path.name)
    except OCRValidationError as e:
        print(f"  Validation failed [{e.error_code}]: {e.message}")
        return 1

    summary = result.summary.to_dict()
    print(f"\n--- {pdf_path.name}: {result.page_count} page(s) ---")
    print(f"  Overall score: {summary['overallScore']} ({rate_score(result.summary.overall_score)})")
    print(f"  Lines: {summary['totalLines']}  Auto-accepted: {summary['autoAccepted']}  "
          f"Quick review: {summary['quickReview']}  Manual review: {summary['manualReview']}")
    print(f"  Avg confidence: {summary['avgConfidence']}%")

    for line in result.lines:
        if line.status == RoutingStatus.AUTO_ACCEPT:
            continue
        failures = ", ".join(f.value for f in line.rule_failures) or "-"
        print(f"    p{line.page_number} #{line.id} [{line.status.value}] {line.raw!r} "
              f"conf={line.confidence:.2f} failures={failures}")

    export_path = write_export(result, export_dir)
    print(f"\n  Export: {export_path}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate OCR lines of a scanned statement PDF.")
    parser.add_argument("pdf", type=Path, help="PDF file to validate")
    parser.add_argument("--export-dir", type=Path, default=None, help="Where to write the JSON export")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level, json_output=False)
    return diagnose_pdf(args.pdf, args.export_dir or settings.export_dir)


if __name__ == "__main__":
    sys.exit(main())
