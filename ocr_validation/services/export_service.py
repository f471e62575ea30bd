"""
Export service for validation results.

Produces the JSON export document:
{fileName, processedAt, validationScore, results, pages}
"""
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

from ocr_validation.exceptions import ExportError
from ocr_validation.pipeline.models import DocumentResult

logger = structlog.get_logger(__name__)


def build_export(
    result: DocumentResult,
    processed_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build the export document for a validated PDF.

    Args:
        result: Validated document.
        processed_at: Timestamp to record, defaults to now (UTC).

    Returns:
        JSON-serializable export dictionary.
    """
    processed_at = processed_at or datetime.now(timezone.utc)
    return {
        "fileName": result.file_name,
        "processedAt": processed_at.isoformat(),
        "validationScore": result.summary.to_dict(),
        "results": [line.to_dict() for line in result.lines],
        "pages": [
            {
                "pageNumber": page.page_number,
                "lineCount": len(page.lines),
                "validationScore": page.summary.to_dict(),
            }
            for page in result.pages
        ],
    }


def export_filename(now: Optional[datetime] = None) -> str:
    """Export file name stamped with epoch milliseconds."""
    now = now or datetime.now(timezone.utc)
    return f"ocr-validation-{int(now.timestamp() * 1000)}.json"


def write_export(
    result: DocumentResult,
    export_dir: Path,
    processed_at: Optional[datetime] = None,
) -> Path:
    """
    Write the export document to a JSON file.

    Args:
        result: Validated document.
        export_dir: Directory to write into (created if missing).
        processed_at: Timestamp to record, defaults to now (UTC).

    Returns:
        Path to the written file.

    Raises:
        ExportError: If the file cannot be written.
    """
    processed_at = processed_at or datetime.now(timezone.utc)
    export_path = Path(export_dir) / export_filename(processed_at)
    payload = build_export(result, processed_at)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        with open(export_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.error("Failed to write export", path=str(export_path), error=str(e))
        raise ExportError(details={"path": str(export_path), "error": str(e)}) from e

    logger.info("Export written", path=str(export_path), lines=len(payload["results"]))
    return export_path
