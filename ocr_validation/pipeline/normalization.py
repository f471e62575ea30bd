"""
Normalization stage.

Cleans raw OCR text, classifies the value type of each line, and extracts a
numeric value when one is present. The original raw text is carried through
untouched so later stages can compare against it.
"""

import re
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

import structlog

from ocr_validation.pipeline.models import LineRecord, ValueType

logger = structlog.get_logger(__name__)


# Ordered character fixes for common OCR digit confusions
CHARACTER_FIXES: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r"O"), "0"),
    (re.compile(r"l(?=\d)"), "1"),
    (re.compile(r"I"), "1"),
)

WHITESPACE_PATTERN = re.compile(r"\s+")

# Optional dollar sign, optional space, then digits and thousands separators
VALUE_PATTERN = re.compile(r"\$?\s*([\d,]+)")


def clean_text(raw: str) -> str:
    """Apply character fixes, collapse whitespace, and trim."""
    text = raw
    for pattern, replacement in CHARACTER_FIXES:
        text = pattern.sub(replacement, text)
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def extract_value(text: str) -> Optional[float]:
    """
    Extract the first numeric value from normalized text.

    Args:
        text: Normalized line text.

    Returns:
        Parsed value with commas removed, or None when no number is present
        or the first run holds only commas.
    """
    match = VALUE_PATTERN.search(text)
    if not match:
        return None
    digits = match.group(1).replace(",", "")
    if not digits:
        return None
    try:
        return float(digits)
    except ValueError:
        return None


class Normalizer:
    """Stage 1: text cleanup and value typing."""

    def normalize_line(self, line: LineRecord) -> LineRecord:
        raw = line.raw if line.raw is not None else ""
        if not raw.strip():
            return replace(line, normalized="", parsed_value=None, value_type=ValueType.EMPTY)

        normalized = clean_text(raw)
        parsed_value = extract_value(normalized)

        if parsed_value is not None:
            value_type = ValueType.NUMERIC
        elif normalized:
            value_type = ValueType.TEXT
        else:
            value_type = ValueType.EMPTY

        return replace(
            line,
            normalized=normalized,
            parsed_value=parsed_value,
            value_type=value_type,
        )

    def process(self, lines: Sequence[LineRecord]) -> List[LineRecord]:
        normalized = [self.normalize_line(line) for line in lines]
        logger.debug(
            "Normalization complete",
            lines=len(normalized),
            numeric=sum(1 for line in normalized if line.is_numeric),
            empty=sum(1 for line in normalized if line.is_empty),
        )
        return normalized
