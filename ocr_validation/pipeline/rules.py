"""
Rule validation stage.

Checks every non-blank line against a fixed set of structural and
consistency rules. Rules are independent; all failing rules are recorded.
"""

from dataclasses import replace
from typing import Callable, List, Sequence, Tuple

import structlog

from ocr_validation.pipeline.models import FieldLabel, LineRecord, RuleFailure
from ocr_validation.pipeline.options import DEFAULT_OPTIONS, PipelineOptions

logger = structlog.get_logger(__name__)


RuleCheck = Callable[[LineRecord, PipelineOptions], bool]


def _numeric_parse_failed(line: LineRecord, options: PipelineOptions) -> bool:
    return line.is_numeric and line.parsed_value is None


def _low_ocr_confidence(line: LineRecord, options: PipelineOptions) -> bool:
    return (line.confidence or 0.0) < options.low_ocr_confidence


def _suspicious_chars_in_number(line: LineRecord, options: PipelineOptions) -> bool:
    # Checked against raw text: normalization has already replaced these
    raw = line.raw or ""
    return line.is_numeric and any(ch in raw for ch in options.suspicious_chars)


def _total_line_missing_value(line: LineRecord, options: PipelineOptions) -> bool:
    return line.predicted_label == FieldLabel.TOTAL and not line.is_numeric


VALIDATION_RULES: Tuple[Tuple[RuleFailure, RuleCheck], ...] = (
    (RuleFailure.NUMERIC_PARSE_FAILED, _numeric_parse_failed),
    (RuleFailure.LOW_OCR_CONFIDENCE, _low_ocr_confidence),
    (RuleFailure.SUSPICIOUS_CHARS_IN_NUMBER, _suspicious_chars_in_number),
    (RuleFailure.TOTAL_LINE_MISSING_VALUE, _total_line_missing_value),
)


class RuleValidator:
    """Stage 3: accumulate rule failure codes per line."""

    def __init__(self, options: PipelineOptions = DEFAULT_OPTIONS):
        self.options = options

    def validate_line(self, line: LineRecord) -> LineRecord:
        if line.is_empty:
            return replace(line, rule_failures=(), rule_passed=True)

        failures = tuple(
            code for code, check in VALIDATION_RULES if check(line, self.options)
        )
        if RuleFailure.NUMERIC_PARSE_FAILED in failures:
            logger.warning(
                "Numeric line without parsed value",
                line_id=line.id,
                page=line.page_number,
                normalized=line.normalized,
            )

        return replace(line, rule_failures=failures, rule_passed=not failures)

    def process(self, lines: Sequence[LineRecord]) -> List[LineRecord]:
        validated = [self.validate_line(line) for line in lines]
        logger.debug(
            "Rule validation complete",
            lines=len(validated),
            failed=sum(1 for line in validated if not line.rule_passed),
        )
        return validated
