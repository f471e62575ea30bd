"""
Correction suggestion stage.

Attaches advisory fixes for human reviewers. Suggestions never replace the
normalized text or parsed value, and routing does not look at them.
"""

from dataclasses import replace
from typing import List, Sequence

import structlog

from ocr_validation.pipeline.models import (
    CorrectionSuggestion,
    LineRecord,
    RuleFailure,
    SuggestionType,
)
from ocr_validation.pipeline.options import DEFAULT_OPTIONS, PipelineOptions

logger = structlog.get_logger(__name__)


# Unlike normalization, every "l" is replaced here, not only before a digit
DIGIT_LOOKALIKES = str.maketrans({"O": "0", "l": "1", "I": "1"})

TEXT_CORRECTION_REASON = "OCR character correction (O→0, l/I→1)"
MANUAL_VERIFICATION_REASON = "Low confidence numeric value - manual verification recommended"


def correct_lookalikes(raw: str) -> str:
    """Replace characters commonly misread in place of digits."""
    return raw.translate(DIGIT_LOOKALIKES)


class CorrectionSuggester:
    """Stage 5: zero, one or two suggestions per line."""

    def __init__(self, options: PipelineOptions = DEFAULT_OPTIONS):
        self.options = options

    def suggest_line(self, line: LineRecord) -> LineRecord:
        raw = line.raw or ""
        suggestions = []

        if RuleFailure.SUSPICIOUS_CHARS_IN_NUMBER in line.rule_failures:
            suggestions.append(CorrectionSuggestion(
                type=SuggestionType.TEXT_CORRECTION,
                original=raw,
                suggested=correct_lookalikes(raw),
                confidence=self.options.text_correction_confidence,
                reason=TEXT_CORRECTION_REASON,
            ))

        if line.is_numeric and (line.confidence or 0.0) < self.options.low_numeric_confidence:
            suggestions.append(CorrectionSuggestion(
                type=SuggestionType.MANUAL_VERIFICATION,
                original=raw,
                suggested=line.normalized or "",
                confidence=self.options.manual_verification_confidence,
                reason=MANUAL_VERIFICATION_REASON,
            ))

        return replace(line, suggestions=tuple(suggestions))

    def process(self, lines: Sequence[LineRecord]) -> List[LineRecord]:
        suggested = [self.suggest_line(line) for line in lines]
        logger.debug(
            "Correction suggestions complete",
            lines=len(suggested),
            suggestions=sum(len(line.suggestions) for line in suggested),
        )
        return suggested
