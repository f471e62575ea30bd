"""
Label prediction stage.

Assigns a semantic field label to each normalized line by testing an ordered
list of patterns. The first matching rule wins, so broad statement titles are
listed before the narrower line-item vocabulary.
"""

import re
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

import structlog

from ocr_validation.pipeline.models import FieldLabel, LineRecord
from ocr_validation.pipeline.options import DEFAULT_OPTIONS, PipelineOptions

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LabelRule:
    """A single (label, pattern, confidence) entry in the dispatch table."""
    label: FieldLabel
    pattern: re.Pattern
    confidence: float = 0.9

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _rule(label: FieldLabel, pattern: str) -> LabelRule:
    return LabelRule(label=label, pattern=re.compile(pattern, re.IGNORECASE))


# Evaluation order is significant
DEFAULT_LABEL_RULES = (
    _rule(FieldLabel.HEADER, r"balance\s+sheet|income\s+statement|cash\s+flow"),
    _rule(FieldLabel.SECTION_HEADER, r"^(assets|liabilities|equity|revenue|expenses)$"),
    _rule(FieldLabel.SUBSECTION, r"current\s+(assets|liabilities)|shareholders"),
    _rule(FieldLabel.LINE_ITEM, r"cash|receivable|payable|inventory|stock|earnings"),
    _rule(FieldLabel.TOTAL, r"total"),
    _rule(FieldLabel.DATE, r"\d{4}|december|january"),
)


class LabelPredictor:
    """Stage 2: first-match-wins field labeling."""

    def __init__(
        self,
        rules: Optional[Sequence[LabelRule]] = None,
        options: PipelineOptions = DEFAULT_OPTIONS,
    ):
        self.rules = tuple(rules) if rules is not None else DEFAULT_LABEL_RULES
        self.options = options

    def predict_line(self, line: LineRecord) -> LineRecord:
        if line.is_empty:
            return replace(line, predicted_label=FieldLabel.BLANK_LINE, label_confidence=1.0)

        text = line.normalized or ""
        for rule in self.rules:
            if rule.matches(text):
                return replace(
                    line,
                    predicted_label=rule.label,
                    label_confidence=rule.confidence,
                )

        return replace(
            line,
            predicted_label=FieldLabel.UNKNOWN,
            label_confidence=self.options.label_fallback_confidence,
        )

    def process(self, lines: Sequence[LineRecord]) -> List[LineRecord]:
        labeled = [self.predict_line(line) for line in lines]
        logger.debug(
            "Label prediction complete",
            lines=len(labeled),
            unknown=sum(1 for line in labeled if line.predicted_label == FieldLabel.UNKNOWN),
        )
        return labeled
