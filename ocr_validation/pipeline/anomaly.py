"""
Anomaly scoring stage.

A fixed weighted rule table: each condition that holds adds its weight, and
the sum is capped at 1.0.
"""

from dataclasses import dataclass, replace
from typing import Callable, List, Sequence, Tuple

import structlog

from ocr_validation.pipeline.models import LineRecord
from ocr_validation.pipeline.options import DEFAULT_OPTIONS, PipelineOptions

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AnomalyCondition:
    """One row of the scoring table."""
    name: str
    applies: Callable[[LineRecord], bool]
    weight: float


def build_condition_table(options: PipelineOptions) -> Tuple[AnomalyCondition, ...]:
    """Build the scoring table from policy options."""
    return (
        AnomalyCondition(
            name="low_confidence",
            applies=lambda line: (line.confidence or 0.0) < options.low_ocr_confidence,
            weight=options.weight_low_confidence,
        ),
        AnomalyCondition(
            name="rule_failure",
            applies=lambda line: bool(line.rule_failures),
            weight=options.weight_rule_failure,
        ),
        AnomalyCondition(
            name="low_label_confidence",
            applies=lambda line: (line.label_confidence or 0.0) < options.low_label_confidence,
            weight=options.weight_low_label_confidence,
        ),
        # May fire together with low_confidence
        AnomalyCondition(
            name="low_confidence_numeric",
            applies=lambda line: line.is_numeric
            and (line.confidence or 0.0) < options.low_numeric_confidence,
            weight=options.weight_low_numeric_confidence,
        ),
    )


class AnomalyScorer:
    """Stage 4: weighted heuristic anomaly score."""

    def __init__(self, options: PipelineOptions = DEFAULT_OPTIONS):
        self.options = options
        self.conditions = build_condition_table(options)

    def score(self, line: LineRecord) -> float:
        total = sum(c.weight for c in self.conditions if c.applies(line))
        return min(total, self.options.anomaly_cap)

    def score_line(self, line: LineRecord) -> LineRecord:
        if line.is_empty:
            return replace(line, anomaly_score=0.0, is_anomaly=False)

        score = self.score(line)
        return replace(
            line,
            anomaly_score=score,
            is_anomaly=score > self.options.anomaly_threshold,
        )

    def process(self, lines: Sequence[LineRecord]) -> List[LineRecord]:
        scored = [self.score_line(line) for line in lines]
        logger.debug(
            "Anomaly scoring complete",
            lines=len(scored),
            anomalies=sum(1 for line in scored if line.is_anomaly),
        )
        return scored
