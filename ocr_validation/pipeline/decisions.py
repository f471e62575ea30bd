"""
Decision routing stage.

Deterministic decision table evaluated in priority order. Rule failures
always dominate the anomaly score.
"""

from dataclasses import replace
from typing import List, Sequence

import structlog

from ocr_validation.pipeline.models import LineRecord, RoutingStatus
from ocr_validation.pipeline.options import DEFAULT_OPTIONS, PipelineOptions

logger = structlog.get_logger(__name__)


class DecisionRouter:
    """Stage 6: assign the terminal routing status."""

    def __init__(self, options: PipelineOptions = DEFAULT_OPTIONS):
        self.options = options

    def route(self, line: LineRecord) -> RoutingStatus:
        if line.is_empty:
            return RoutingStatus.AUTO_ACCEPT
        if line.rule_failures:
            return RoutingStatus.MANUAL_REVIEW
        if (line.anomaly_score or 0.0) > self.options.anomaly_threshold:
            return RoutingStatus.QUICK_REVIEW
        if line.is_numeric and (line.confidence or 0.0) < self.options.low_numeric_confidence:
            return RoutingStatus.QUICK_REVIEW
        return RoutingStatus.AUTO_ACCEPT

    def process(self, lines: Sequence[LineRecord]) -> List[LineRecord]:
        decided = [replace(line, status=self.route(line)) for line in lines]
        logger.debug(
            "Routing complete",
            lines=len(decided),
            manual_review=sum(1 for line in decided if line.status == RoutingStatus.MANUAL_REVIEW),
        )
        return decided
