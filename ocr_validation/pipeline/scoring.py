"""
Document score aggregation.

Reduces a fully decided line sequence to a single quality score plus routing
counts. Blank lines are left out of every average and of the denominator,
which floors at 1 so an all-blank page still produces a summary.
"""

from typing import Sequence

import structlog

from ocr_validation.pipeline.models import LineRecord, RoutingStatus, ScoreSummary
from ocr_validation.pipeline.options import DEFAULT_OPTIONS, PipelineOptions

logger = structlog.get_logger(__name__)


# Qualitative rating thresholds on overall score
EXCELLENT_THRESHOLD = 90.0
GOOD_THRESHOLD = 75.0


def rate_score(score: float) -> str:
    """Map an overall score (0-100) to its qualitative label."""
    score = float(score)
    if score >= EXCELLENT_THRESHOLD:
        return "excellent"
    if score >= GOOD_THRESHOLD:
        return "good"
    return "needs review"


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


class ScoreAggregator:
    """Stage 7: compute the document score summary."""

    def __init__(self, options: PipelineOptions = DEFAULT_OPTIONS):
        self.options = options

    def summarize(self, lines: Sequence[LineRecord]) -> ScoreSummary:
        non_empty = [line for line in lines if not line.is_empty]
        total_lines = len(non_empty) or 1

        # Status counts cover every decided line, blank lines included
        auto_accepted = sum(1 for line in lines if line.status == RoutingStatus.AUTO_ACCEPT)
        quick_review = sum(1 for line in lines if line.status == RoutingStatus.QUICK_REVIEW)
        manual_review = sum(1 for line in lines if line.status == RoutingStatus.MANUAL_REVIEW)

        avg_confidence = sum(line.confidence or 0.0 for line in non_empty) / total_lines
        avg_anomaly_score = sum(line.anomaly_score or 0.0 for line in non_empty) / total_lines
        total_rule_failures = sum(len(line.rule_failures) for line in non_empty)

        opts = self.options
        overall_score = clamp(
            avg_confidence * opts.confidence_weight
            - avg_anomaly_score * opts.anomaly_penalty_weight
            - (total_rule_failures / total_lines) * opts.rule_failure_penalty_weight
            + (auto_accepted / total_lines) * opts.auto_accept_bonus_weight
        )

        summary = ScoreSummary(
            overall_score=overall_score,
            total_lines=total_lines,
            auto_accepted=auto_accepted,
            quick_review=quick_review,
            manual_review=manual_review,
            avg_confidence=avg_confidence,
            avg_anomaly_score=avg_anomaly_score,
            total_rule_failures=total_rule_failures,
            accuracy=(auto_accepted / total_lines) * 100,
            quality=avg_confidence * 100,
        )
        logger.info(
            "Document score computed",
            overall_score=round(overall_score, 1),
            rating=rate_score(overall_score),
            total_lines=total_lines,
            manual_review=manual_review,
        )
        return summary
