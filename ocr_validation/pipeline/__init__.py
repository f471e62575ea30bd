"""
OCR line validation pipeline.

A pure computation library: feed it an in-memory sequence of line records
(or OCR tokens) and it returns routed lines plus a document score summary.
"""

from ocr_validation.pipeline.models import (
    CorrectionSuggestion,
    DocumentResult,
    FieldLabel,
    LineRecord,
    OCRToken,
    PageResult,
    RoutingStatus,
    RuleFailure,
    ScoreSummary,
    SuggestionType,
    ValueType,
    lines_from_tokens,
)
from ocr_validation.pipeline.options import PipelineOptions
from ocr_validation.pipeline.orchestrator import (
    ValidationPipeline,
    calculate_validation_score,
    run_pipeline,
)
from ocr_validation.pipeline.scoring import rate_score

__all__ = [
    "CorrectionSuggestion",
    "DocumentResult",
    "FieldLabel",
    "LineRecord",
    "OCRToken",
    "PageResult",
    "PipelineOptions",
    "RoutingStatus",
    "RuleFailure",
    "ScoreSummary",
    "SuggestionType",
    "ValidationPipeline",
    "ValueType",
    "calculate_validation_score",
    "lines_from_tokens",
    "rate_score",
    "run_pipeline",
]
