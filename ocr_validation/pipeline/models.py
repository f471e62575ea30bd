"""
Record types for the line validation pipeline.

Every stage maps a sequence of LineRecord to a new sequence. Records are
frozen: a stage fills in its own fields with dataclasses.replace and never
touches fields owned by an earlier stage.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ValueType(str, Enum):
    """Kind of value a normalized line carries."""
    EMPTY = "empty"
    NUMERIC = "numeric"
    TEXT = "text"


class FieldLabel(str, Enum):
    """Semantic field label assigned by the label predictor."""
    BLANK_LINE = "blank_line"
    HEADER = "header"
    SECTION_HEADER = "section_header"
    SUBSECTION = "subsection"
    LINE_ITEM = "line_item"
    TOTAL = "total"
    DATE = "date"
    UNKNOWN = "unknown"


class RuleFailure(str, Enum):
    """Structural/consistency check codes."""
    NUMERIC_PARSE_FAILED = "numeric_parse_failed"
    LOW_OCR_CONFIDENCE = "low_ocr_confidence"
    SUSPICIOUS_CHARS_IN_NUMBER = "suspicious_chars_in_number"
    TOTAL_LINE_MISSING_VALUE = "total_line_missing_value"


class RoutingStatus(str, Enum):
    """Terminal routing outcome for a line."""
    AUTO_ACCEPT = "auto_accept"
    QUICK_REVIEW = "quick_review"
    MANUAL_REVIEW = "manual_review"


class SuggestionType(str, Enum):
    """Kinds of correction candidates."""
    TEXT_CORRECTION = "text_correction"
    MANUAL_VERIFICATION = "manual_verification"


BBox = Tuple[float, float, float, float]


@dataclass(frozen=True)
class OCRToken:
    """A recognized token as returned by the OCR engine."""
    text: str
    bbox: BBox
    confidence: float


@dataclass(frozen=True)
class CorrectionSuggestion:
    """Advisory fix for a line. Never applied automatically."""
    type: SuggestionType
    original: str
    suggested: str
    confidence: float
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "original": self.original,
            "suggested": self.suggested,
            "confidence": self.confidence,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class LineRecord:
    """One OCR line carried through every pipeline stage."""
    # Ingestion
    id: int
    raw: str = ""
    bbox: BBox = (0.0, 0.0, 0.0, 0.0)
    confidence: float = 0.0
    page_number: int = 1
    # Normalizer
    normalized: Optional[str] = None
    parsed_value: Optional[float] = None
    value_type: Optional[ValueType] = None
    # Label predictor
    predicted_label: Optional[FieldLabel] = None
    label_confidence: Optional[float] = None
    # Rule validator
    rule_failures: Tuple[RuleFailure, ...] = ()
    rule_passed: Optional[bool] = None
    # Anomaly scorer
    anomaly_score: Optional[float] = None
    is_anomaly: Optional[bool] = None
    # Correction suggester
    suggestions: Tuple[CorrectionSuggestion, ...] = ()
    # Decision router
    status: Optional[RoutingStatus] = None

    @property
    def is_empty(self) -> bool:
        return self.value_type == ValueType.EMPTY

    @property
    def is_numeric(self) -> bool:
        return self.value_type == ValueType.NUMERIC

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys of the export format."""
        return {
            "id": self.id,
            "pageNumber": self.page_number,
            "raw": self.raw,
            "bbox": list(self.bbox),
            "confidence": self.confidence,
            "normalized": self.normalized,
            "parsedValue": self.parsed_value,
            "valueType": _enum_value(self.value_type),
            "predictedLabel": _enum_value(self.predicted_label),
            "labelConfidence": self.label_confidence,
            "ruleFailures": [f.value for f in self.rule_failures],
            "rulePassed": self.rule_passed,
            "anomalyScore": self.anomaly_score,
            "isAnomaly": self.is_anomaly,
            "suggestions": [s.to_dict() for s in self.suggestions],
            "status": _enum_value(self.status),
        }


def _enum_value(member: Optional[Enum]) -> Optional[str]:
    return member.value if member is not None else None


@dataclass(frozen=True)
class ScoreSummary:
    """Document-level quality summary. Built once from decided lines."""
    overall_score: float
    total_lines: int
    auto_accepted: int
    quick_review: int
    manual_review: int
    avg_confidence: float
    avg_anomaly_score: float
    total_rule_failures: int
    accuracy: float
    quality: float

    def to_dict(self) -> Dict[str, Any]:
        """Render the presentation contract (formatted number strings)."""
        return {
            "overallScore": f"{self.overall_score:.1f}",
            "totalLines": self.total_lines,
            "autoAccepted": self.auto_accepted,
            "quickReview": self.quick_review,
            "manualReview": self.manual_review,
            "avgConfidence": f"{self.avg_confidence * 100:.1f}",
            "avgAnomalyScore": f"{self.avg_anomaly_score:.2f}",
            "totalRuleFailures": self.total_rule_failures,
            "accuracy": f"{self.accuracy:.1f}",
            "quality": f"{self.quality:.1f}",
        }


@dataclass(frozen=True)
class PageResult:
    """Decided lines and summary for a single page."""
    page_number: int
    lines: Tuple[LineRecord, ...]
    summary: ScoreSummary


@dataclass(frozen=True)
class DocumentResult:
    """Per-page results plus a summary over all pages' lines."""
    file_name: str
    pages: Tuple[PageResult, ...]
    summary: ScoreSummary
    page_count: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def lines(self) -> List[LineRecord]:
        return [line for page in self.pages for line in page.lines]


def lines_from_tokens(tokens: List[OCRToken], page_number: int = 1) -> List[LineRecord]:
    """Map OCR tokens 1:1 to fresh line records, ids starting at 1."""
    return [
        LineRecord(
            id=index,
            raw=token.text if token.text is not None else "",
            bbox=tuple(float(v) for v in token.bbox),
            confidence=token.confidence if token.confidence is not None else 0.0,
            page_number=page_number,
        )
        for index, token in enumerate(tokens, start=1)
    ]
