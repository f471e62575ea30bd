"""
Policy constants for the validation pipeline.

Defaults reproduce the reference scoring behavior exactly; changing any of
them changes routing and document scores.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List

from ocr_validation.exceptions import ValidationError

# Fields compared against confidences or scores in [0, 1]
UNIT_INTERVAL_FIELDS = (
    "low_ocr_confidence",
    "label_fallback_confidence",
    "low_label_confidence",
    "low_numeric_confidence",
    "anomaly_cap",
    "anomaly_threshold",
    "text_correction_confidence",
    "manual_verification_confidence",
)


@dataclass(frozen=True)
class PipelineOptions:
    """Thresholds and weights shared by the pipeline stages."""
    # Rule validation
    low_ocr_confidence: float = 0.90
    suspicious_chars: str = "OlI"
    # Label prediction
    label_fallback_confidence: float = 0.5
    # Anomaly scoring
    low_label_confidence: float = 0.7
    low_numeric_confidence: float = 0.85
    weight_low_confidence: float = 0.3
    weight_rule_failure: float = 0.4
    weight_low_label_confidence: float = 0.2
    weight_low_numeric_confidence: float = 0.2
    anomaly_cap: float = 1.0
    anomaly_threshold: float = 0.5
    # Correction suggestions
    text_correction_confidence: float = 0.85
    manual_verification_confidence: float = 0.70
    # Document score
    confidence_weight: float = 100.0
    anomaly_penalty_weight: float = 20.0
    rule_failure_penalty_weight: float = 30.0
    auto_accept_bonus_weight: float = 10.0

    def __post_init__(self):
        errors: List[str] = []
        for name in UNIT_INTERVAL_FIELDS:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                errors.append(f"{name} must be within [0, 1], got {value}")
        for f in fields(self):
            if f.name.endswith("weight") or f.name.startswith("weight_"):
                value = getattr(self, f.name)
                if value < 0:
                    errors.append(f"{f.name} must not be negative, got {value}")
        if errors:
            raise ValidationError("Invalid pipeline options", errors=errors)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_OPTIONS = PipelineOptions()
