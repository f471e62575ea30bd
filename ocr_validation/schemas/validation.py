"""
Pydantic schemas for validation API endpoints.

Field names serialize in camelCase to match the JSON export format.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuggestionResponse(CamelModel):
    """Advisory correction candidate for a line."""

    type: str = Field(..., description="text_correction or manual_verification")
    original: str = Field(..., description="Raw OCR text")
    suggested: str = Field(..., description="Proposed value")
    confidence: float = Field(..., description="Suggestion confidence (0-1)")
    reason: str = Field(..., description="Why the suggestion was made")


class LineResultResponse(CamelModel):
    """A fully decided OCR line."""

    id: int = Field(..., description="Line id, unique within its page")
    page_number: int = Field(1, description="Page number (1-indexed)")
    raw: str = Field(..., description="Original OCR text")
    bbox: List[float] = Field(..., description="Bounding box [x0, y0, x1, y1] in pixels")
    confidence: float = Field(..., description="OCR recognition confidence (0-1)")
    normalized: Optional[str] = Field(None, description="Cleaned text")
    parsed_value: Optional[float] = Field(None, description="Extracted numeric value")
    value_type: Optional[str] = Field(None, description="empty, numeric or text")
    predicted_label: Optional[str] = Field(None, description="Predicted field label")
    label_confidence: Optional[float] = Field(None, description="Label confidence (0-1)")
    rule_failures: List[str] = Field(default_factory=list, description="Failed rule codes")
    rule_passed: Optional[bool] = Field(None, description="True when no rule failed")
    anomaly_score: Optional[float] = Field(None, description="Heuristic anomaly score (0-1)")
    is_anomaly: Optional[bool] = Field(None, description="Anomaly score above threshold")
    suggestions: List[SuggestionResponse] = Field(default_factory=list)
    status: Optional[str] = Field(None, description="Routing outcome")


class ScoreSummaryResponse(CamelModel):
    """Document score summary (numbers pre-formatted as strings)."""

    overall_score: str = Field(..., description="Overall score (0-100), one decimal")
    total_lines: int
    auto_accepted: int
    quick_review: int
    manual_review: int
    avg_confidence: str = Field(..., description="Average OCR confidence in percent")
    avg_anomaly_score: str
    total_rule_failures: int
    accuracy: str = Field(..., description="Auto-accepted share in percent")
    quality: str


class PageSummaryResponse(CamelModel):
    """Per-page score summary."""

    page_number: int
    line_count: int
    validation_score: ScoreSummaryResponse


class ValidationResponse(CamelModel):
    """Response model for document validation."""

    file_name: Optional[str] = Field(None, description="Original filename")
    processed_at: str = Field(..., description="ISO-8601 processing timestamp")
    validation_score: ScoreSummaryResponse
    results: List[LineResultResponse]
    pages: List[PageSummaryResponse] = Field(default_factory=list)
    rating: str = Field(..., description="excellent, good or needs review")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
    version: str
    tesseract: bool


class ErrorResponse(BaseModel):
    """Response model for API errors."""

    error: bool = True
    error_code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
