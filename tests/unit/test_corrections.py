"""
Unit tests for the correction suggestion stage.
"""
import pytest

from ocr_validation.pipeline.corrections import CorrectionSuggester, correct_lookalikes
from ocr_validation.pipeline.models import LineRecord, RuleFailure, SuggestionType, ValueType


def numeric_line(raw: str, normalized: str, confidence: float, failures=()) -> LineRecord:
    return LineRecord(
        id=1,
        raw=raw,
        confidence=confidence,
        normalized=normalized,
        parsed_value=123456.0,
        value_type=ValueType.NUMERIC,
        rule_failures=tuple(failures),
    )


class TestCorrectionSuggester:
    """Tests for CorrectionSuggester stage."""

    @pytest.fixture
    def suggester(self) -> CorrectionSuggester:
        return CorrectionSuggester()

    def test_correct_lookalikes_replaces_every_occurrence(self):
        assert correct_lookalikes("Total l23,4O6 I") == "Tota1 123,406 1"

    def test_text_correction_for_suspicious_chars(self, suggester):
        line = suggester.suggest_line(numeric_line(
            "Cash 4O0", "Cash 400", 0.95, [RuleFailure.SUSPICIOUS_CHARS_IN_NUMBER],
        ))

        assert len(line.suggestions) == 1
        suggestion = line.suggestions[0]
        assert suggestion.type == SuggestionType.TEXT_CORRECTION
        assert suggestion.original == "Cash 4O0"
        assert suggestion.suggested == "Cash 400"
        assert suggestion.confidence == 0.85

    def test_manual_verification_for_low_confidence_numeric(self, suggester):
        line = suggester.suggest_line(numeric_line("123,456", "123,456", 0.84))

        assert [s.type for s in line.suggestions] == [SuggestionType.MANUAL_VERIFICATION]
        assert line.suggestions[0].suggested == "123,456"
        assert line.suggestions[0].confidence == 0.70

    def test_both_suggestions(self, suggester):
        line = suggester.suggest_line(numeric_line(
            "Total l23,456", "Total 123,456", 0.80, [RuleFailure.SUSPICIOUS_CHARS_IN_NUMBER],
        ))

        assert [s.type for s in line.suggestions] == [
            SuggestionType.TEXT_CORRECTION,
            SuggestionType.MANUAL_VERIFICATION,
        ]
        assert line.suggestions[0].suggested == "Tota1 123,456"

    def test_resuggesting_replaces_previous_suggestions(self, suggester):
        once = suggester.suggest_line(numeric_line(
            "Total l23,456", "Total 123,456", 0.80, [RuleFailure.SUSPICIOUS_CHARS_IN_NUMBER],
        ))
        twice = suggester.suggest_line(once)

        assert twice.suggestions == once.suggestions
        assert len(twice.suggestions) == 2

    def test_line_values_never_rewritten(self, suggester):
        original = numeric_line(
            "Total l23,456", "Total 123,456", 0.80, [RuleFailure.SUSPICIOUS_CHARS_IN_NUMBER],
        )
        line = suggester.suggest_line(original)

        assert line.normalized == original.normalized
        assert line.parsed_value == original.parsed_value
        assert line.raw == original.raw

    def test_text_line_has_no_suggestions(self, suggester):
        line = suggester.suggest_line(LineRecord(
            id=1, raw="Cash", confidence=0.5, normalized="Cash", value_type=ValueType.TEXT,
        ))
        assert line.suggestions == ()

    def test_suggestion_serialization(self, suggester):
        line = suggester.suggest_line(numeric_line("123,456", "123,456", 0.84))

        assert line.suggestions[0].to_dict() == {
            "type": "manual_verification",
            "original": "123,456",
            "suggested": "123,456",
            "confidence": 0.70,
            "reason": "Low confidence numeric value - manual verification recommended",
        }
