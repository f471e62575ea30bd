"""
Unit tests for the label prediction stage.
"""
import re

import pytest

from ocr_validation.pipeline.labeling import DEFAULT_LABEL_RULES, LabelPredictor, LabelRule
from ocr_validation.pipeline.models import FieldLabel
from ocr_validation.pipeline.normalization import Normalizer


class TestLabelPredictor:
    """Tests for LabelPredictor stage."""

    @pytest.fixture
    def predictor(self) -> LabelPredictor:
        return LabelPredictor()

    @pytest.fixture
    def label(self, predictor, line_factory):
        normalizer = Normalizer()

        def _label(raw: str):
            return predictor.predict_line(normalizer.normalize_line(line_factory(raw)))

        return _label

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Balance Sheet", FieldLabel.HEADER),
            ("ASSETS", FieldLabel.SECTION_HEADER),
            ("Shareholders equity", FieldLabel.SUBSECTION),
            ("Retained earnings", FieldLabel.LINE_ITEM),
            ("Total assets", FieldLabel.TOTAL),
            ("December 31", FieldLabel.DATE),
        ],
    )
    def test_each_label(self, label, raw, expected):
        line = label(raw)

        assert line.predicted_label == expected
        assert line.label_confidence == 0.9

    def test_section_header_requires_exact_match(self, label):
        assert label("Assets held for sale").predicted_label != FieldLabel.SECTION_HEADER

    def test_first_match_wins(self, label):
        # Matches both header ("cash flow") and line_item ("cash")
        assert label("Cash flow statement").predicted_label == FieldLabel.HEADER
        # Matches both subsection and total
        assert label("Total current assets").predicted_label == FieldLabel.SUBSECTION

    def test_unknown(self, label):
        line = label("Goodwill")

        assert line.predicted_label == FieldLabel.UNKNOWN
        assert line.label_confidence == 0.5

    def test_blank_line(self, label):
        line = label("")

        assert line.predicted_label == FieldLabel.BLANK_LINE
        assert line.label_confidence == 1.0

    def test_custom_rule_order(self, line_factory):
        rules = [
            LabelRule(label=FieldLabel.TOTAL, pattern=re.compile(r"total", re.IGNORECASE)),
            *DEFAULT_LABEL_RULES,
        ]
        predictor = LabelPredictor(rules=rules)
        line = predictor.predict_line(Normalizer().normalize_line(line_factory("Total current assets")))

        assert line.predicted_label == FieldLabel.TOTAL

    def test_default_rule_order(self):
        assert [rule.label for rule in DEFAULT_LABEL_RULES] == [
            FieldLabel.HEADER,
            FieldLabel.SECTION_HEADER,
            FieldLabel.SUBSECTION,
            FieldLabel.LINE_ITEM,
            FieldLabel.TOTAL,
            FieldLabel.DATE,
        ]
