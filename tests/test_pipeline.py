"""
End-to-end tests for the line validation pipeline.
"""
import pytest

from ocr_validation.pipeline import (
    FieldLabel,
    LineRecord,
    RoutingStatus,
    RuleFailure,
    ValidationPipeline,
    ValueType,
    calculate_validation_score,
    run_pipeline,
)


@pytest.fixture
def pipeline() -> ValidationPipeline:
    return ValidationPipeline()


class TestLineExamples:
    """Single lines through stages 1-6."""

    def test_total_with_lookalikes(self, pipeline, line_factory):
        [line] = pipeline.run([line_factory("Total l23,456", confidence=0.80)])

        assert line.normalized == "Total 123,456"
        assert line.parsed_value == 123456.0
        assert line.value_type == ValueType.NUMERIC
        assert line.predicted_label == FieldLabel.TOTAL
        assert RuleFailure.LOW_OCR_CONFIDENCE in line.rule_failures
        assert RuleFailure.SUSPICIOUS_CHARS_IN_NUMBER in line.rule_failures
        assert line.status == RoutingStatus.MANUAL_REVIEW
        assert [s.suggested for s in line.suggestions] == ["Tota1 123,456", "Total 123,456"]

    def test_blank_line(self, pipeline, line_factory):
        [line] = pipeline.run([line_factory("", confidence=0.0)])

        assert line.value_type == ValueType.EMPTY
        assert line.predicted_label == FieldLabel.BLANK_LINE
        assert line.rule_failures == ()
        assert line.status == RoutingStatus.AUTO_ACCEPT

    def test_clean_text_line(self, pipeline, line_factory):
        [line] = pipeline.run([line_factory("Cash", confidence=0.95)])

        assert line.value_type == ValueType.TEXT
        assert line.predicted_label == FieldLabel.LINE_ITEM
        assert line.rule_failures == ()
        assert line.rule_passed is True
        assert line.anomaly_score == 0.0
        assert line.status == RoutingStatus.AUTO_ACCEPT

    def test_comma_before_amount_stays_text(self, pipeline, line_factory):
        [line] = pipeline.run([line_factory("Accounts payable, net 1,234", confidence=0.95)])

        assert line.value_type == ValueType.TEXT
        assert line.predicted_label == FieldLabel.LINE_ITEM
        assert line.rule_failures == ()
        assert line.status == RoutingStatus.AUTO_ACCEPT

    def test_header_checked_before_line_item(self, pipeline, line_factory):
        [line] = pipeline.run([line_factory("Cash Flow Statement")])
        assert line.predicted_label == FieldLabel.HEADER


class TestPipelineInvariants:
    """Properties that hold for any input."""

    LINES = [
        ("Balance Sheet", 0.97),
        ("", 0.0),
        ("   ", 0.4),
        ("Total", 0.92),
        ("4O0", 0.91),
        ("$ 1,250", 0.70),
        ("Accounts Receivable", 0.60),
        ("December 31, 2023", 0.99),
    ]

    @pytest.fixture
    def lines(self, line_factory):
        return [line_factory(raw, conf, line_id=i) for i, (raw, conf) in enumerate(self.LINES, start=1)]

    def test_every_line_routed(self, pipeline, lines):
        decided = pipeline.run(lines)
        assert len(decided) == len(lines)
        assert [line.id for line in decided] == [line.id for line in lines]
        assert all(line.status is not None for line in decided)

    def test_rule_failures_always_manual(self, pipeline, lines):
        for line in pipeline.run(lines):
            if line.rule_failures:
                assert line.status == RoutingStatus.MANUAL_REVIEW

    def test_blank_lines_never_fail(self, pipeline, lines):
        for line in pipeline.run(lines):
            if line.value_type == ValueType.EMPTY:
                assert line.rule_failures == ()
                assert line.status == RoutingStatus.AUTO_ACCEPT

    def test_anomaly_scores_bounded(self, pipeline, lines):
        for line in pipeline.run(lines):
            assert 0.0 <= line.anomaly_score <= 1.0
            assert line.is_anomaly == (line.anomaly_score > 0.5)

    def test_deterministic(self, pipeline, lines):
        assert pipeline.run(lines) == pipeline.run(lines)

    def test_input_not_mutated(self, pipeline, lines):
        snapshot = list(lines)
        pipeline.run(lines)
        assert lines == snapshot
        assert all(line.status is None for line in lines)

    def test_raw_preserved(self, pipeline, lines):
        decided = pipeline.run(lines)
        assert [line.raw for line in decided] == [raw for raw, _ in self.LINES]

    def test_score_bounds(self, pipeline, lines):
        summary = calculate_validation_score(pipeline.run(lines))
        assert 0.0 <= summary.overall_score <= 100.0
        assert summary.auto_accepted + summary.quick_review + summary.manual_review == len(lines)

    def test_run_pipeline_helper(self, pipeline, lines):
        assert run_pipeline(lines) == pipeline.run(lines)


class TestDocumentValidation:
    """Multi-page documents."""

    def test_ids_restart_per_page(self, pipeline, sample_pages):
        result = pipeline.validate_document(sample_pages, file_name="statement.pdf")

        assert result.page_count == 2
        assert [line.id for line in result.pages[0].lines] == [1, 2, 3, 4]
        assert [line.id for line in result.pages[1].lines] == [1, 2]
        assert [line.page_number for line in result.lines] == [1, 1, 1, 1, 2, 2]

    def test_document_summary_spans_pages(self, pipeline, sample_pages):
        result = pipeline.validate_document(sample_pages, file_name="statement.pdf")

        assert result.file_name == "statement.pdf"
        assert result.summary.total_lines == 6
        assert result.summary.auto_accepted == 3
        assert result.summary.manual_review == 3
        assert result.pages[0].summary.total_lines == 4
        assert result.pages[1].summary.manual_review == 2

    def test_empty_page(self, pipeline):
        result = pipeline.validate_document([[]])

        assert result.lines == []
        assert result.summary.total_lines == 1
        assert result.summary.to_dict()["overallScore"] == "0.0"

    def test_validate_page_keeps_bbox(self, pipeline, token_factory):
        page = pipeline.validate_page([token_factory("Cash", bbox=(1.0, 2.0, 3.0, 4.0))], page_number=3)

        assert page.page_number == 3
        assert page.lines[0].bbox == (1.0, 2.0, 3.0, 4.0)
        assert page.lines[0].page_number == 3

    def test_line_record_is_frozen(self):
        line = LineRecord(id=1, raw="Cash")
        with pytest.raises(Exception):
            line.raw = "Inventory"
