"""
Orchestrator for the line validation pipeline.

Threads a page's lines through the stages in a single pass:
Stage 1: Normalize (clean text, value type, parsed value)
Stage 2: Predict labels (ordered pattern dispatch)
Stage 3: Validate rules (failure codes)
Stage 4: Score anomalies (weighted rule table)
Stage 5: Suggest corrections (advisory only)
Stage 6: Route decisions (auto_accept / quick_review / manual_review)
Stage 7: Aggregate score (document summary)

Every stage is a pure function of its input sequence, so a pipeline instance
can be shared between documents.
"""

from typing import List, Optional, Sequence, Tuple

import structlog

from ocr_validation.pipeline.anomaly import AnomalyScorer
from ocr_validation.pipeline.corrections import CorrectionSuggester
from ocr_validation.pipeline.decisions import DecisionRouter
from ocr_validation.pipeline.labeling import LabelPredictor, LabelRule
from ocr_validation.pipeline.models import (
    DocumentResult,
    LineRecord,
    OCRToken,
    PageResult,
    ScoreSummary,
    lines_from_tokens,
)
from ocr_validation.pipeline.normalization import Normalizer
from ocr_validation.pipeline.options import DEFAULT_OPTIONS, PipelineOptions
from ocr_validation.pipeline.rules import RuleValidator
from ocr_validation.pipeline.scoring import ScoreAggregator

logger = structlog.get_logger(__name__)


class ValidationPipeline:
    """Stateless line validation pipeline."""

    def __init__(
        self,
        options: Optional[PipelineOptions] = None,
        label_rules: Optional[Sequence[LabelRule]] = None,
    ):
        self.options = options or DEFAULT_OPTIONS
        self.stages = (
            ("normalize", Normalizer()),
            ("predict_labels", LabelPredictor(label_rules, self.options)),
            ("validate_rules", RuleValidator(self.options)),
            ("detect_anomalies", AnomalyScorer(self.options)),
            ("suggest_corrections", CorrectionSuggester(self.options)),
            ("make_decisions", DecisionRouter(self.options)),
        )
        self.aggregator = ScoreAggregator(self.options)
        logger.debug("Pipeline configured", **self.options.to_dict())

    def run(self, lines: Sequence[LineRecord]) -> List[LineRecord]:
        """
        Run stages 1-6 over one page's lines.

        Args:
            lines: Freshly ingested line records.

        Returns:
            New line records with every stage's fields filled in.
        """
        results: List[LineRecord] = list(lines)
        for name, stage in self.stages:
            results = stage.process(results)
            logger.debug("Stage complete", stage=name, lines=len(results))
        return results

    def validate_page(self, tokens: Sequence[OCRToken], page_number: int = 1) -> PageResult:
        """Ingest one page of OCR tokens, run all stages and summarize."""
        decided = self.run(lines_from_tokens(list(tokens), page_number))
        return PageResult(
            page_number=page_number,
            lines=tuple(decided),
            summary=self.aggregator.summarize(decided),
        )

    def validate_document(
        self,
        pages: Sequence[Sequence[OCRToken]],
        file_name: str = "",
    ) -> DocumentResult:
        """
        Validate each page independently and score the whole document.

        The document summary is computed once over the concatenation of all
        pages' decided lines.
        """
        page_results: Tuple[PageResult, ...] = tuple(
            self.validate_page(tokens, page_number)
            for page_number, tokens in enumerate(pages, start=1)
        )
        return self.combine_pages(page_results, file_name)

    def combine_pages(
        self,
        page_results: Sequence[PageResult],
        file_name: str = "",
    ) -> DocumentResult:
        """Build a document result from already validated pages."""
        all_lines = [line for page in page_results for line in page.lines]
        summary = self.aggregator.summarize(all_lines)
        logger.info(
            "Document validated",
            file_name=file_name,
            pages=len(page_results),
            lines=len(all_lines),
            overall_score=round(summary.overall_score, 1),
        )
        return DocumentResult(
            file_name=file_name,
            pages=tuple(page_results),
            summary=summary,
            page_count=len(page_results),
        )


def run_pipeline(
    lines: Sequence[LineRecord],
    options: Optional[PipelineOptions] = None,
) -> List[LineRecord]:
    """Convenience entry: run stages 1-6 over a line sequence."""
    return ValidationPipeline(options=options).run(lines)


def calculate_validation_score(
    lines: Sequence[LineRecord],
    options: Optional[PipelineOptions] = None,
) -> ScoreSummary:
    """Convenience entry: summarize decided lines."""
    return ScoreAggregator(options or DEFAULT_OPTIONS).summarize(lines)
