"""Unit tests for processing statistics."""

from pagescope.domain.models import (
    ForgeryPageResult,
    ForgeryReport,
    PageResult,
    ProcessingStats,
)
from pagescope.domain.stats import compute_stats


def page(number: int, confidence: float, ms: int, error: str | None = None) -> PageResult:
    return PageResult(
        page_number=number,
        image_ref=None,
        analysis_text="text",
        confidence=confidence,
        processing_time_ms=ms,
        model_name="m",
        error=error,
    )


class TestComputeStats:
    """Tests for compute_stats."""

    def test_empty(self) -> None:
        assert compute_stats([]) == ProcessingStats()

    def test_content_results(self) -> None:
        stats = compute_stats([page(1, 0.9, 100), page(2, 0.0, 50, error="timeout")])

        assert stats.successful_pages == 1
        assert stats.failed_pages == 1
        assert stats.average_score == 0.45
        assert stats.total_processing_time_ms == 150

    def test_forgery_results_average_risk(self) -> None:
        report = ForgeryReport.degraded("x", "y", "z")
        results = [
            ForgeryPageResult(1, None, report, 20.0, 10, "m"),
            ForgeryPageResult(2, None, report, 100.0, 30, "m", error="failed"),
        ]
        stats = compute_stats(results)

        assert stats.average_score == 60.0
        assert stats.successful_pages == 1
        assert stats.failed_pages == 1
        assert stats.total_processing_time_ms == 40

    def test_recomputed_not_accumulated(self) -> None:
        results = [page(1, 0.9, 100)]
        assert compute_stats(results) == compute_stats(results)
