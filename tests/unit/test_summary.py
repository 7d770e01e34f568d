"""Unit tests for the fallback summary."""

from pagescope.domain.models import PageResult
from pagescope.domain.summary import build_fallback_summary


def page(number: int, confidence: float, error: str | None = None) -> PageResult:
    return PageResult(
        page_number=number,
        image_ref=None,
        analysis_text="text",
        confidence=confidence,
        processing_time_ms=0,
        model_name="m",
        error=error,
    )


class TestBuildFallbackSummary:
    """Tests for build_fallback_summary."""

    def test_contains_counts_and_confidence(self) -> None:
        pages = [page(1, 0.9), page(2, 0.9), page(3, 0.0, error="timeout")]
        summary = build_fallback_summary(pages, "invoice.pdf")

        assert 'Document Summary for "invoice.pdf"' in summary
        assert "This 3-page document" in summary
        assert "Total Pages: 3" in summary
        assert "2 pages successfully analyzed" in summary
        assert "60.0%" in summary

    def test_zero_pages(self) -> None:
        summary = build_fallback_summary([], "empty.pdf")
        assert "Total Pages: 0" in summary
        assert "0.0%" in summary

    def test_deterministic(self) -> None:
        pages = [page(1, 0.87)]
        assert build_fallback_summary(pages, "a.pdf") == build_fallback_summary(
            pages, "a.pdf"
        )
