"""Aggregate statistics over per-page results."""

from collections.abc import Sequence

from .models import ForgeryPageResult, PageResult, ProcessingStats


def compute_stats(results: Sequence[PageResult | ForgeryPageResult]) -> ProcessingStats:
    """Compute stats fresh from a completed result set.

    Failed pages count toward the average at their degraded score.
    An empty result set yields all zeros.
    """
    if not results:
        return ProcessingStats()

    failed = sum(1 for r in results if r.error)
    return ProcessingStats(
        successful_pages=len(results) - failed,
        failed_pages=failed,
        average_score=sum(r.score for r in results) / len(results),
        total_processing_time_ms=sum(r.processing_time_ms for r in results),
    )
