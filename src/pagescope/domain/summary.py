"""Fallback document summary used when AI summarization fails."""

from collections.abc import Sequence

from .models import PageResult


def build_fallback_summary(pages: Sequence[PageResult], document_name: str) -> str:
    """Build a deterministic summary from page counts and confidence only."""
    total = len(pages)
    successful = sum(1 for p in pages if not p.error)
    avg_confidence = sum(p.confidence for p in pages) / total if total else 0.0
    percent = f"{avg_confidence * 100:.1f}%"

    return f"""Document Summary for "{document_name}"

**Executive Summary**: This {total}-page document has been processed and analyzed. \
The average confidence score across all pages is {percent}.

**Document Statistics**:
- Total Pages: {total}
- Processing Status: {successful} pages successfully analyzed
- Average Confidence: {percent}

**Content Overview**: Each of the {total} pages has been individually analyzed \
for content, structure, and key information.

**Note**: This is a basic summary generated because AI summarization was not \
available. For detailed insights, review the individual page analyses."""
