"""Domain layer - core business logic."""

from .models import (
    AnalysisMode,
    ContentReport,
    Document,
    DocumentSummary,
    ForgeryDocumentReport,
    ForgeryPageResult,
    ForgeryReport,
    PageImage,
    PageResult,
    PipelineState,
    ProcessingStats,
    RasterPreset,
)

__all__ = [
    "AnalysisMode",
    "ContentReport",
    "Document",
    "DocumentSummary",
    "ForgeryDocumentReport",
    "ForgeryPageResult",
    "ForgeryReport",
    "PageImage",
    "PageResult",
    "PipelineState",
    "ProcessingStats",
    "RasterPreset",
]
