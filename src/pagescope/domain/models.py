"""Domain models."""

import base64
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

AUTHENTICITY_DEFAULT = 75.0
FALLBACK_RISK_SCORE = 50.0


class AnalysisMode(str, Enum):
    """Per-page analysis performed by the pipeline."""

    CONTENT = "content"
    FORGERY = "forgery"


class PipelineState(str, Enum):
    """Lifecycle of one document processing run."""

    CREATED = "created"
    RASTERIZING = "rasterizing"
    CONTENT_ANALYSIS = "content_analysis"
    FORGERY_ANALYSIS = "forgery_analysis"
    SUMMARIZING = "summarizing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class Document:
    """Identity of a document for the duration of one run."""

    file_name: str
    total_pages: int


@dataclass(frozen=True)
class RasterPreset:
    """Rendering parameters for one analysis mode."""

    density: int = 200  # DPI
    max_width: int = 1200
    max_height: int = 1600
    image_format: str = "png"

    @property
    def resolution_label(self) -> str:
        return f"{self.density} DPI"


@dataclass
class PageImage:
    """A single rendered page, backed by a scratch file."""

    page_number: int
    path: Path
    image_format: str
    width: int = 0
    height: int = 0

    def read_base64(self) -> str:
        return base64.b64encode(self.path.read_bytes()).decode("ascii")

    def data_url(self) -> str:
        return f"data:image/{self.image_format};base64,{self.read_base64()}"

    def release(self) -> None:
        """Delete the backing file."""
        self.path.unlink(missing_ok=True)


@dataclass
class InferenceResponse:
    """Raw text returned by the inference service."""

    text: str
    model_name: str
    duration_ms: int = 0


@dataclass
class HealthStatus:
    """Inference service reachability."""

    reachable: bool
    url: str
    models_available: list[str] = field(default_factory=list)
    vision_model_present: bool = False
    error: str | None = None


@dataclass
class FontAnalysis:
    font_consistency: float = 0.0
    suspicious_characters: list[str] = field(default_factory=list)
    font_mixing_detected: bool = False
    digital_font_indicators: list[str] = field(default_factory=list)
    analysis: str = ""


@dataclass
class SpacingAnalysis:
    letter_spacing: float = 0.0
    word_spacing: float = 0.0
    line_spacing: float = 0.0
    irregularities: list[str] = field(default_factory=list)
    suspicious_patterns: list[str] = field(default_factory=list)
    analysis: str = ""


@dataclass
class ImageQualityAnalysis:
    resolution: str = "Unknown"
    compression_artifacts: bool = False
    digital_manipulation_signs: list[str] = field(default_factory=list)
    pixelation_issues: bool = False
    analysis: str = ""


@dataclass
class StructuralAnalysis:
    alignment_issues: list[str] = field(default_factory=list)
    margin_inconsistencies: bool = False
    layout_anomalies: list[str] = field(default_factory=list)
    watermark_analysis: str = "Unknown"
    analysis: str = ""


def derive_risk_score(authenticity_score: float | None) -> float:
    """Risk is the complement of authenticity, clamped to [0, 100]."""
    if authenticity_score is None:
        return FALLBACK_RISK_SCORE
    return min(100.0, max(0.0, 100.0 - authenticity_score))


@dataclass
class ForgeryReport:
    """Structured forensic analysis of one page."""

    font_analysis: FontAnalysis
    spacing_analysis: SpacingAnalysis
    image_quality_analysis: ImageQualityAnalysis
    structural_analysis: StructuralAnalysis
    overall_assessment: str
    risk_factors: list[str] = field(default_factory=list)
    authenticity_score: float = AUTHENTICITY_DEFAULT

    @property
    def risk_score(self) -> float:
        return derive_risk_score(self.authenticity_score)

    @classmethod
    def degraded(
        cls, reason: str, assessment: str, risk_factor: str
    ) -> "ForgeryReport":
        """Worst-case report used when a page could not be analyzed."""
        return cls(
            font_analysis=FontAnalysis(analysis=reason),
            spacing_analysis=SpacingAnalysis(analysis=reason),
            image_quality_analysis=ImageQualityAnalysis(analysis=reason),
            structural_analysis=StructuralAnalysis(analysis=reason),
            overall_assessment=assessment,
            risk_factors=[risk_factor],
            authenticity_score=0.0,
        )


@dataclass
class PageResult:
    """Content analysis of one page."""

    page_number: int
    image_ref: str | None
    analysis_text: str
    confidence: float
    processing_time_ms: int
    model_name: str
    error: str | None = None

    @property
    def score(self) -> float:
        return self.confidence


@dataclass
class ForgeryPageResult:
    """Forgery analysis of one page."""

    page_number: int
    image_ref: str | None
    forgery_report: ForgeryReport
    risk_score: float
    processing_time_ms: int
    model_name: str
    error: str | None = None

    @property
    def score(self) -> float:
        return self.risk_score


@dataclass(frozen=True)
class DocumentSummary:
    """Narrative summary of a whole document."""

    content: str
    success: bool
    fallback: bool = False
    model_name: str | None = None
    processing_time_ms: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class ProcessingStats:
    """Aggregate statistics over a result set."""

    successful_pages: int = 0
    failed_pages: int = 0
    average_score: float = 0.0  # confidence (content) or risk score (forgery)
    total_processing_time_ms: int = 0


@dataclass
class ContentReport:
    """Result of content analysis for a document."""

    file_name: str
    total_pages: int
    pages: list[PageResult]
    summary: DocumentSummary
    stats: ProcessingStats

    @property
    def success(self) -> bool:
        return True


@dataclass
class ForgeryDocumentReport:
    """Result of forgery analysis for a document."""

    file_name: str
    total_pages: int
    results: list[ForgeryPageResult]
    stats: ProcessingStats

    @property
    def success(self) -> bool:
        return True
