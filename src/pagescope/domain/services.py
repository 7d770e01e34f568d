"""Domain services - orchestrate business logic."""

import logging
import random
import shutil
import tempfile
import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from ..ports.inference import InferencePort
from ..ports.rasterizer import RasterizerPort
from .errors import (
    ConversionError,
    DocumentAborted,
    InferenceError,
    SummaryGenerationFailed,
)
from .forgery_parser import parse_forgery_analysis
from .models import (
    AnalysisMode,
    ContentReport,
    Document,
    DocumentSummary,
    ForgeryDocumentReport,
    ForgeryPageResult,
    ForgeryReport,
    InferenceResponse,
    PageImage,
    PageResult,
    PipelineState,
    RasterPreset,
)
from .stats import compute_stats
from .summary import build_fallback_summary

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[PipelineState, int, int], None]

CONFIDENCE_MIN = 0.85
CONFIDENCE_SPAN = 0.14
FAILED_ANALYSIS_TEXT = "Failed to analyze this page"


class DocumentPipeline:
    """Runs rasterization and per-page inference for one document at a time.

    The pipeline holds only collaborators and configuration. Each call to
    analyze_content/analyze_forgery owns its scratch directory and results.
    """

    def __init__(
        self,
        rasterizer: RasterizerPort,
        inference: InferencePort,
        settings: "Settings",
        rng: random.Random | None = None,
    ) -> None:
        self.rasterizer = rasterizer
        self.inference = inference
        self.scratch_root = settings.paths.scratch
        self.content_preset = settings.raster.content.preset
        self.forgery_preset = settings.raster.forgery.preset
        self.rng = rng or random.Random(settings.pipeline.confidence_seed)

    def analyze_content(
        self,
        path: Path,
        file_name: str | None = None,
        on_progress: ProgressCallback | None = None,
        cancel: threading.Event | None = None,
    ) -> ContentReport:
        """Analyze every page for content and summarize the document.

        Raises ConversionError if the PDF cannot be rasterized at all and
        DocumentAborted if the run is cancelled.
        """
        run = _Run(AnalysisMode.CONTENT, path, file_name, on_progress, cancel)
        with _ScratchDir(self.scratch_root, run) as scratch:
            document = self._open_document(run)
            total = document.total_pages

            pages: list[PageResult] = []
            for page_number in range(1, total + 1):
                run.check_cancelled()
                run.report(PipelineState.CONTENT_ANALYSIS, page_number, total)
                pages.append(self._content_page(path, page_number, scratch))

            run.check_cancelled()
            run.report(PipelineState.SUMMARIZING, total, total)
            summary = self._summarize(pages, document.file_name)

            report = ContentReport(
                file_name=document.file_name,
                total_pages=document.total_pages,
                pages=pages,
                summary=summary,
                stats=compute_stats(pages),
            )
            run.report(PipelineState.COMPLETED, total, total)

        logger.info(
            f"Content analysis complete: {document.file_name} "
            f"({report.stats.successful_pages}/{document.total_pages} pages)"
        )
        return report

    def analyze_forgery(
        self,
        path: Path,
        file_name: str | None = None,
        on_progress: ProgressCallback | None = None,
        cancel: threading.Event | None = None,
    ) -> ForgeryDocumentReport:
        """Analyze every page for forgery indicators.

        Raises ConversionError if the PDF cannot be rasterized at all and
        DocumentAborted if the run is cancelled.
        """
        run = _Run(AnalysisMode.FORGERY, path, file_name, on_progress, cancel)
        with _ScratchDir(self.scratch_root, run) as scratch:
            document = self._open_document(run)
            total = document.total_pages

            results: list[ForgeryPageResult] = []
            for page_number in range(1, total + 1):
                run.check_cancelled()
                run.report(PipelineState.FORGERY_ANALYSIS, page_number, total)
                results.append(self._forgery_page(path, page_number, scratch))

            report = ForgeryDocumentReport(
                file_name=document.file_name,
                total_pages=document.total_pages,
                results=results,
                stats=compute_stats(results),
            )
            run.report(PipelineState.COMPLETED, total, total)

        logger.info(
            f"Forgery analysis complete: {document.file_name} "
            f"(average risk {report.stats.average_score:.1f}%)"
        )
        return report

    def _open_document(self, run: "_Run") -> Document:
        run.report(PipelineState.RASTERIZING, 0, 0)
        try:
            total_pages = self.rasterizer.page_count(run.path)
        except ConversionError:
            run.report(PipelineState.FAILED, 0, 0)
            raise
        except Exception as e:
            run.report(PipelineState.FAILED, 0, 0)
            raise ConversionError(f"Failed to rasterize {run.path.name}: {e}") from e

        document = Document(file_name=run.file_name, total_pages=total_pages)
        logger.info(f"{document.file_name} has {total_pages} pages ({run.mode.value})")
        return document

    def _render(
        self, path: Path, page_number: int, preset: RasterPreset, scratch: Path
    ) -> tuple[str, str]:
        """Render a page and return (data URL, base64 payload).

        The page image is released before returning.
        """
        image: PageImage = self.rasterizer.render_page(
            path, page_number, preset, scratch
        )
        try:
            image_b64 = image.read_base64()
        finally:
            image.release()
        return f"data:image/{image.image_format};base64,{image_b64}", image_b64

    def _content_page(self, path: Path, page_number: int, scratch: Path) -> PageResult:
        logger.info(f"Processing page {page_number}")
        start = time.perf_counter()
        try:
            image_ref, image_b64 = self._render(
                path, page_number, self.content_preset, scratch
            )
        except Exception as e:
            logger.error(f"Failed to render page {page_number}: {e}")
            return PageResult(
                page_number=page_number,
                image_ref=None,
                analysis_text=f"Error processing page: {e}",
                confidence=0.0,
                processing_time_ms=_elapsed_ms(start),
                model_name=self.inference.vision_model,
                error=str(e) or type(e).__name__,
            )

        try:
            response = self.inference.analyze_content(image_b64)
        except Exception as e:
            elapsed = _elapsed_ms(start)
            _log_page_failure(page_number, e)
            return PageResult(
                page_number=page_number,
                image_ref=image_ref,
                analysis_text=FAILED_ANALYSIS_TEXT,
                confidence=0.0,
                processing_time_ms=elapsed,
                model_name=self.inference.vision_model,
                error=str(e) or type(e).__name__,
            )

        elapsed = _elapsed_ms(start)
        logger.info(f"Page {page_number} processed successfully ({elapsed}ms)")
        return PageResult(
            page_number=page_number,
            image_ref=image_ref,
            analysis_text=response.text,
            confidence=self._confidence(),
            processing_time_ms=elapsed,
            model_name=response.model_name,
        )

    def _forgery_page(
        self, path: Path, page_number: int, scratch: Path
    ) -> ForgeryPageResult:
        logger.info(f"Analyzing page {page_number} for forgery")
        start = time.perf_counter()
        try:
            image_ref, image_b64 = self._render(
                path, page_number, self.forgery_preset, scratch
            )
        except Exception as e:
            logger.error(f"Failed to render page {page_number}: {e}")
            return _degraded_forgery(
                page_number,
                image_ref=None,
                report=ForgeryReport.degraded(
                    "Processing error",
                    f"Error processing page: {e}",
                    "Processing error",
                ),
                elapsed=_elapsed_ms(start),
                model_name=self.inference.vision_model,
                error=str(e) or type(e).__name__,
            )

        try:
            response = self.inference.analyze_forgery(image_b64)
        except Exception as e:
            elapsed = _elapsed_ms(start)
            _log_page_failure(page_number, e)
            return _degraded_forgery(
                page_number,
                image_ref=image_ref,
                report=ForgeryReport.degraded(
                    "Analysis failed",
                    "Failed to analyze this page for forgery indicators",
                    "Analysis failure",
                ),
                elapsed=elapsed,
                model_name=self.inference.vision_model,
                error=str(e) or type(e).__name__,
            )

        elapsed = _elapsed_ms(start)
        report = parse_forgery_analysis(
            response.text, resolution=self.forgery_preset.resolution_label
        )
        logger.info(
            f"Page {page_number} forgery analysis completed ({elapsed}ms) "
            f"- Risk Score: {report.risk_score:.0f}%"
        )
        return ForgeryPageResult(
            page_number=page_number,
            image_ref=image_ref,
            forgery_report=report,
            risk_score=report.risk_score,
            processing_time_ms=elapsed,
            model_name=response.model_name,
        )

    def _confidence(self) -> float:
        # Not derived from the model; an approximate quality signal only.
        return round(CONFIDENCE_MIN + self.rng.random() * CONFIDENCE_SPAN, 4)

    def _summarize(self, pages: list[PageResult], document_name: str) -> DocumentSummary:
        try:
            response = self._generate_summary(pages, document_name)
        except SummaryGenerationFailed as e:
            logger.warning(f"Using fallback summary: {e}")
            return DocumentSummary(
                content=build_fallback_summary(pages, document_name),
                success=False,
                fallback=True,
                error=str(e) or type(e).__name__,
            )

        return DocumentSummary(
            content=response.text,
            success=True,
            model_name=response.model_name,
            processing_time_ms=response.duration_ms,
        )

    def _generate_summary(
        self, pages: list[PageResult], document_name: str
    ) -> InferenceResponse:
        logger.info("Generating document summary")
        try:
            return self.inference.summarize_document(
                [p.analysis_text for p in pages], document_name
            )
        except InferenceError as e:
            raise SummaryGenerationFailed(str(e)) from e
        except Exception as e:
            logger.exception(f"Unexpected error during summarization: {e}")
            raise SummaryGenerationFailed(str(e) or type(e).__name__) from e


class _Run:
    """Per-document run state: identity, progress and cancellation."""

    def __init__(
        self,
        mode: AnalysisMode,
        path: Path,
        file_name: str | None,
        on_progress: ProgressCallback | None,
        cancel: threading.Event | None,
    ) -> None:
        self.mode = mode
        self.path = path
        self.file_name = file_name or path.name
        self.on_progress = on_progress
        self.cancel = cancel
        self.state = PipelineState.CREATED

    def report(self, state: PipelineState, page_number: int, total_pages: int) -> None:
        if state != self.state:
            logger.debug(f"{self.file_name}: {self.state.value} -> {state.value}")
        self.state = state
        if self.on_progress:
            self.on_progress(state, page_number, total_pages)

    def check_cancelled(self) -> None:
        if self.cancel is not None and self.cancel.is_set():
            raise DocumentAborted(f"Processing of {self.file_name} was cancelled")


class _ScratchDir:
    """Scoped scratch directory for one run.

    Removed on exit whatever the outcome. KeyboardInterrupt inside the scope
    surfaces as DocumentAborted.
    """

    def __init__(self, root: Path, run: _Run) -> None:
        self.root = root
        self.run = run
        self.path: Path | None = None

    def __enter__(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        self.path = Path(tempfile.mkdtemp(prefix=f"{self.run.mode.value}-", dir=self.root))
        return self.path

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self.path is not None:
            try:
                shutil.rmtree(self.path)
            except OSError as e:
                logger.warning(f"Failed to clean up scratch directory {self.path}: {e}")

        if exc_type is KeyboardInterrupt:
            raise DocumentAborted(
                f"Processing of {self.run.file_name} was interrupted"
            ) from exc
        return False


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _log_page_failure(page_number: int, error: Exception) -> None:
    if isinstance(error, InferenceError):
        logger.error(f"Failed to analyze page {page_number}: {error}")
    else:
        logger.exception(f"Unexpected error on page {page_number}: {error}")


def _degraded_forgery(
    page_number: int,
    image_ref: str | None,
    report: ForgeryReport,
    elapsed: int,
    model_name: str,
    error: str,
) -> ForgeryPageResult:
    return ForgeryPageResult(
        page_number=page_number,
        image_ref=image_ref,
        forgery_report=report,
        risk_score=100.0,
        processing_time_ms=elapsed,
        model_name=model_name,
        error=error,
    )
