"""CLI entry point for pagescope."""

import logging
import sys
from pathlib import Path

import click

from .adapters.inference import create_inference_adapter
from .adapters.raster import PyMuPdfRasterizer
from .adapters.report import YamlReportWriter, default_report_path
from .cleanup import run_cleanup
from .config import Settings, load_settings
from .domain.errors import DocumentAborted, PagescopeError
from .domain.models import ContentReport, ForgeryDocumentReport, PipelineState
from .domain.services import DocumentPipeline

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_pipeline(settings: Settings) -> DocumentPipeline:
    """Create a DocumentPipeline with configured adapters."""
    return DocumentPipeline(
        rasterizer=PyMuPdfRasterizer(),
        inference=create_inference_adapter(settings.inference),
        settings=settings,
    )


def echo_progress(state: PipelineState, page_number: int, total_pages: int) -> None:
    if state in (PipelineState.CONTENT_ANALYSIS, PipelineState.FORGERY_ANALYSIS):
        click.echo(f"page {page_number}/{total_pages}...", err=True)
    elif state == PipelineState.SUMMARIZING:
        click.echo("summarizing...", err=True)


def resolve_output(
    file: Path, mode: str, output: Path | None, sidecar: bool
) -> Path | None:
    """Return where to write the report, if anywhere."""
    if output:
        return output
    if sidecar:
        return default_report_path(file, mode)
    return None


def write_report(
    report: ContentReport | ForgeryDocumentReport,
    path: Path | None,
    include_images: bool,
) -> None:
    if path is None:
        return
    written = YamlReportWriter().write(report, path, include_images=include_images)
    click.echo(f"report: {written}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """Pagescope - page-by-page PDF analysis with vision models."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None


def report_options(f):
    f = click.option(
        "--with-images", is_flag=True, help="Embed page images in the report"
    )(f)
    f = click.option(
        "--sidecar", is_flag=True, help="Write report next to the PDF"
    )(f)
    f = click.option(
        "-o", "--output", type=click.Path(path_type=Path), help="Report file path"
    )(f)
    return f


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@report_options
@click.pass_context
def analyze(
    ctx: click.Context,
    file: Path,
    output: Path | None,
    sidecar: bool,
    with_images: bool,
) -> None:
    """Analyze the content of every page and summarize the document."""
    settings = load_settings(ctx.obj["config_path"])
    pipeline = create_pipeline(settings)

    try:
        report = pipeline.analyze_content(file, on_progress=echo_progress)
    except DocumentAborted as e:
        click.echo(f"Aborted: {e}", err=True)
        sys.exit(130)
    except PagescopeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        pipeline.inference.close()

    for page in report.pages:
        status = f"error: {page.error}" if page.error else f"{page.confidence:.0%}"
        click.echo(f"page {page.page_number}: {status} ({page.processing_time_ms}ms)")

    click.echo(
        f"pages: {report.stats.successful_pages} ok, {report.stats.failed_pages} failed"
    )
    click.echo(f"average confidence: {report.stats.average_score:.1%}")
    if report.summary.fallback:
        click.echo(f"summary (fallback): {report.summary.error}")
    click.echo(report.summary.content)

    write_report(report, resolve_output(file, "content", output, sidecar), with_images)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@report_options
@click.pass_context
def forgery(
    ctx: click.Context,
    file: Path,
    output: Path | None,
    sidecar: bool,
    with_images: bool,
) -> None:
    """Analyze every page for signs of forgery."""
    settings = load_settings(ctx.obj["config_path"])
    pipeline = create_pipeline(settings)

    try:
        report = pipeline.analyze_forgery(file, on_progress=echo_progress)
    except DocumentAborted as e:
        click.echo(f"Aborted: {e}", err=True)
        sys.exit(130)
    except PagescopeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        pipeline.inference.close()

    for result in report.results:
        if result.error:
            click.echo(f"page {result.page_number}: error: {result.error}")
            continue
        factors = ", ".join(result.forgery_report.risk_factors) or "none"
        click.echo(
            f"page {result.page_number}: risk {result.risk_score:.0f}% "
            f"(risk factors: {factors})"
        )

    click.echo(
        f"pages: {report.stats.successful_pages} ok, {report.stats.failed_pages} failed"
    )
    click.echo(f"average risk: {report.stats.average_score:.1f}%")

    write_report(report, resolve_output(file, "forgery", output, sidecar), with_images)


@cli.command()
@click.pass_context
def health(ctx: click.Context) -> None:
    """Check the inference service."""
    settings = load_settings(ctx.obj["config_path"])
    adapter = create_inference_adapter(settings.inference)
    try:
        status = adapter.check_health()
    finally:
        adapter.close()

    if not status.reachable:
        click.echo(f"disconnected: {status.url} ({status.error})", err=True)
        sys.exit(1)

    click.echo(f"connected: {status.url}")
    click.echo(f"vision model present: {status.vision_model_present}")
    for name in status.models_available:
        click.echo(f"  {name}")


@cli.command()
@click.pass_context
def cleanup(ctx: click.Context) -> None:
    """Remove stale scratch directories."""
    settings = load_settings(ctx.obj["config_path"])
    removed = run_cleanup(settings)
    click.echo(f"Removed {removed} directories from scratch")


if __name__ == "__main__":
    cli()
