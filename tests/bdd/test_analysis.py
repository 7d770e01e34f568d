"""BDD step definitions for the document pipeline."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_bdd import given, parsers, scenario, then, when

from pagescope.domain.errors import ConversionError, InferenceTimeout, ModelNotFound
from pagescope.domain.models import (
    ContentReport,
    ForgeryDocumentReport,
    InferenceResponse,
)
from pagescope.domain.services import DocumentPipeline


@scenario("features/pipeline.feature", "One page times out during content analysis")
def test_page_timeout() -> None:
    pass


@scenario(
    "features/pipeline.feature", "Summary falls back when the text model is missing"
)
def test_summary_fallback() -> None:
    pass


@scenario("features/pipeline.feature", "Forgery analysis flags a suspicious page")
def test_forgery_suspicious_page() -> None:
    pass


@scenario("features/pipeline.feature", "Unreadable PDF aborts the run")
def test_unreadable_pdf() -> None:
    pass


@pytest.fixture
def context(tmp_path: Path) -> dict:
    """Shared test context with temp directory."""
    return {"tmp_path": tmp_path}


@given("a document pipeline with mock adapters")
def setup_pipeline(
    context: dict,
    mock_rasterizer: MagicMock,
    mock_inference: MagicMock,
    settings,
) -> None:
    context["rasterizer"] = mock_rasterizer
    context["inference"] = mock_inference
    context["settings"] = settings
    context["pipeline"] = DocumentPipeline(
        rasterizer=mock_rasterizer, inference=mock_inference, settings=settings
    )


@given(parsers.parse('a {pages:d}-page PDF "{name}"'))
def given_pdf(context: dict, pages: int, name: str) -> None:
    file_path = context["tmp_path"] / name
    file_path.write_bytes(b"%PDF-1.4 test content")
    context["file_path"] = file_path
    context["rasterizer"].page_count.return_value = pages


@given(parsers.parse("the vision model times out on page {page:d}"))
def vision_times_out(context: dict, page: int) -> None:
    ok = context["inference"].analyze_content.return_value
    calls = {"n": 0}

    def analyze(image_b64, prompt=None):
        calls["n"] += 1
        if calls["n"] == page:
            raise InferenceTimeout("Ollama request timed out after 120s.")
        return ok

    context["inference"].analyze_content.side_effect = analyze


@given("the text model is not installed")
def text_model_missing(context: dict) -> None:
    context["inference"].summarize_document.side_effect = ModelNotFound(
        "deepseek-r1:8b"
    )


@given(parsers.parse("the vision model reports tampering on page {page:d}"))
def vision_reports_tampering(context: dict, page: int) -> None:
    ok = context["inference"].analyze_forgery.return_value
    suspicious = InferenceResponse(
        text="Signs of tampering around the signature. Authenticity Score: 15",
        model_name="qwen2.5vl:7b",
    )
    responses = [ok] * 3
    responses[page - 1] = suspicious
    context["inference"].analyze_forgery.side_effect = responses


@given("the PDF cannot be rasterized")
def pdf_unreadable(context: dict) -> None:
    context["rasterizer"].page_count.side_effect = ConversionError(
        "Not a PDF document: broken.pdf"
    )


@when("I analyze the document content")
def analyze_content(context: dict) -> None:
    context["report"] = context["pipeline"].analyze_content(context["file_path"])


@when("I analyze the document for forgery")
def analyze_forgery(context: dict) -> None:
    context["report"] = context["pipeline"].analyze_forgery(context["file_path"])


@when("I try to analyze the document content")
def try_analyze_content(context: dict) -> None:
    try:
        context["pipeline"].analyze_content(context["file_path"])
    except ConversionError as e:
        context["error"] = e


@then(parsers.parse("the report should have {count:d} pages"))
def report_has_pages(context: dict, count: int) -> None:
    report: ContentReport = context["report"]
    assert len(report.pages) == count
    assert report.success


@then(parsers.parse("page {page:d} should have failed with confidence 0"))
def page_failed(context: dict, page: int) -> None:
    result = context["report"].pages[page - 1]
    assert result.error is not None
    assert result.confidence == 0.0


@then(
    parsers.parse(
        "the stats should show {ok:d} successful and {failed:d} failed pages"
    )
)
def stats_counts(context: dict, ok: int, failed: int) -> None:
    stats = context["report"].stats
    assert stats.successful_pages == ok
    assert stats.failed_pages == failed


@then("the summary should come from the text model")
def summary_from_model(context: dict) -> None:
    summary = context["report"].summary
    assert summary.success is True
    assert summary.fallback is False
    assert summary.model_name == "deepseek-r1:8b"


@then(parsers.parse('the summary should be a fallback mentioning "{text}"'))
def summary_fallback(context: dict, text: str) -> None:
    summary = context["report"].summary
    assert summary.fallback is True
    assert summary.success is False
    assert text in summary.content


@then(parsers.parse("page {page:d} should have risk score {score:d}"))
def page_risk(context: dict, page: int, score: int) -> None:
    report: ForgeryDocumentReport = context["report"]
    assert report.results[page - 1].risk_score == score


@then(parsers.parse('page {page:d} should list risk factor "{factor}"'))
def page_risk_factor(context: dict, page: int, factor: str) -> None:
    report: ForgeryDocumentReport = context["report"]
    assert factor in report.results[page - 1].forgery_report.risk_factors


@then(parsers.parse("the average risk should be {score:d}"))
def average_risk(context: dict, score: int) -> None:
    assert context["report"].stats.average_score == pytest.approx(score)


@then("the run should fail with a conversion error")
def run_failed(context: dict) -> None:
    assert isinstance(context.get("error"), ConversionError)


@then("no scratch files should remain")
def no_scratch(context: dict) -> None:
    assert list(context["settings"].paths.scratch.iterdir()) == []
