"""Shared test fixtures."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from pagescope.config import PathsConfig, PipelineConfig, Settings
from pagescope.domain.models import InferenceResponse, PageImage
from pagescope.ports.inference import InferencePort
from pagescope.ports.rasterizer import RasterizerPort

FORGERY_TEXT = """\
1. **Font Analysis:** Fonts look uniform across the page.
2. **Spacing Analysis:** Letter spacing is regular.
3. **Image Quality Analysis:** Clean scan with sharp edges.
4. **Structural Analysis:** Layout is consistent.
Authenticity Score: 90"""


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with scratch under tmp_path and a fixed confidence seed."""
    return Settings(
        paths=PathsConfig(scratch=tmp_path / "scratch"),
        pipeline=PipelineConfig(confidence_seed=42),
    )


@pytest.fixture
def pdf_path(tmp_path: Path) -> Path:
    """Placeholder PDF path; the mock rasterizer never reads it."""
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.4 test content")
    return path


@pytest.fixture
def mock_rasterizer() -> MagicMock:
    """Mock rasterizer port rendering tiny fake images into the scratch dir."""
    mock = MagicMock(spec=RasterizerPort)
    mock.page_count.return_value = 3

    def render_page(path, page_number, preset, output_dir):
        output_dir.mkdir(parents=True, exist_ok=True)
        out = output_dir / f"page-{page_number}.png"
        out.write_bytes(f"image {page_number}".encode())
        return PageImage(
            page_number=page_number, path=out, image_format=preset.image_format
        )

    mock.render_page.side_effect = render_page
    return mock


@pytest.fixture
def mock_inference() -> MagicMock:
    """Mock inference port."""
    mock = MagicMock(spec=InferencePort)
    mock.vision_model = "qwen2.5vl:7b"
    mock.text_model = "deepseek-r1:8b"
    mock.analyze_content.return_value = InferenceResponse(
        text="Quarterly revenue table.", model_name="qwen2.5vl:7b", duration_ms=10
    )
    mock.analyze_forgery.return_value = InferenceResponse(
        text=FORGERY_TEXT, model_name="qwen2.5vl:7b", duration_ms=10
    )
    mock.summarize_document.return_value = InferenceResponse(
        text="A financial report.", model_name="deepseek-r1:8b", duration_ms=20
    )
    return mock


@pytest.fixture
def forgery_text() -> str:
    """Well-formed forensic analysis of an authentic page."""
    return FORGERY_TEXT
