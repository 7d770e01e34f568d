"""Rasterizer adapter using PyMuPDF."""

import logging
from pathlib import Path

import fitz  # PyMuPDF

from ...domain.errors import ConversionError
from ...domain.models import PageImage, RasterPreset
from ...ports.rasterizer import RasterizerPort

logger = logging.getLogger(__name__)

EXTENSIONS = {"png": "png", "jpeg": "jpg"}


def fit_zoom(width: float, height: float, preset: RasterPreset) -> float:
    """Zoom factor for the preset DPI, reduced to fit within max dimensions."""
    zoom = preset.density / 72
    if width <= 0 or height <= 0:
        return zoom
    scale = min(
        1.0,
        preset.max_width / (width * zoom),
        preset.max_height / (height * zoom),
    )
    return zoom * scale


class PyMuPdfRasterizer(RasterizerPort):
    """Rasterizer implementation using PyMuPDF."""

    def _open(self, path: Path) -> fitz.Document:
        try:
            doc = fitz.open(str(path))
        except Exception as exc:
            raise ConversionError(f"Cannot open PDF: {path.name}: {exc}") from exc

        if not doc.is_pdf:
            doc.close()
            raise ConversionError(f"Not a PDF document: {path.name}")
        if doc.needs_pass:
            doc.close()
            raise ConversionError(f"PDF is encrypted and cannot be read: {path.name}")
        return doc

    def page_count(self, path: Path) -> int:
        with self._open(path) as doc:
            return doc.page_count

    def render_page(
        self, path: Path, page_number: int, preset: RasterPreset, output_dir: Path
    ) -> PageImage:
        extension = EXTENSIONS.get(preset.image_format)
        if extension is None:
            raise ConversionError(f"Unsupported image format: {preset.image_format}")

        with self._open(path) as doc:
            if not 1 <= page_number <= doc.page_count:
                raise ConversionError(
                    f"Page {page_number} out of range (1-{doc.page_count})"
                )

            try:
                page = doc[page_number - 1]
                zoom = fit_zoom(page.rect.width, page.rect.height, preset)
                pix = page.get_pixmap(
                    matrix=fitz.Matrix(zoom, zoom), colorspace=fitz.csRGB, alpha=False
                )
                output_dir.mkdir(parents=True, exist_ok=True)
                out = output_dir / f"page-{page_number}.{extension}"
                pix.save(str(out))
            except Exception as exc:
                raise ConversionError(
                    f"Failed to render page {page_number} of {path.name}: {exc}"
                ) from exc

        logger.debug(f"Rendered page {page_number}: {pix.width}x{pix.height}")
        return PageImage(
            page_number=page_number,
            path=out,
            image_format=preset.image_format,
            width=pix.width,
            height=pix.height,
        )
