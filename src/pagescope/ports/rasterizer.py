"""Rasterizer port - interface for PDF page rendering."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import PageImage, RasterPreset


class RasterizerPort(ABC):
    """Interface for rendering PDF pages to images.

    Implementations raise ConversionError when the source is not a readable
    PDF or the backend is unavailable.
    """

    @abstractmethod
    def page_count(self, path: Path) -> int:
        """Return the number of pages in the PDF."""
        pass

    @abstractmethod
    def render_page(
        self, path: Path, page_number: int, preset: "RasterPreset", output_dir: Path
    ) -> "PageImage":
        """Render one page (1-based) into output_dir."""
        pass

    def rasterize(
        self, path: Path, preset: "RasterPreset", output_dir: Path
    ) -> Iterator["PageImage"]:
        """Lazily render every page in order."""
        for page_number in range(1, self.page_count(path) + 1):
            yield self.render_page(path, page_number, preset, output_dir)
