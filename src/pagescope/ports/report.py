"""Report port - interface for persisting document reports."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import ContentReport, ForgeryDocumentReport


class ReportPort(ABC):
    """Interface for writing a finished report."""

    @abstractmethod
    def write(
        self,
        report: "ContentReport | ForgeryDocumentReport",
        path: Path,
        include_images: bool = False,
    ) -> Path:
        """Write report to path.

        Returns path to written file.
        """
        pass
