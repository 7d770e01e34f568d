"""Report adapter using YAML."""

import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from ...domain.models import ContentReport, ForgeryDocumentReport
from ...ports.report import ReportPort

logger = logging.getLogger(__name__)


def report_to_dict(
    report: ContentReport | ForgeryDocumentReport, include_images: bool = False
) -> dict[str, Any]:
    """Plain-data view of a report, ready for serialization."""
    if isinstance(report, ContentReport):
        mode = "content"
        entries_key = "pages"
        entries = report.pages
    else:
        mode = "forgery"
        entries_key = "results"
        entries = report.results

    data: dict[str, Any] = {
        "mode": mode,
        "file_name": report.file_name,
        "total_pages": report.total_pages,
        "success": report.success,
        "processed_at": datetime.now().isoformat(),
        "stats": asdict(report.stats),
    }
    if isinstance(report, ContentReport):
        data["summary"] = asdict(report.summary)

    rows = []
    for entry in entries:
        row = asdict(entry)
        if not include_images:
            row.pop("image_ref", None)
        rows.append(row)
    data[entries_key] = rows
    return data


class YamlReportWriter(ReportPort):
    """Report implementation writing a YAML sidecar."""

    def write(
        self,
        report: ContentReport | ForgeryDocumentReport,
        path: Path,
        include_images: bool = False,
    ) -> Path:
        data = report_to_dict(report, include_images=include_images)

        logger.info(f"Writing report: {path.name}")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.safe_dump(
                data, default_flow_style=False, allow_unicode=True, sort_keys=False
            )
        )

        return path


def default_report_path(pdf_path: Path, mode: str) -> Path:
    """Sidecar path next to the PDF, e.g. scan.forgery.yaml."""
    return pdf_path.with_suffix(f".{mode}.yaml")
