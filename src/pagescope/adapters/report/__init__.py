"""Report adapters."""

from .yaml_report import YamlReportWriter, default_report_path, report_to_dict

__all__ = ["YamlReportWriter", "default_report_path", "report_to_dict"]
