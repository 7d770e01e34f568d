"""Ports - interfaces for external dependencies."""

from .inference import InferencePort
from .rasterizer import RasterizerPort
from .report import ReportPort

__all__ = ["InferencePort", "RasterizerPort", "ReportPort"]
