"""Rasterizer adapters."""

from .pymupdf import PyMuPdfRasterizer

__all__ = ["PyMuPdfRasterizer"]
