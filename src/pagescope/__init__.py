"""Pagescope - page-by-page PDF analysis with vision models."""

__version__ = "0.1.0"
