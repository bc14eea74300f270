"""Marginalia: journal markup rendering and paginated entry retrieval."""

__version__ = "0.1.0"
