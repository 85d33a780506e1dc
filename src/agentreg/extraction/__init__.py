"""Normalized metadata extraction (categories + entries)."""

from agentreg.extraction.metadata import extract_metadata

__all__ = ["extract_metadata"]
