"""Flat-file persistence adapters."""

from .json_lines_store import JsonLinesStore

__all__ = ["JsonLinesStore"]
