"""Adapter layer for reading C++ source into the checker."""

from .source_loader import STDIN_MARKER, SourceLoader, SourceLoaderError

__all__ = [
    "STDIN_MARKER",
    "SourceLoader",
    "SourceLoaderError",
]
