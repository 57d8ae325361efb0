"""Data models for source text and style findings."""

from .finding import Finding, FindingSeverity
from .source import SourceText

__all__ = [
    "Finding",
    "FindingSeverity",
    "SourceText",
]
