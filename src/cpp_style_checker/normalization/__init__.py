"""Normalization of raw input into analyzer models."""

from .source_normalizer import SourceNormalizer

__all__ = ["SourceNormalizer"]
