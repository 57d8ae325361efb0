"""Line-based style checker for ME 101 C++ coursework conventions."""

from .analyzer import StyleAnalyzer, analyze, available_checks
from .models import Finding, FindingSeverity, SourceText
from .service import CheckResult, CheckSession, StyleCheckService

__all__ = [
    "CheckResult",
    "CheckSession",
    "Finding",
    "FindingSeverity",
    "SourceText",
    "StyleAnalyzer",
    "StyleCheckService",
    "analyze",
    "available_checks",
]

__version__ = "0.1.0"
