"""Line-based C++ style analyzer."""

from .engine import StyleAnalyzer, analyze, available_checks

__all__ = ["StyleAnalyzer", "analyze", "available_checks"]
