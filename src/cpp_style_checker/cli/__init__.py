"""Command-line interface package for the C++ style checker."""

from .app import CheckReport, build_parser, main, render_table, run

__all__ = [
    "CheckReport",
    "build_parser",
    "main",
    "render_table",
    "run",
]
