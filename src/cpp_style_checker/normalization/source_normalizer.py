"""Conversion helpers that turn raw source text into :class:`SourceText`."""

from __future__ import annotations

from ..models import SourceText


class SourceNormalizer:
    """Split raw text into the line sequence the analyzer reports against."""

    def normalize(self, text: str, *, name: str = "<input>") -> SourceText:
        """Return a :class:`SourceText` for ``text``.

        Only ``"\\n"`` separates lines. A ``"\\r"`` left over from CRLF input
        stays on its line, where the whitespace-trimming checks ignore it.
        """

        return SourceText(lines=tuple(self.split_lines(text)), name=name)

    @staticmethod
    def split_lines(text: str) -> list[str]:
        return text.split("\n")
