"""Source text model consumed by the analyzer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True, slots=True)
class SourceText:
    """Immutable, newline-split view of the text handed to the analyzer."""

    lines: Tuple[str, ...] = ("",)
    name: str = "<input>"

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __getitem__(self, index: int) -> str:
        return self.lines[index]

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_blank(self) -> bool:
        """Return ``True`` when every line is empty or whitespace."""

        return all(not line.strip() for line in self.lines)
