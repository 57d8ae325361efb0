from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import IO, Optional

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


class SourceLoaderError(RuntimeError):
    """Exception raised when C++ source cannot be read."""


class SourceLoader:
    """Load C++ source text from a file or from standard input."""

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        *,
        encoding: str = "utf-8",
        stdin: Optional[IO[str]] = None,
    ) -> None:
        self.path = None if path is None or str(path) == STDIN_MARKER else Path(path)
        self.encoding = encoding
        self._stdin = stdin

    @property
    def source_name(self) -> str:
        return "<stdin>" if self.path is None else str(self.path)

    def load(self) -> str:
        """Return the raw text of the configured source."""

        if self.path is None:
            return self._read_stdin()
        return self._read_file(self.path)

    # Input helpers --------------------------------------------------------------
    def _read_file(self, path: Path) -> str:
        if not path.exists():
            raise SourceLoaderError(f"Source file not found: {path}")
        if path.is_dir():
            raise SourceLoaderError(f"Source path is a directory: {path}")

        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise SourceLoaderError(f"Failed to read source file {path}: {exc}") from exc

        logger.info("Loaded %d byte(s) from %s", len(raw), path)
        # Undecodable bytes degrade to replacement characters instead of failing.
        return raw.decode(self.encoding, errors="replace")

    def _read_stdin(self) -> str:
        stream = self._stdin if self._stdin is not None else sys.stdin
        try:
            return stream.read()
        except OSError as exc:
            raise SourceLoaderError(f"Failed to read source from stdin: {exc}") from exc
