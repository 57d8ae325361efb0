"""Finding models shared by the analyzer and the reporting layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class FindingSeverity(str, Enum):
    """Severity levels attached to style findings."""

    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Finding:
    """A single style issue reported against one source line."""

    line: int
    rule: str
    message: str
    severity: FindingSeverity
    check_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "rule": self.rule,
            "message": self.message,
            "severity": self.severity.value,
            "check_id": self.check_id,
        }
