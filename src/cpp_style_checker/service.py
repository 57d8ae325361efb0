"""Orchestration layer used by the CLI to run style checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Mapping, Sequence

from .adapters import SourceLoader, SourceLoaderError
from .analyzer import StyleAnalyzer
from .models import Finding, FindingSeverity
from .normalization import SourceNormalizer
from .rules import CHECKS, RuleSetError, RuleSetManager, strip_whitespace

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CheckResult:
    """Result returned by :class:`StyleCheckService` runs."""

    findings: list[Finding]
    metadata: Mapping[str, Any]

    @property
    def warnings(self) -> list[Finding]:
        return [finding for finding in self.findings if finding.severity is FindingSeverity.WARNING]

    @property
    def infos(self) -> list[Finding]:
        return [finding for finding in self.findings if finding.severity is FindingSeverity.INFO]


SourceLoaderFactory = Callable[..., SourceLoader]


class StyleCheckService:
    """High level service responsible for source ingestion and analysis."""

    def __init__(
        self,
        *,
        analyzer: StyleAnalyzer | None = None,
        source_loader_factory: SourceLoaderFactory | None = None,
        normalizer: SourceNormalizer | None = None,
    ) -> None:
        self._analyzer = analyzer or StyleAnalyzer()
        self._source_loader_factory = source_loader_factory or SourceLoader
        self._normalizer = normalizer or SourceNormalizer()

    # ------------------------------------------------------------------
    @classmethod
    def from_manifests(
        cls,
        manifests: Sequence[Path | str] | None = None,
        *,
        disabled: Sequence[str] | None = None,
        rule_set_manager: RuleSetManager | None = None,
    ) -> "StyleCheckService":
        """Create a service whose analyzer honours rule set manifests."""

        manager = rule_set_manager or RuleSetManager()
        check_ids = manager.enabled_checks(
            manifests, available=[check.check_id for check in CHECKS]
        )
        if disabled:
            skipped = set(disabled)
            check_ids = [check_id for check_id in check_ids if check_id not in skipped]
        analyzer = StyleAnalyzer.from_check_ids(
            check_ids, severity_overrides=manager.severity_overrides(manifests)
        )
        return cls(analyzer=analyzer)

    # ------------------------------------------------------------------
    def check_text(self, text: str, *, source_name: str = "<input>") -> CheckResult:
        """Analyze ``text`` unless it is empty or whitespace-only."""

        source = self._normalizer.normalize(text, name=source_name)
        if not strip_whitespace(text):
            logger.info("Skipping %s: no code to check", source_name)
            findings: list[Finding] = []
            skipped = True
        else:
            findings = self._analyzer.analyze(source)
            skipped = False
            logger.info("Checked %s: %d finding(s)", source_name, len(findings))

        metadata = {
            "source": source_name,
            "line_count": source.line_count,
            "skipped": skipped,
            "warnings": sum(1 for f in findings if f.severity is FindingSeverity.WARNING),
            "infos": sum(1 for f in findings if f.severity is FindingSeverity.INFO),
        }
        return CheckResult(findings=findings, metadata=metadata)

    # ------------------------------------------------------------------
    def check_file(self, path: Path | str) -> CheckResult:
        """Load ``path`` (``-`` for stdin) and analyze its contents."""

        loader = self._source_loader_factory(path)
        text = loader.load()
        return self.check_text(text, source_name=loader.source_name)


@dataclass
class CheckSession:
    """Editable code buffer with the last check result, as an editor would hold it."""

    service: StyleCheckService = field(default_factory=StyleCheckService)
    code: str = ""
    findings: List[Finding] = field(default_factory=list)
    has_checked: bool = False

    def check(self) -> List[Finding]:
        """Analyze the buffer; blank buffers leave the previous result untouched."""

        if not strip_whitespace(self.code):
            return self.findings
        self.findings = self.service.check_text(self.code).findings
        self.has_checked = True
        return self.findings

    def clear(self) -> None:
        self.code = ""
        self.findings = []
        self.has_checked = False

    @property
    def line_count(self) -> int:
        return len(self.code.split("\n"))

    @property
    def warnings(self) -> List[Finding]:
        return [finding for finding in self.findings if finding.severity is FindingSeverity.WARNING]

    @property
    def infos(self) -> List[Finding]:
        return [finding for finding in self.findings if finding.severity is FindingSeverity.INFO]

    @property
    def status(self) -> str | None:
        if not self.has_checked:
            return None
        if not self.findings:
            return "Perfect"
        return f"{len(self.findings)} issues"


__all__ = [
    "CheckResult",
    "CheckSession",
    "RuleSetError",
    "SourceLoaderError",
    "StyleCheckService",
]
