"""Rule engine that applies the style check table to source text."""

from __future__ import annotations

import logging
from typing import List, Mapping, Sequence

from ..models import Finding, FindingSeverity, SourceText
from ..normalization import SourceNormalizer
from ..rules import CHECKS, CHECKS_BY_ID, StyleCheck

logger = logging.getLogger(__name__)


class StyleAnalyzer:
    """Evaluate an ordered table of style checks against every source line.

    Findings come out line-major and, within a line, in table order. Nothing
    is sorted or deduplicated.
    """

    def __init__(
        self,
        *,
        checks: Sequence[StyleCheck] | None = None,
        severity_overrides: Mapping[str, FindingSeverity] | None = None,
        normalizer: SourceNormalizer | None = None,
    ) -> None:
        self.checks = tuple(CHECKS if checks is None else checks)
        self.severity_overrides = dict(severity_overrides or {})
        self._normalizer = normalizer or SourceNormalizer()

    # ------------------------------------------------------------------
    @classmethod
    def from_check_ids(
        cls,
        check_ids: Sequence[str],
        *,
        severity_overrides: Mapping[str, FindingSeverity] | None = None,
    ) -> "StyleAnalyzer":
        """Build an analyzer limited to known ``check_ids``, in table order."""

        wanted = set(check_ids)
        unknown = sorted(wanted - set(CHECKS_BY_ID))
        if unknown:
            logger.warning("Ignoring unknown style checks: %s", ", ".join(unknown))
        checks = [check for check in CHECKS if check.check_id in wanted]
        return cls(checks=checks, severity_overrides=severity_overrides)

    # ------------------------------------------------------------------
    def analyze(self, source: str | SourceText) -> List[Finding]:
        """Return the findings for ``source``."""

        if isinstance(source, SourceText):
            text = source
        else:
            text = self._normalizer.normalize(source)
        lines = text.lines

        findings: List[Finding] = []
        for index in range(len(lines)):
            for check in self.checks:
                message = check.function(lines, index)
                if message is None:
                    continue
                findings.append(
                    Finding(
                        line=index + 1,
                        rule=check.rule,
                        message=message,
                        severity=self.severity_overrides.get(check.check_id, check.severity),
                        check_id=check.check_id,
                    )
                )

        logger.debug(
            "Analyzed %d line(s) of %s with %d check(s): %d finding(s)",
            len(lines),
            text.name,
            len(self.checks),
            len(findings),
        )
        return findings


def analyze(source: str) -> List[Finding]:
    """Run every built-in style check over ``source`` and return the findings."""

    return StyleAnalyzer().analyze(source)


def available_checks() -> List[StyleCheck]:
    return list(CHECKS)
