"""Command-line interface implementation for the C++ style checker."""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping, Sequence

from ..adapters import SourceLoaderError
from ..analyzer import available_checks
from ..logging_setup import configure_logging
from ..models import Finding, FindingSeverity
from ..rules import RuleSetError
from ..service import CheckResult, StyleCheckService

SEVERITY_RANK = {
    FindingSeverity.INFO: 0,
    FindingSeverity.WARNING: 1,
}
FAIL_ON_NEVER = "never"


@dataclass(slots=True)
class CheckReport:
    """Findings for one source plus contextual metadata."""

    findings: Sequence[Finding]
    metadata: Mapping[str, Any]

    @property
    def highest_severity(self) -> FindingSeverity | None:
        if not self.findings:
            return None
        return max(self.findings, key=lambda finding: SEVERITY_RANK[finding.severity]).severity

    def counts_by_severity(self) -> dict[str, int]:
        counts: MutableMapping[FindingSeverity, int] = {
            severity: 0 for severity in FindingSeverity
        }
        for finding in self.findings:
            counts[finding.severity] += 1
        return {severity.value: count for severity, count in counts.items()}

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": dict(self.metadata),
            "summary": {
                "total_findings": len(self.findings),
                "highest_severity": self.highest_severity.value if self.highest_severity else None,
                "counts": self.counts_by_severity(),
            },
            "findings": [finding.to_dict() for finding in self.findings],
        }


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def format_summary_line(report: CheckReport) -> str:
    counts = report.counts_by_severity()
    return (
        f"Found {_plural(len(report.findings), 'issue')}: "
        f"{_plural(counts[FindingSeverity.WARNING.value], 'warning')}, "
        f"{_plural(counts[FindingSeverity.INFO.value], 'suggestion')}."
    )


def render_table(report: CheckReport) -> str:
    """Render findings as a simple text table for terminal output."""

    source = str(report.metadata.get("source", "<input>"))
    if report.metadata.get("skipped"):
        return f"{source}: nothing to check."
    if not report.findings:
        return f"{source}: No issues found."

    headers = ("Line", "Severity", "Rule", "Message")
    rows = [headers]
    for finding in report.findings:
        rows.append((str(finding.line), finding.severity.value, finding.rule, finding.message))

    widths = [max(len(row[idx]) for row in rows) for idx in range(len(headers))]

    def format_row(values: tuple[str, str, str, str]) -> str:
        return "  ".join(value.ljust(width) for value, width in zip(values, widths, strict=True)).rstrip()

    lines = [source, format_row(headers)]
    lines.append("  ".join("=" * width for width in widths))
    for row in rows[1:]:
        lines.append(format_row(row))
    lines.append(format_summary_line(report))
    return "\n".join(lines)


def render_checks() -> str:
    """Render the built-in check table."""

    rows = [("Check", "Rule", "Severity", "Description")]
    for check in available_checks():
        rows.append((check.check_id, check.rule, check.severity.value, check.description))
    widths = [max(len(row[idx]) for row in rows) for idx in range(4)]
    return "\n".join(
        "  ".join(value.ljust(width) for value, width in zip(row, widths, strict=True)).rstrip()
        for row in rows
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="cpp-style", description="ME 101 C++ style guide checker"
    )
    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser(
        "check", help="Check C++ source files against the style guide."
    )
    check_parser.add_argument(
        "paths",
        type=str,
        nargs="+",
        metavar="PATH",
        help="C++ source files to check. Use '-' to read from standard input.",
    )
    check_parser.add_argument(
        "--rule-manifest",
        dest="rule_manifests",
        action="append",
        default=None,
        type=str,
        help="Path to a rule set YAML file enabling, disabling or re-grading checks.",
    )
    check_parser.add_argument(
        "--disable",
        dest="disabled",
        action="append",
        default=None,
        metavar="CHECK_ID",
        help="Disable a single check by id (see `cpp-style rules`).",
    )
    check_parser.add_argument(
        "--fail-on",
        choices=[severity.value for severity in FindingSeverity] + [FAIL_ON_NEVER],
        default=FindingSeverity.WARNING.value,
        help="Fail the run when findings at or above the provided severity are present.",
    )
    check_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format for check results.",
    )
    check_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging output.",
    )

    subparsers.add_parser("rules", help="List the built-in style checks.")

    return parser


def create_service(
    *,
    manifests: Sequence[str] | None = None,
    disabled: Sequence[str] | None = None,
) -> StyleCheckService:
    """Create a style check service honouring manifests and disabled checks."""

    return StyleCheckService.from_manifests(manifests, disabled=disabled)


def _build_report(result: CheckResult) -> CheckReport:
    return CheckReport(findings=result.findings, metadata=result.metadata)


def _should_fail(reports: Sequence[CheckReport], fail_on: str) -> bool:
    if fail_on == FAIL_ON_NEVER:
        return False
    threshold = SEVERITY_RANK[FindingSeverity(fail_on)]
    for report in reports:
        highest = report.highest_severity
        if highest is not None and SEVERITY_RANK[highest] >= threshold:
            return True
    return False


def _format_reports(reports: Sequence[CheckReport], *, output_format: str) -> str:
    if output_format not in {"table", "json"}:
        raise ValueError("format must be either 'table' or 'json'")

    if output_format == "json":
        return json.dumps({"reports": [report.to_dict() for report in reports]}, indent=2)
    return "\n\n".join(render_table(report) for report in reports)


def _handle_check(args: argparse.Namespace) -> int:
    configure_logging(verbose=args.verbose)

    try:
        service = create_service(manifests=args.rule_manifests, disabled=args.disabled)
    except RuleSetError as exc:
        print(f"Error: {exc}")
        return 2

    reports: list[CheckReport] = []
    for path in args.paths:
        try:
            result = service.check_file(path)
        except SourceLoaderError as exc:
            print(f"Error: {exc}")
            return 2
        reports.append(_build_report(result))

    print(_format_reports(reports, output_format=args.format))
    return 1 if _should_fail(reports, args.fail_on) else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "check":
        return _handle_check(args)
    if args.command == "rules":
        print(render_checks())
        return 0

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
