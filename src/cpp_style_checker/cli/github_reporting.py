"""Helpers for publishing style findings to GitHub Actions surfaces."""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path
from typing import Iterable, Mapping, MutableMapping, Sequence

SEVERITY_ORDER = ["warning", "info"]
SEVERITY_LABELS = {"warning": "Warnings", "info": "Suggestions"}
ANNOTATION_LEVELS = {
    "warning": "warning",
    "info": "notice",
}
DISPLAY_LIMIT = 10


def _iter_reports(document: Mapping[str, object]) -> list[Mapping[str, object]]:
    """Accept either the CLI's ``{"reports": [...]}`` or a single report."""

    reports = document.get("reports")
    if isinstance(reports, list):
        return [report for report in reports if isinstance(report, Mapping)]
    if "findings" in document:
        return [document]
    return []


def _merge_counts(reports: Sequence[Mapping[str, object]]) -> MutableMapping[str, int]:
    counts: MutableMapping[str, int] = {severity: 0 for severity in SEVERITY_ORDER}
    for report in reports:
        summary: Mapping[str, object] = report.get("summary") or {}
        for severity, value in (summary.get("counts") or {}).items():
            severity_key = str(severity).lower()
            if severity_key in counts:
                counts[severity_key] += int(value)
    return counts


def format_summary(document: Mapping[str, object]) -> str:
    """Render a Markdown job summary for the provided report document."""

    reports = _iter_reports(document)
    counts = _merge_counts(reports)
    total_findings = sum(
        int((report.get("summary") or {}).get("total_findings", 0)) for report in reports
    )

    lines: list[str] = [
        "# C++ Style Report",
        "",
        f"**Files checked:** {len(reports)}",
        f"**Total findings:** {total_findings}",
        "",
        "| Severity | Findings |",
        "| --- | ---: |",
    ]
    for severity in SEVERITY_ORDER:
        lines.append(f"| {SEVERITY_LABELS[severity]} | {counts[severity]} |")

    findings = [
        (str((report.get("metadata") or {}).get("source", "")), finding)
        for report in reports
        for finding in report.get("findings") or []
    ]
    if findings:
        lines.extend(["", "## Findings", ""])
        for source, finding in findings[:DISPLAY_LIMIT]:
            severity = str(finding.get("severity", "info")).lower()
            rule = str(finding.get("rule", "")).strip()
            message = str(finding.get("message", "")).strip()
            line = finding.get("line")

            bullet = f"- **{severity.title()}**"
            if rule:
                bullet += f" `{rule}`"
            if message:
                bullet += f" - {message}"
            if source and line is not None:
                bullet += f" _(`{source}:{line}`)_"
            lines.append(bullet)

        remaining = len(findings) - DISPLAY_LIMIT
        if remaining > 0:
            lines.append(f"- ...and {remaining} more findings.")

    lines.append("")
    return "\n".join(lines)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def iter_annotations(document: Mapping[str, object]) -> Iterable[str]:
    """Generate GitHub Actions workflow command annotations for the findings."""

    for report in _iter_reports(document):
        metadata: Mapping[str, object] = report.get("metadata") or {}
        source = str(metadata.get("source", "")).strip()
        for finding in report.get("findings") or []:
            severity = str(finding.get("severity", "info")).lower()
            level = ANNOTATION_LEVELS.get(severity, "notice")
            rule = str(finding.get("rule", "")).strip()
            message = str(finding.get("message", "")).strip() or "Style finding reported without message."
            line = _coerce_int(finding.get("line"))

            title = " - ".join(part for part in (severity.title(), rule) if part)
            body = _escape_data(message)

            attributes: list[str] = []
            if source and not source.startswith("<"):
                attributes.append(f"file={_escape_property(source)}")
            if line is not None:
                attributes.append(f"line={line}")
            if title:
                attributes.append(f"title={_escape_property(title)}")

            attribute_segment = " " + ",".join(attributes) if attributes else ""
            yield f"::{level}{attribute_segment}::{body}"


def _coerce_int(value: object | None) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _load_report(path: Path) -> Mapping[str, object]:
    raw = path.read_text(encoding="utf-8-sig")
    if not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Failed to parse report JSON from '{path}': {exc.msg}.") from exc

    if not isinstance(data, Mapping):
        raise ValueError("Report JSON must be an object.")
    return data


def _write_summary(document: Mapping[str, object], destination: Path | None) -> None:
    if destination is None:
        return

    content = format_summary(document)
    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("a", encoding="utf-8") as handle:
        handle.write(content)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Publish style findings as GitHub job summary and annotations."
    )
    parser.add_argument("report", type=Path, help="Path to the JSON report from `cpp-style check`.")
    parser.add_argument(
        "--summary-path",
        type=Path,
        default=None,
        help="Optional explicit path for the GitHub job summary output.",
    )

    args = parser.parse_args(argv)

    summary_path = args.summary_path
    if summary_path is None:
        summary_env = os.getenv("GITHUB_STEP_SUMMARY")
        if summary_env:
            summary_path = Path(summary_env)

    try:
        document = _load_report(args.report)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}")
        return 2

    _write_summary(document, summary_path)

    for command in iter_annotations(document):
        print(command)

    return 0


def run() -> None:  # pragma: no cover - wrapper for console entry point
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
