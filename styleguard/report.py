"""Render reports as text or JSON."""

from __future__ import annotations

import json
from typing import List

from .result import Finding, Report, RunStatus

FORMATS = ("text", "json")


def format_finding(finding: Finding) -> str:
    return (
        f"{finding.path}:{finding.line}:{finding.column}: "
        f"{finding.severity.value} [{finding.rule_id}] {finding.message}"
    )


def format_summary_line(report: Report) -> str:
    """One-line human summary, e.g. ``2 errors, 1 warning in 3 files: FAIL``."""

    def plural(count: int, noun: str) -> str:
        return f"{count} {noun}{'' if count == 1 else 's'}"

    status = "PASS" if report.passed else "FAIL"
    if report.status is RunStatus.TIMEOUT:
        status = "TIMEOUT"
    counts = ", ".join(plural(count, severity) for severity, count in report.summary.as_rows())
    return f"{counts} in {plural(report.files_checked, 'file')}: {status}"


def render_text(report: Report) -> str:
    lines: List[str] = [format_finding(finding) for finding in report.findings]
    if lines:
        lines.append("")
    lines.append(format_summary_line(report))
    return "\n".join(lines)


def render_json(report: Report) -> str:
    return json.dumps(report.to_dict(), indent=2)


def render(report: Report, fmt: str = "text") -> str:
    """Return ``report`` formatted as ``text`` or ``json``. Performs no I/O."""

    if fmt == "text":
        return render_text(report)
    if fmt == "json":
        return render_json(report)
    raise ValueError(f"Unsupported report format: {fmt!r} (expected one of {', '.join(FORMATS)})")


def parse_json(payload: str) -> Report:
    """Rebuild a :class:`Report` from :func:`render_json` output."""

    return Report.from_dict(json.loads(payload))
