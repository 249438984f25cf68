"""Core result data structures for lint runs."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Tuple

from .severity import Severity

SEVERITY_ORDER: Sequence[Severity] = (
    Severity.ERROR,
    Severity.WARNING,
)

CONFIG_PATH = "config"


class FindingKind(str, Enum):
    """Distinguish rule violations from file- or rule-scoped failures."""

    VIOLATION = "violation"
    UNPARSABLE = "unparsable"
    MATCHER_FAULT = "matcher-fault"
    IO_ERROR = "io-error"
    CONFIG = "config"
    TIMEOUT = "timeout"


class RunStatus(str, Enum):
    OK = "ok"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class Finding:
    """Capture a single rule violation or file-level diagnostic."""

    rule_id: str
    path: str
    line: int
    column: int
    message: str
    severity: Severity
    kind: FindingKind = FindingKind.VIOLATION

    @property
    def sort_key(self) -> Tuple[str, int, int, str]:
        return (self.path, self.line, self.column, self.rule_id)

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["severity"] = self.severity.value
        data["kind"] = self.kind.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Finding":
        return cls(
            rule_id=str(data["rule_id"]),
            path=str(data["path"]),
            line=int(data["line"]),
            column=int(data["column"]),
            message=str(data["message"]),
            severity=Severity.parse(data["severity"]),
            kind=FindingKind(data.get("kind", FindingKind.VIOLATION.value)),
        )


@dataclass
class Summary:
    """Aggregate finding counts by severity."""

    error: int = 0
    warning: int = 0

    def increment(self, severity: Severity) -> None:
        attr = severity.value
        setattr(self, attr, getattr(self, attr) + 1)

    def to_dict(self) -> Dict[str, int]:
        data = asdict(self)
        data["total"] = self.total
        return data

    def as_rows(self) -> List[Tuple[str, int]]:
        """Return severity/count pairs ordered for reporting."""

        return [(severity.value, getattr(self, severity.value)) for severity in SEVERITY_ORDER]

    @property
    def total(self) -> int:
        return sum(getattr(self, severity.value) for severity in SEVERITY_ORDER)

    @classmethod
    def of(cls, findings: Iterable[Finding]) -> "Summary":
        summary = cls()
        for finding in findings:
            summary.increment(finding.severity)
        return summary


@dataclass(frozen=True)
class Report:
    """Bundle the sorted findings of one run with its summary."""

    findings: Tuple[Finding, ...] = ()
    files_checked: int = 0
    status: RunStatus = RunStatus.OK
    summary: Summary = field(default_factory=Summary)

    @classmethod
    def build(
        cls,
        findings: Iterable[Finding],
        files_checked: int,
        status: RunStatus = RunStatus.OK,
    ) -> "Report":
        ordered = tuple(sorted(findings, key=lambda finding: finding.sort_key))
        return cls(
            findings=ordered,
            files_checked=files_checked,
            status=status,
            summary=Summary.of(ordered),
        )

    @property
    def passed(self) -> bool:
        return self.status is RunStatus.OK and self.summary.error == 0

    def exit_code(self, strict: bool = False) -> int:
        if self.status is RunStatus.TIMEOUT:
            return 2
        threshold = Severity.WARNING.exit_priority if strict else Severity.ERROR.exit_priority
        if any(finding.severity.exit_priority >= threshold for finding in self.findings):
            return 1
        return 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "findings": [finding.to_dict() for finding in self.findings],
            "summary": self.summary.to_dict(),
            "status": self.status.value,
            "files_checked": self.files_checked,
            "passed": self.passed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Report":
        findings = [Finding.from_dict(item) for item in data.get("findings", [])]
        return cls.build(
            findings,
            files_checked=int(data.get("files_checked", 0)),
            status=RunStatus(data.get("status", RunStatus.OK.value)),
        )
