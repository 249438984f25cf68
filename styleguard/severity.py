"""Severity definitions for lint findings."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Enumerate the supported severity levels for findings."""

    ERROR = "error"
    WARNING = "warning"

    @classmethod
    def parse(cls, value: object) -> "Severity":
        """Return the severity named by ``value`` (case-insensitive)."""

        text = str(value).strip().lower()
        for severity in cls:
            if severity.value == text:
                return severity
        raise ValueError(f"Unknown severity: {value!r}")

    @property
    def exit_priority(self) -> int:
        """Return an integer ranking to drive exit code decisions."""

        ordering = {
            Severity.ERROR: 1,
            Severity.WARNING: 0,
        }
        return ordering[self]
