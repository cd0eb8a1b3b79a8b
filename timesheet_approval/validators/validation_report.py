"""Validation report for collecting issues found in a submitted form."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List


class ValidationSeverity(IntEnum):
    """Severity levels for validation issues."""

    WARNING = 2
    ERROR = 3


@dataclass
class ValidationIssue:
    """Represents a single validation issue.

    Attributes:
        severity: The severity level of the issue
        field: The form field the issue belongs to
        message: Human-readable description, shown next to the field
        value: The value that caused the issue
    """

    severity: ValidationSeverity
    field: str
    message: str
    value: Any = None

    def __str__(self) -> str:
        return f"[{self.severity.name}] {self.field}: {self.message}"


class ValidationReport:
    """Collects validation issues for one form submission.

    Rules are evaluated independently, so a report may hold issues for
    several fields at once. Errors make the submission invalid; warnings
    are informational.

    Example:
        >>> report = ValidationReport()
        >>> report.add_error("hours", "Hours cannot exceed 9", 12)
        >>> report.add_error("issue", "Issue description is required", "")
        >>> report.is_valid()
        False
        >>> report.field_errors()
        {'hours': 'Hours cannot exceed 9', 'issue': 'Issue description is required'}
    """

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    @property
    def error_count(self) -> int:
        return len(self.get_errors())

    @property
    def warning_count(self) -> int:
        return len(self.get_warnings())

    def is_valid(self) -> bool:
        """True when the report holds no errors; warnings do not count."""
        return self.error_count == 0

    def has_error_for(self, field: str) -> bool:
        return any(issue.field == field for issue in self.get_errors())

    def add_error(self, field: str, message: str, value: Any = None) -> None:
        """Record an error against ``field``; ``value`` is the offending input."""
        self.issues.append(
            ValidationIssue(ValidationSeverity.ERROR, field, message, value)
        )

    def add_warning(self, field: str, message: str, value: Any = None) -> None:
        self.issues.append(
            ValidationIssue(ValidationSeverity.WARNING, field, message, value)
        )

    def get_errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    def get_warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def field_errors(self) -> Dict[str, str]:
        """Map each invalid field to its first error message.

        This is the shape the entry form binds to: one inline message per
        field.
        """
        errors: Dict[str, str] = {}
        for issue in self.get_errors():
            errors.setdefault(issue.field, issue.message)
        return errors

    def merge(self, other: "ValidationReport") -> None:
        """Merge another validation report into this one."""
        self.issues.extend(other.issues)

    def summary(self) -> str:
        """Get a summary with counts of errors and warnings."""
        parts = []
        if self.error_count > 0:
            parts.append(f"{self.error_count} error(s)")
        if self.warning_count > 0:
            parts.append(f"{self.warning_count} warning(s)")

        if not parts:
            return "No issues found"

        return ", ".join(parts)

    def format(self) -> str:
        """Format the report for display, errors first."""
        if not self.issues:
            return "Validation successful - no issues found"

        lines = [f"Validation Report - {self.summary()}"]
        for issue in self.get_errors() + self.get_warnings():
            lines.append(f"  - {issue}")
        return "\n".join(lines)
