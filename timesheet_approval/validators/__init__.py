"""Validation layer for entry forms, the daily hour cap and project forms."""

from timesheet_approval.validators.business_validators import (
    MAX_DAILY_HOURS,
    BusinessRuleValidators,
)
from timesheet_approval.validators.field_validators import FieldValidators
from timesheet_approval.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)
from timesheet_approval.validators.validator import EntryValidator, ProjectValidator

__all__ = [
    "EntryValidator",
    "ProjectValidator",
    "ValidationReport",
    "ValidationIssue",
    "ValidationSeverity",
    "FieldValidators",
    "BusinessRuleValidators",
    "MAX_DAILY_HOURS",
]
