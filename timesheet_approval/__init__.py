"""Timesheet entry validation and approval workflow."""

__version__ = "1.0.0"
