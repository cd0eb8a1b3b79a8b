"""Shared utilities: wire date formats and structured logging."""
