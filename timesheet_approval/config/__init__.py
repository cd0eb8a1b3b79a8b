"""
Configuration module for the timesheet approval workflow.
"""
from .logging_config import (
    JSONFormatter,
    LoggingConfig,
    configure_logging,
    get_logger,
    reset_logging,
)
from .settings import AppSettings, get_config, load_config, reload_config

__all__ = [
    "AppSettings",
    "get_config",
    "load_config",
    "reload_config",
    "JSONFormatter",
    "LoggingConfig",
    "configure_logging",
    "get_logger",
    "reset_logging",
]
