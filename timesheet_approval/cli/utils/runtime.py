"""Wiring of stores and services for CLI commands."""

import asyncio
from typing import Tuple

from timesheet_approval.config.settings import AppSettings
from timesheet_approval.services.rest_store import (
    RestClient,
    RestProjectStore,
    RestTimesheetStore,
)
from timesheet_approval.services.retry_handler import RetryHandler
from timesheet_approval.services.stores import ProjectStore, TimesheetStore
from timesheet_approval.validators.validator import EntryValidator
from timesheet_approval.workflow.entry_submission import EntrySubmissionService


def build_stores(settings: AppSettings) -> Tuple[TimesheetStore, ProjectStore]:
    """Create the REST stores described by ``settings``."""
    client = RestClient(
        settings.timesheet_store_url,
        timeout=settings.request_timeout,
        retry_handler=RetryHandler(
            max_retries=settings.max_retries, base_delay=settings.retry_delay
        ),
    )
    return RestTimesheetStore(client), RestProjectStore(client)


def build_submission_service(
    settings: AppSettings,
    timesheet_store: TimesheetStore,
    project_store: ProjectStore,
) -> EntrySubmissionService:
    return EntrySubmissionService(
        timesheet_store,
        project_store,
        validator=EntryValidator(max_daily_hours=settings.max_daily_hours),
        unit_label=settings.default_unit,
        business_days_back=settings.entry_window_business_days,
    )


def run_async(coro):
    """Run a coroutine to completion from a synchronous command."""
    return asyncio.run(coro)
