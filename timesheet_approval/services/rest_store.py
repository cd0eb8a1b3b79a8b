"""
REST-backed stores (json-server style API).

Endpoints:
- ``GET/POST /timesheets``, ``GET/PATCH/DELETE /timesheets/{id}``
- ``GET/POST /projects``, ``PUT /projects/{id}``

Blocking ``requests`` calls run in a worker thread so each store call is
an awaitable suspend point for the caller. Transient failures are retried
by ``RetryHandler``; whatever still fails is raised as
``StoreUnavailableError`` (or ``EntryNotFoundError`` for a 404).
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from timesheet_approval.exceptions import EntryNotFoundError, StoreUnavailableError
from timesheet_approval.models.project import NewProject, Project
from timesheet_approval.models.timesheet import NewTimesheetEntry, TimesheetEntry
from timesheet_approval.services.error_classifier import (
    ErrorClassifier,
    get_status_code,
)
from timesheet_approval.services.retry_handler import (
    CircuitBreakerError,
    RetryExhaustedException,
    RetryHandler,
)
from timesheet_approval.services.stores import ProjectStore, TimesheetStore
from timesheet_approval.utils.logging_utils import sanitize_sensitive_data

logger = logging.getLogger(__name__)


class RestClient:
    """
    Thin JSON client shared by the REST stores.

    Features:
    - Connection reuse through a ``requests.Session``
    - Automatic retry with exponential backoff
    - Translation of transport errors into the workflow's error taxonomy
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        retry_handler: Optional[RetryHandler] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Root URL of the API, e.g. http://localhost:3000
            timeout: Per-request timeout in seconds
            retry_handler: Custom retry handler instance
            session: Custom requests session (useful for testing)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_handler = retry_handler or RetryHandler()
        self.session = session or requests.Session()
        self.classifier = ErrorClassifier()

    def _send(self, method: str, path: str, payload: Optional[Dict[str, Any]]) -> Any:
        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    def request(
        self, method: str, path: str, payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Perform a request with retries and error translation.

        Args:
            method: HTTP method
            path: Path below the base URL
            payload: JSON body, if any

        Returns:
            Decoded JSON response (None for an empty body)

        Raises:
            EntryNotFoundError: If the server answers 404
            StoreUnavailableError: For any other failure
        """
        if payload is not None:
            logger.debug(f"{method} {path} {sanitize_sensitive_data(payload)}")
        else:
            logger.debug(f"{method} {path}")

        try:
            return self.retry_handler.execute_with_retry(
                self._send, method, path, payload
            )
        except CircuitBreakerError:
            raise StoreUnavailableError(
                "The timesheet server is temporarily unavailable after repeated "
                "failures",
                recovery_hint="Wait a minute before retrying",
            )
        except RetryExhaustedException as e:
            cause = e.last_exception
            logger.error(f"{method} {path} failed after retries: {cause}")
            raise StoreUnavailableError(
                self.classifier.describe(cause), status_code=get_status_code(cause)
            ) from cause
        except requests.exceptions.RequestException as e:
            status_code = get_status_code(e)
            if status_code == 404:
                raise EntryNotFoundError(f"{path} not found") from e
            logger.error(f"{method} {path} failed: {e}")
            raise StoreUnavailableError(
                self.classifier.describe(e), status_code=status_code
            ) from e
        except ValueError as e:
            # Body was not JSON
            logger.error(f"{method} {path} returned an unreadable body: {e}")
            raise StoreUnavailableError(
                "The timesheet server returned an unreadable response"
            ) from e

    async def arequest(
        self, method: str, path: str, payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Run :meth:`request` in a worker thread."""
        return await asyncio.to_thread(self.request, method, path, payload)


def _parse_records(model, records: Any, what: str) -> List[Any]:
    if not isinstance(records, list):
        raise StoreUnavailableError(f"Expected a list of {what} from the server")
    return [_parse_record(model, record, what) for record in records]


def _parse_record(model, record: Any, what: str):
    try:
        return model.model_validate(record)
    except ValidationError as e:
        record_id = record.get("id") if isinstance(record, dict) else None
        logger.error(f"Malformed {what} record {record_id}: {e}")
        raise StoreUnavailableError(
            f"The server returned a malformed {what} record (id {record_id})"
        ) from e


class RestTimesheetStore(TimesheetStore):
    """Timesheet store backed by the ``/timesheets`` endpoint."""

    def __init__(self, client: RestClient):
        self.client = client

    async def list(self) -> List[TimesheetEntry]:
        records = await self.client.arequest("GET", "/timesheets")
        return _parse_records(TimesheetEntry, records, "timesheet")

    async def get(self, entry_id: str) -> TimesheetEntry:
        record = await self.client.arequest("GET", f"/timesheets/{entry_id}")
        return _parse_record(TimesheetEntry, record, "timesheet")

    async def create(self, entry: NewTimesheetEntry) -> TimesheetEntry:
        record = await self.client.arequest("POST", "/timesheets", entry.to_wire())
        created = _parse_record(TimesheetEntry, record, "timesheet")
        logger.info(f"Created timesheet entry {created.id} for {created.user}")
        return created

    async def update(self, entry_id: str, changes: Dict[str, Any]) -> TimesheetEntry:
        record = await self.client.arequest(
            "PATCH", f"/timesheets/{entry_id}", changes
        )
        return _parse_record(TimesheetEntry, record, "timesheet")

    async def delete(self, entry_id: str) -> None:
        await self.client.arequest("DELETE", f"/timesheets/{entry_id}")
        logger.info(f"Deleted timesheet entry {entry_id}")


class RestProjectStore(ProjectStore):
    """Project store backed by the ``/projects`` endpoint."""

    def __init__(self, client: RestClient):
        self.client = client

    async def list(self) -> List[Project]:
        records = await self.client.arequest("GET", "/projects")
        return _parse_records(Project, records, "project")

    async def create(self, project: NewProject) -> Project:
        record = await self.client.arequest("POST", "/projects", project.to_wire())
        created = _parse_record(Project, record, "project")
        logger.info(f"Created project {created.id} ({created.name})")
        return created

    async def update(self, project: Project) -> Project:
        record = await self.client.arequest(
            "PUT", f"/projects/{project.id}", project.to_wire()
        )
        updated = _parse_record(Project, record, "project")
        logger.info(f"Updated project {updated.id} ({updated.name})")
        return updated
