"""Wire formats for dates exchanged with the stores.

The stores use three different, non-ISO formats:

- entry dates: ``DD/MM/YYYY``
- project bounds: ``DD-MM-YYYY``
- creation timestamps: ``DD/MM/YYYY hh:mm AM/PM``

Each parser accepts only its own format. Mixing them up (for example
reading a project bound with the entry-date parser) raises
``InvalidDateError`` instead of silently producing a wrong date.
"""

import datetime as dt
import re

from timesheet_approval.exceptions import InvalidDateError

ENTRY_DATE_FORMAT = "DD/MM/YYYY"
PROJECT_DATE_FORMAT = "DD-MM-YYYY"
CREATED_FORMAT = "DD/MM/YYYY hh:mm AM/PM"

_ENTRY_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_PROJECT_DATE_RE = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$")
_CREATED_RE = re.compile(
    r"^(\d{1,2})/(\d{1,2})/(\d{4}) (\d{1,2}):(\d{2}) ([AaPp][Mm])$"
)


def _build_date(value: str, day: str, month: str, year: str, fmt: str) -> dt.date:
    try:
        return dt.date(int(year), int(month), int(day))
    except ValueError:
        raise InvalidDateError(value, fmt)


def parse_entry_date(value: str) -> dt.date:
    """Parse a ``DD/MM/YYYY`` entry date.

    Example:
        >>> parse_entry_date("10/06/2024")
        datetime.date(2024, 6, 10)
    """
    match = _ENTRY_DATE_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidDateError(value, ENTRY_DATE_FORMAT)
    return _build_date(value, *match.groups(), ENTRY_DATE_FORMAT)


def format_entry_date(value: dt.date) -> str:
    """Format a date as ``DD/MM/YYYY``."""
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def parse_project_date(value: str) -> dt.date:
    """Parse a ``DD-MM-YYYY`` project bound.

    Surrounding whitespace is ignored; project end dates are frequently
    stored with a trailing space.

    Example:
        >>> parse_project_date("31-12-2024 ")
        datetime.date(2024, 12, 31)
    """
    match = _PROJECT_DATE_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidDateError(value, PROJECT_DATE_FORMAT)
    return _build_date(value, *match.groups(), PROJECT_DATE_FORMAT)


def format_project_date(value: dt.date) -> str:
    """Format a date as ``DD-MM-YYYY``."""
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"


def parse_created(value: str) -> dt.datetime:
    """Parse a ``DD/MM/YYYY hh:mm AM/PM`` creation timestamp.

    Example:
        >>> parse_created("10/06/2024 12:05 AM")
        datetime.datetime(2024, 6, 10, 0, 5)
    """
    match = _CREATED_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidDateError(value, CREATED_FORMAT)

    day, month, year, hour, minute, meridiem = match.groups()
    hour_12 = int(hour)
    if not 1 <= hour_12 <= 12:
        raise InvalidDateError(value, CREATED_FORMAT)

    # 12 AM is midnight, 12 PM is noon
    hour_24 = hour_12 % 12
    if meridiem.upper() == "PM":
        hour_24 += 12

    date = _build_date(value, day, month, year, CREATED_FORMAT)
    try:
        return dt.datetime.combine(date, dt.time(hour_24, int(minute)))
    except ValueError:
        raise InvalidDateError(value, CREATED_FORMAT)


def format_created(value: dt.datetime) -> str:
    """Format a timestamp as ``DD/MM/YYYY hh:mm AM/PM``."""
    meridiem = "PM" if value.hour >= 12 else "AM"
    hour_12 = value.hour % 12 or 12
    return (
        f"{format_entry_date(value.date())} "
        f"{hour_12:02d}:{value.minute:02d} {meridiem}"
    )
