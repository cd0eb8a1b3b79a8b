"""Click parameter types."""

import click

from timesheet_approval.exceptions import InvalidDateError
from timesheet_approval.utils.date_formats import parse_entry_date


class EntryDate(click.ParamType):
    """A day given as DD/MM/YYYY."""

    name = "DD/MM/YYYY"

    def convert(self, value, param, ctx):
        if not isinstance(value, str):
            return value
        try:
            return parse_entry_date(value)
        except InvalidDateError as e:
            self.fail(e.message, param, ctx)


ENTRY_DATE = EntryDate()
