"""Base model for all data models in the timesheet workflow.

This module provides a base Pydantic model with common configuration
for records exchanged with the REST stores.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation with type checking, also on assignment
    - camelCase aliases matching the store's JSON keys
    - Tolerance for extra keys the store may add to a record

    Example:
        >>> class Member(BaseDataModel):
        ...     project_id: str
        >>> member = Member.model_validate({"projectId": "7"})
        >>> member.project_id
        '7'
        >>> member.model_dump(by_alias=True)
        {'projectId': '7'}
    """

    model_config = ConfigDict(
        # Wire keys are camelCase, Python attributes snake_case
        alias_generator=to_camel,
        populate_by_name=True,
        # Validate on assignment to catch errors early
        validate_assignment=True,
        strict=False,
        # Stores may attach computed keys (e.g. totalHours)
        extra="ignore",
        frozen=False,
    )

    def to_wire(self) -> dict:
        """Serialize to the store's JSON representation."""
        return self.model_dump(by_alias=True, mode="json")
