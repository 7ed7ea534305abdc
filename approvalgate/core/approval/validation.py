"""Approver input value validation."""

from enum import Enum
from typing import FrozenSet

from .decision import InvalidInputError


class ApproverInput(str, Enum):
    """Terminal values an approver may record."""

    APPROVE = "approve"
    REJECT = "reject"


VALID_INPUTS: FrozenSet[str] = frozenset(item.value for item in ApproverInput)


def validate_input(value: str) -> str:
    """Check that an input value is 'approve' or 'reject'.

    Matching is exact: case and surrounding whitespace are significant.

    Args:
        value: Raw input string taken from the proposed object

    Returns:
        The value, unchanged

    Raises:
        InvalidInputError: If the value is outside the supported set
    """
    if value not in VALID_INPUTS:
        raise InvalidInputError(value)
    return value
