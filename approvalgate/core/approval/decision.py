"""Admission decisions and the errors that lead to them."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .types import ChangeSite


# Denial messages returned to the API server verbatim
TASK_CLOSED_MESSAGE = "ApprovalTask has already reached its final state"
NOT_AN_APPROVER_MESSAGE = "User does not exist in the approval list"
SCOPE_VIOLATION_MESSAGE = "User can only update their own approval input"


class DenialReason(str, Enum):
    """Why an update was denied."""

    TASK_CLOSED = "task_closed"            # Task already terminal or complete
    NOT_AN_APPROVER = "not_an_approver"    # Requester not in the approver list
    INVALID_INPUT = "invalid_input"        # Right field, unsupported value
    SCOPE_VIOLATION = "scope_violation"    # Touched someone else's entry, or nothing


# Denials the caller can fix by resubmitting a corrected value
RETRYABLE_REASONS = frozenset({DenialReason.INVALID_INPUT})


class InvalidInputError(ValueError):
    """Raised when an approver input is not one of the supported values."""

    def __init__(self, value: str):
        super().__init__(
            f"invalid input value: '{value}'. Supported values are 'approve' or 'reject'"
        )
        self.value = value


@dataclass(frozen=True)
class Decision:
    """Verdict for one proposed update."""

    allowed: bool
    reason: str = ""
    denial: Optional[DenialReason] = None
    change: Optional[ChangeSite] = None

    @classmethod
    def allow(cls, change: Optional[ChangeSite] = None) -> "Decision":
        return cls(allowed=True, change=change)

    @classmethod
    def deny(cls, denial: DenialReason, reason: str) -> "Decision":
        return cls(allowed=False, reason=reason, denial=denial)

    @property
    def retryable(self) -> bool:
        return self.denial in RETRYABLE_REASONS
