"""Approval task admission engine.

Decides whether a proposed ApprovalTask update is a legitimate
single-approver action.
"""

from .types import (
    ApproverType,
    TaskStatus,
    MemberEntry,
    ApproverEntry,
    TaskState,
    Requester,
    ChangeKind,
    ChangeSite,
    NO_CHANGE,
)
from .decision import Decision, DenialReason, InvalidInputError
from .validation import ApproverInput, VALID_INPUTS, validate_input
from .eligibility import is_eligible, is_listed_approver
from .locator import locate_change
from .isolation import only_requester_changed
from .engine import decide

__all__ = [
    "ApproverType",
    "TaskStatus",
    "MemberEntry",
    "ApproverEntry",
    "TaskState",
    "Requester",
    "ChangeKind",
    "ChangeSite",
    "NO_CHANGE",
    "Decision",
    "DenialReason",
    "InvalidInputError",
    "ApproverInput",
    "VALID_INPUTS",
    "validate_input",
    "is_eligible",
    "is_listed_approver",
    "locate_change",
    "only_requester_changed",
    "decide",
]
