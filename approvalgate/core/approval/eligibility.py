"""Eligibility checks: may this requester act on the task at all?"""

from typing import Sequence

from .types import ApproverEntry, Requester, TaskState


def is_listed_approver(approvers: Sequence[ApproverEntry], requester: Requester) -> bool:
    """Check if the requester is designated by any approver entry.

    A User entry matches on name; a Group entry matches when the requester
    belongs to the named group or is listed among its members. An empty
    approver list places no restriction on who may act.
    """
    if not approvers:
        return True
    return any(requester.matches(entry) for entry in approvers)


def is_eligible(task: TaskState, requester: Requester) -> bool:
    """Check if the requester may update the task in its current state."""
    if task.is_closed:
        return False
    return is_listed_approver(task.approvers, requester)
