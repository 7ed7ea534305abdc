"""Admission decision engine for approval task updates.

Every proposed update is judged against the task as it stood before the
write. An update is admitted only when it records exactly one decision and
that decision belongs to the requester:

    closed task?           -> deny (task closed)
    requester not listed?  -> deny (not an approver)
    change has bad value?  -> deny (invalid input)
    no own change found?   -> deny (scope violation)
    anyone else changed?   -> deny (scope violation)
    otherwise              -> allow

The engine holds no state, so it is safe to call from any number of
concurrent request handlers.
"""

import logging

from .decision import (
    Decision,
    DenialReason,
    InvalidInputError,
    NOT_AN_APPROVER_MESSAGE,
    SCOPE_VIOLATION_MESSAGE,
    TASK_CLOSED_MESSAGE,
)
from .eligibility import is_eligible
from .isolation import only_requester_changed
from .locator import locate_change
from .types import Requester, TaskState

logger = logging.getLogger(__name__)


def decide(old: TaskState, new: TaskState, requester: Requester) -> Decision:
    """Decide whether the requester may move the task from old to new.

    Args:
        old: Task state before the update
        new: Proposed task state
        requester: Authenticated identity and group snapshot

    Returns:
        Decision; denials carry the message to return to the API server
    """
    if not is_eligible(old, requester):
        if old.is_closed:
            return Decision.deny(DenialReason.TASK_CLOSED, TASK_CLOSED_MESSAGE)
        return Decision.deny(DenialReason.NOT_AN_APPROVER, NOT_AN_APPROVER_MESSAGE)

    try:
        site = locate_change(old.approvers, new.approvers, requester)
    except InvalidInputError as e:
        return Decision.deny(DenialReason.INVALID_INPUT, f"Invalid input change: {e}")

    if not site.found:
        logger.debug("No change attributed to %s", requester.username)
        return Decision.deny(DenialReason.SCOPE_VIOLATION, SCOPE_VIOLATION_MESSAGE)

    if not only_requester_changed(old.approvers, new.approvers, requester):
        return Decision.deny(DenialReason.SCOPE_VIOLATION, SCOPE_VIOLATION_MESSAGE)

    logger.debug("Located %s for %s", site.describe(), requester.username)
    return Decision.allow(site)
