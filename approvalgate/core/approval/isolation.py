"""Check that an update touches no decision other than the requester's."""

import logging
from typing import Optional, Sequence

from .types import ApproverEntry, Requester, entry_at

logger = logging.getLogger(__name__)


def only_requester_changed(
    old: Sequence[ApproverEntry],
    new: Sequence[ApproverEntry],
    requester: Requester,
) -> bool:
    """Check that every entry not owned by the requester is unchanged.

    - Every entry keeps its name and type; a renamed entry would carry a
      recorded decision over to a different identity.
    - Another user's entry must keep its input; dropping it from the new
      list counts as a change.
    - A group the requester does not belong to must keep its group input.
    - In any group, existing members other than the requester keep their
      input, and the only name that may appear is the requester's own, and
      only in a group they belong to.
    - Entries appended past the end of the old list carry no decision.

    Args:
        old: Approver list before the update
        new: Proposed approver list
        requester: Identity proposing the update

    Returns:
        True if nothing outside the requester's own decisions changed
    """
    for index, approver in enumerate(old):
        counterpart = entry_at(new, index)

        if counterpart is not None and (
            counterpart.name != approver.name or counterpart.type is not approver.type
        ):
            logger.debug(
                "approvers[%d] changed identity from %s %s to %s %s",
                index, approver.type.value, approver.name,
                counterpart.type.value, counterpart.name,
            )
            return False

        if approver.is_user:
            if approver.name == requester.username:
                continue
            if counterpart is None or counterpart.input != approver.input:
                logger.debug("User entry approvers[%d] (%s) was modified", index, approver.name)
                return False
            continue

        is_member = requester.belongs_to(approver)
        if not is_member and counterpart is not None and counterpart.input != approver.input:
            logger.debug("Group input of approvers[%d] (%s) was modified", index, approver.name)
            return False

        if not _members_untouched(approver, counterpart, requester.username, is_member):
            logger.debug("Member list of approvers[%d] (%s) was modified", index, approver.name)
            return False

    for index, added in enumerate(new[len(old):], start=len(old)):
        if added.input or added.members:
            logger.debug("Appended entry approvers[%d] (%s) carries a decision", index, added.name)
            return False

    return True


def _members_untouched(
    old: ApproverEntry,
    new: Optional[ApproverEntry],
    username: str,
    is_member: bool,
) -> bool:
    old_inputs = old.member_inputs()
    new_inputs = new.member_inputs() if new is not None else {}

    for name, old_records in old_inputs.items():
        if name == username:
            continue
        # members absent from the new list are not compared
        if name in new_inputs and new_inputs[name] != old_records:
            return False

    for name in new_inputs:
        if name in old_inputs:
            continue
        if name != username or not is_member:
            return False

    return True
