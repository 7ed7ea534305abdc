"""Locate the single approval change a requester made.

Old and new approver lists are paired by index. The scan walks the old list
and stops at the first entry that settles the question:

- a User entry naming the requester always ends the scan, changed or not;
- a Group entry the requester belongs to ends the scan only when one of its
  inputs changed (group input first, then a self-add, then the requester's
  own member input).

Only the first matching entry is ever inspected, so a requester listed both
as a User and inside a Group earlier in the list is judged on the Group.
"""

import logging
from typing import Optional, Sequence

from .types import (
    ApproverEntry,
    ChangeKind,
    ChangeSite,
    NO_CHANGE,
    Requester,
    entry_at,
)
from .validation import validate_input

logger = logging.getLogger(__name__)


def locate_change(
    old: Sequence[ApproverEntry],
    new: Sequence[ApproverEntry],
    requester: Requester,
) -> ChangeSite:
    """Find the change attributed to the requester.

    Args:
        old: Approver list before the update
        new: Proposed approver list
        requester: Identity proposing the update

    Returns:
        The located ChangeSite, or NO_CHANGE

    Raises:
        InvalidInputError: If the requester's changed value is not supported
    """
    for index, approver in enumerate(old):
        counterpart = entry_at(new, index)

        if approver.is_user and approver.name == requester.username:
            return _user_change(index, approver, counterpart)

        if approver.is_group and requester.belongs_to(approver):
            site = _group_change(index, approver, counterpart, requester.username)
            if site.found:
                return site

    return NO_CHANGE


def _user_change(
    index: int,
    old: ApproverEntry,
    new: Optional[ApproverEntry],
) -> ChangeSite:
    if new is None or new.name != old.name or new.input == old.input:
        logger.debug("No input change on user entry approvers[%d]", index)
        return NO_CHANGE

    value = validate_input(new.input)
    return ChangeSite(ChangeKind.USER_INPUT, index=index, value=value)


def _group_change(
    index: int,
    old: ApproverEntry,
    new: Optional[ApproverEntry],
    username: str,
) -> ChangeSite:
    if new is None:
        return NO_CHANGE

    # Group-level input
    if old.input != new.input:
        value = validate_input(new.input)
        return ChangeSite(ChangeKind.GROUP_INPUT, index=index, value=value)

    old_position = old.member_position(username)
    new_position = new.member_position(username)

    # Requester adding themselves to the member list
    if old_position is None and new_position is not None:
        value = validate_input(new.members[new_position].input)
        return ChangeSite(
            ChangeKind.MEMBER_ADDED,
            index=index,
            member_position=new_position,
            value=value,
        )

    # Requester updating their existing member input
    if old_position is not None and new_position is not None:
        old_input = old.members[old_position].input
        new_input = new.members[new_position].input
        if old_input != new_input:
            value = validate_input(new_input)
            return ChangeSite(
                ChangeKind.MEMBER_INPUT,
                index=index,
                member_position=new_position,
                value=value,
            )

    return NO_CHANGE
