"""Approval task snapshot types used by the admission engine.

Approver kinds are modelled as a tagged variant: every entry carries a
``type`` tag and a shared ``input`` field, and only Group entries carry a
member list.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Sequence, Tuple


class ApproverType(str, Enum):
    """Kind of an approver list entry."""

    USER = "User"
    GROUP = "Group"

    @classmethod
    def defaulted(cls, value: Optional[str]) -> "ApproverType":
        """Resolve a raw type string, treating an unset type as User.

        Raises:
            ValueError: If the value names an unknown approver type
        """
        if not value:
            return cls.USER
        return cls(value)


class TaskStatus(str, Enum):
    """Task-level status of an approval task."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: Optional[str]) -> "TaskStatus":
        """Map a raw status string to a TaskStatus; anything unknown is pending."""
        for status in cls:
            if status.value == value:
                return status
        return cls.PENDING


# Terminal task states (no further responses accepted)
TERMINAL_STATUSES: FrozenSet[TaskStatus] = frozenset({
    TaskStatus.APPROVED,
    TaskStatus.REJECTED,
})


@dataclass(frozen=True)
class MemberEntry:
    """An individual's decision recorded inside a Group entry."""

    name: str
    input: str = ""


@dataclass(frozen=True)
class ApproverEntry:
    """One line item of an approval task's approver list."""

    name: str
    type: ApproverType = ApproverType.USER
    input: str = ""
    members: Tuple[MemberEntry, ...] = ()

    @classmethod
    def user(cls, name: str, input: str = "") -> "ApproverEntry":
        return cls(name=name, type=ApproverType.USER, input=input)

    @classmethod
    def group(
        cls,
        name: str,
        members: Iterable[MemberEntry] = (),
        input: str = "",
    ) -> "ApproverEntry":
        return cls(name=name, type=ApproverType.GROUP, input=input, members=tuple(members))

    @property
    def is_user(self) -> bool:
        return self.type is ApproverType.USER

    @property
    def is_group(self) -> bool:
        return self.type is ApproverType.GROUP

    def member_position(self, username: str) -> Optional[int]:
        """Position of the first member with the given name, or None."""
        for position, member in enumerate(self.members):
            if member.name == username:
                return position
        return None

    def member_inputs(self) -> Dict[str, Tuple[str, ...]]:
        """Map member name to its recorded inputs, in list order."""
        inputs: Dict[str, Tuple[str, ...]] = {}
        for member in self.members:
            inputs[member.name] = inputs.get(member.name, ()) + (member.input,)
        return inputs


@dataclass(frozen=True)
class TaskState:
    """Snapshot of an approval task at one point in time."""

    approvers: Tuple[ApproverEntry, ...] = ()
    state: TaskStatus = TaskStatus.PENDING
    approvals_received: int = 0
    approvals_required: int = 0

    @property
    def is_closed(self) -> bool:
        """A closed task is terminal or has collected all required responses."""
        if self.state in TERMINAL_STATUSES:
            return True
        return self.approvals_received == self.approvals_required


def entry_at(approvers: Sequence[ApproverEntry], index: int) -> Optional[ApproverEntry]:
    """Bounds-checked positional access; out of range means absent."""
    if 0 <= index < len(approvers):
        return approvers[index]
    return None


@dataclass(frozen=True)
class Requester:
    """The authenticated actor proposing an update.

    Group memberships are a snapshot captured by the caller; the engine never
    looks them up itself.
    """

    username: str
    groups: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if not isinstance(self.groups, frozenset):
            object.__setattr__(self, "groups", frozenset(self.groups))

    def belongs_to(self, entry: ApproverEntry) -> bool:
        """Check membership in a Group entry by group name or member listing."""
        if entry.name in self.groups:
            return True
        return entry.member_position(self.username) is not None

    def matches(self, entry: ApproverEntry) -> bool:
        """Check whether an approver entry designates this requester."""
        if entry.is_user:
            return entry.name == self.username
        return self.belongs_to(entry)


class ChangeKind(str, Enum):
    """Where a located change sits in the approver list."""

    NONE = "none"
    USER_INPUT = "user_input"          # User entry's input
    GROUP_INPUT = "group_input"        # Group entry's own input
    MEMBER_ADDED = "member_added"      # Requester added themselves to a group
    MEMBER_INPUT = "member_input"      # Existing member's input


@dataclass(frozen=True)
class ChangeSite:
    """The single change attributed to the requester, if any."""

    kind: ChangeKind = ChangeKind.NONE
    index: Optional[int] = None
    member_position: Optional[int] = None
    value: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.kind is not ChangeKind.NONE

    def describe(self) -> str:
        if not self.found:
            return "no change"
        if self.member_position is None:
            return f"{self.kind.value} at approvers[{self.index}] -> {self.value!r}"
        return (
            f"{self.kind.value} at approvers[{self.index}].users[{self.member_position}]"
            f" -> {self.value!r}"
        )


NO_CHANGE = ChangeSite()
