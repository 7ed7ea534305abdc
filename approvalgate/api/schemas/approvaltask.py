"""ApprovalTask resource schemas and conversion to engine snapshots.

Bodies are validated with an optional ``disallow_unknown_fields`` flag passed
through the pydantic validation context; when set, any key the schema does
not declare is a decode error. ``metadata`` stays free-form.
"""

from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from approvalgate.core.approval import (
    ApproverEntry,
    ApproverType,
    MemberEntry,
    Requester,
    TaskState,
    TaskStatus,
)
from approvalgate.api.schemas.admission import UserInfo


class _ResourceModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _reject_unknown_fields(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict):
            return data
        if not (info.context or {}).get("disallow_unknown_fields"):
            return data

        known = {f.alias or name for name, f in cls.model_fields.items()}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ValueError(f"unknown field(s): {', '.join(unknown)}")
        return data


class ApprovalTaskUser(_ResourceModel):
    name: str = ""
    input: str = ""


class ApprovalTaskApprover(_ResourceModel):
    name: str = ""
    input: str = ""
    type: str = ""
    users: List[ApprovalTaskUser] = Field(default_factory=list)

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        # Raises ValueError for anything but "", "User" or "Group"
        ApproverType.defaulted(value)
        return value

    def to_entry(self) -> ApproverEntry:
        return ApproverEntry(
            name=self.name,
            type=ApproverType.defaulted(self.type),
            input=self.input,
            members=tuple(MemberEntry(name=u.name, input=u.input) for u in self.users),
        )


class ApprovalTaskSpec(_ResourceModel):
    approvers: List[ApprovalTaskApprover] = Field(default_factory=list)
    number_of_approvals_required: int = Field(0, alias="numberOfApprovalsRequired")
    description: Optional[str] = None


class ApprovalTaskStatus(_ResourceModel):
    approvers: List[str] = Field(default_factory=list)
    approvers_response: List[Dict[str, Any]] = Field(default_factory=list, alias="approversResponse")
    state: str = ""
    start_time: Optional[str] = Field(None, alias="startTime")
    approvals_required: Optional[int] = Field(None, alias="approvalsRequired")
    approvals_received: Optional[int] = Field(None, alias="approvalsReceived")


class ApprovalTask(_ResourceModel):
    api_version: str = Field("", alias="apiVersion")
    kind: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)
    spec: ApprovalTaskSpec = Field(default_factory=ApprovalTaskSpec)
    status: ApprovalTaskStatus = Field(default_factory=ApprovalTaskStatus)

    def to_task_state(self) -> TaskState:
        """Snapshot the parts of the task the admission engine reads.

        Responses received are counted from status.approversResponse; the
        threshold comes from spec.numberOfApprovalsRequired.
        """
        return TaskState(
            approvers=tuple(a.to_entry() for a in self.spec.approvers),
            state=TaskStatus.parse(self.status.state),
            approvals_received=len(self.status.approvers_response),
            approvals_required=self.spec.number_of_approvals_required,
        )


def decode_approval_task(
    body: Optional[Dict[str, Any]],
    disallow_unknown_fields: bool = True,
) -> ApprovalTask:
    """Decode a raw object body; an absent body yields an empty task.

    Raises:
        pydantic.ValidationError: If the body does not match the schema
    """
    if not body:
        return ApprovalTask()
    return ApprovalTask.model_validate(
        body,
        context={"disallow_unknown_fields": disallow_unknown_fields},
    )


def requester_from(user_info: UserInfo) -> Requester:
    return Requester(username=user_info.username, groups=frozenset(user_info.groups))
