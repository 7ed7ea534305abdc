"""Tests for ApprovalTask decoding and conversion."""

import pytest
from pydantic import ValidationError

from approvalgate.api.schemas.admission import UserInfo
from approvalgate.api.schemas.approvaltask import (
    ApprovalTask,
    decode_approval_task,
    requester_from,
)
from approvalgate.core.approval import ApproverType, TaskStatus


class TestDecodeApprovalTask:
    """Test decoding raw object bodies."""

    def test_decode_full_task(self, approval_task):
        """Test decoding a complete ApprovalTask."""
        task = decode_approval_task(approval_task)

        assert task.kind == "ApprovalTask"
        assert task.metadata["name"] == "deploy-prod"
        assert task.spec.number_of_approvals_required == 2
        assert [a.name for a in task.spec.approvers] == ["alice", "qa"]
        assert task.spec.approvers[1].users[0].name == "dave"

    @pytest.mark.parametrize("body", [None, {}])
    def test_absent_body(self, body):
        """Test that an absent body decodes to an empty task."""
        task = decode_approval_task(body)
        assert task == ApprovalTask()
        assert task.to_task_state().approvers == ()

    def test_unknown_nested_field(self, approval_task):
        """Test that unknown fields deep in the spec are rejected."""
        approval_task["spec"]["approvers"][1]["users"][0]["note"] = "hi"

        with pytest.raises(ValidationError) as exc_info:
            decode_approval_task(approval_task)
        assert "unknown field(s): note" in str(exc_info.value)

    def test_metadata_is_free_form(self, approval_task):
        """Test that arbitrary metadata keys are accepted."""
        approval_task["metadata"]["labels"] = {"team": "release"}
        approval_task["metadata"]["managedFields"] = [{"manager": "kubectl"}]

        assert decode_approval_task(approval_task).metadata["labels"] == {"team": "release"}

    def test_lenient_decoding(self, approval_task):
        """Test that unknown fields are dropped when strict decoding is off."""
        approval_task["spec"]["priority"] = "high"

        task = decode_approval_task(approval_task, disallow_unknown_fields=False)

        assert task.spec.number_of_approvals_required == 2

    def test_status_fields(self, approval_task):
        """Test decoding of the full status block."""
        approval_task["status"].update({
            "startTime": "2026-10-01T09:30:00Z",
            "approvalsRequired": 2,
            "approvalsReceived": 1,
            "approversResponse": [{"name": "alice", "type": "User", "response": "approved"}],
        })

        task = decode_approval_task(approval_task)

        assert task.status.start_time == "2026-10-01T09:30:00Z"
        assert task.status.approvals_received == 1


class TestToTaskState:
    """Test conversion into engine snapshots."""

    def test_approvers(self, approval_task):
        """Test approver entries and member lists."""
        state = decode_approval_task(approval_task).to_task_state()

        alice, qa = state.approvers
        assert alice.type is ApproverType.USER
        assert alice.input == "pending"
        assert alice.members == ()
        assert qa.type is ApproverType.GROUP
        assert [m.name for m in qa.members] == ["dave"]

    def test_unset_type_is_user(self, approval_task):
        """Test that approvers without a type are users."""
        del approval_task["spec"]["approvers"][0]["type"]

        state = decode_approval_task(approval_task).to_task_state()

        assert state.approvers[0].type is ApproverType.USER

    def test_counts_responses(self, approval_task):
        """Test that responses received come from approversResponse."""
        approval_task["status"]["approversResponse"] = [{"name": "alice"}, {"name": "qa"}]
        approval_task["status"]["approvalsReceived"] = 0

        state = decode_approval_task(approval_task).to_task_state()

        assert state.approvals_received == 2
        assert state.approvals_required == 2
        assert state.is_closed

    def test_state(self, approval_task):
        """Test mapping of the task-level state."""
        approval_task["status"]["state"] = "approved"
        assert decode_approval_task(approval_task).to_task_state().state is TaskStatus.APPROVED

        approval_task["status"]["state"] = ""
        assert decode_approval_task(approval_task).to_task_state().state is TaskStatus.PENDING


class TestRequesterFrom:
    """Test building requesters from userInfo."""

    def test_requester(self):
        """Test username and groups are carried over."""
        info = UserInfo.model_validate({
            "username": "carol",
            "uid": "42",
            "groups": ["qa", "system:authenticated"],
        })

        requester = requester_from(info)

        assert requester.username == "carol"
        assert requester.groups == frozenset({"qa", "system:authenticated"})
