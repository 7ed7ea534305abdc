"""Pytest configuration and shared fixtures."""

import copy

import pytest
from fastapi.testclient import TestClient

from approvalgate.api.main import create_app
from approvalgate.core.config import Settings
from src.common.config import LoggingConfig, WebhookConfig


@pytest.fixture
def webhook_config():
    """Webhook configuration with console-only logging."""
    return WebhookConfig(logging=LoggingConfig(console_logging=False))


@pytest.fixture
def app(tmp_path, webhook_config):
    """Application built from test settings."""
    settings = Settings(config_path=str(tmp_path / "missing.yaml"))
    return create_app(settings=settings, webhook_config=webhook_config)


@pytest.fixture
def client(app):
    """HTTP client for the test application."""
    return TestClient(app)


@pytest.fixture
def approval_task():
    """Pending ApprovalTask body with one user and one group approver."""
    return {
        "apiVersion": "openshift-pipelines.org/v1alpha1",
        "kind": "ApprovalTask",
        "metadata": {"name": "deploy-prod", "namespace": "ci", "resourceVersion": "41"},
        "spec": {
            "approvers": [
                {"name": "alice", "type": "User", "input": "pending"},
                {
                    "name": "qa",
                    "type": "Group",
                    "input": "pending",
                    "users": [{"name": "dave", "input": "pending"}],
                },
            ],
            "numberOfApprovalsRequired": 2,
            "description": "Promote build to production",
        },
        "status": {
            "approvers": ["alice", "qa"],
            "approversResponse": [],
            "state": "pending",
        },
    }


@pytest.fixture
def make_review():
    """Factory for AdmissionReview request envelopes."""

    def _make(old_object, new_object, username, groups=(), uid="req-1", kind=None):
        return {
            "apiVersion": "admission.k8s.io/v1",
            "kind": "AdmissionReview",
            "request": {
                "uid": uid,
                "kind": kind or {
                    "group": "openshift-pipelines.org",
                    "version": "v1alpha1",
                    "kind": "ApprovalTask",
                },
                "resource": {
                    "group": "openshift-pipelines.org",
                    "version": "v1alpha1",
                    "resource": "approvaltasks",
                },
                "name": "deploy-prod",
                "namespace": "ci",
                "operation": "UPDATE",
                "userInfo": {"username": username, "groups": list(groups)},
                "object": new_object,
                "oldObject": old_object,
            },
        }

    return _make


@pytest.fixture
def edit_approver():
    """Factory returning a copy of a task body with one approver's fields replaced."""

    def _edit(task, index, **changes):
        updated = copy.deepcopy(task)
        updated["spec"]["approvers"][index].update(changes)
        return updated

    return _edit
