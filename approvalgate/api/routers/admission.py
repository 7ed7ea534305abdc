"""Validating admission endpoint for ApprovalTask updates.

Decodes the AdmissionReview sent by the API server, hands the old and new
task snapshots to the decision engine once, and encodes the verdict back
into an AdmissionReview response.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from approvalgate.api.deps import get_webhook_config
from approvalgate.api.schemas.admission import (
    ADMISSION_KIND,
    AdmissionRequest,
    AdmissionResponse,
    AdmissionReview,
    StatusResult,
)
from approvalgate.api.schemas.approvaltask import decode_approval_task, requester_from
from approvalgate.core.approval import decide
from src.common.config import WebhookConfig

logger = logging.getLogger(__name__)


def build_router(path: str) -> APIRouter:
    """Create the admission router serving POST requests on the given path."""
    router = APIRouter(tags=["admission"])
    router.add_api_route(
        path,
        review_approval_task,
        methods=["POST"],
        response_model=AdmissionReview,
        response_model_exclude_none=True,
    )
    return router


async def review_approval_task(
    review: AdmissionReview,
    config: WebhookConfig = Depends(get_webhook_config),
) -> AdmissionReview:
    """Validate a proposed ApprovalTask update."""
    if review.request is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="AdmissionReview has no request",
        )

    return AdmissionReview(
        api_version=review.api_version,
        kind=ADMISSION_KIND,
        response=admit(review.request, config),
    )


def admit(request: AdmissionRequest, config: WebhookConfig) -> AdmissionResponse:
    """Produce the admission response for a single request."""
    kind = request.kind
    if not config.target.matches(kind.group, kind.version, kind.kind):
        logger.error(
            f"Unhandled kind: {kind.group}/{kind.version}, Kind={kind.kind} "
            f"(expected {config.target})"
        )

    try:
        old_task = decode_approval_task(request.old_object, config.disallow_unknown_fields)
    except ValidationError as e:
        return _error_response(request.uid, f"cannot decode incoming old object: {e}")

    try:
        new_task = decode_approval_task(request.object, config.disallow_unknown_fields)
    except ValidationError as e:
        return _error_response(request.uid, f"cannot decode incoming new object: {e}")

    requester = requester_from(request.user_info)
    decision = decide(old_task.to_task_state(), new_task.to_task_state(), requester)

    if decision.allowed:
        logger.info(
            f"Admitted {request.operation or 'request'} {request.uid} on "
            f"{request.namespace}/{request.name} by {requester.username}: "
            f"{decision.change.describe()}"
        )
        return AdmissionResponse(uid=request.uid, allowed=True)

    logger.info(
        f"Denied {request.operation or 'request'} {request.uid} on "
        f"{request.namespace}/{request.name} by {requester.username} "
        f"({decision.denial.value}): {decision.reason}"
    )
    return AdmissionResponse(
        uid=request.uid,
        allowed=False,
        status=StatusResult(
            status="Failure",
            message=decision.reason,
            code=status.HTTP_403_FORBIDDEN,
        ),
    )


def _error_response(uid: str, message: str) -> AdmissionResponse:
    logger.warning(f"Rejecting {uid}: {message}")
    return AdmissionResponse(
        uid=uid,
        allowed=False,
        status=StatusResult(
            status="Failure",
            message=message,
            code=status.HTTP_400_BAD_REQUEST,
        ),
    )
