"""Health check endpoints for the approval gate webhook.

Provides Kubernetes-compatible health probes:
- /health: Basic health check
- /health/live: Liveness probe (is the app running?)
- /health/ready: Readiness probe (is the webhook configured?)
- /health/detailed: Readiness plus process memory usage
"""

from typing import Any, Dict
from datetime import datetime, timezone

import psutil
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from approvalgate import __version__

router = APIRouter(tags=["health"])

# Thresholds
MEMORY_WARNING_PERCENT = 85
MEMORY_CRITICAL_PERCENT = 95


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def check_webhook(request: Request) -> Dict[str, Any]:
    """Check that the admission endpoint has a configuration to serve."""
    config = getattr(request.app.state, "webhook_config", None)
    if config is None:
        return {"status": "unhealthy", "error": "webhook configuration not loaded"}
    return {
        "status": "healthy",
        "path": config.path,
        "target": str(config.target),
    }


def check_memory() -> Dict[str, Any]:
    """Check memory usage."""
    try:
        memory = psutil.virtual_memory()
        rss = psutil.Process().memory_info().rss
    except (psutil.Error, OSError) as e:
        return {
            "status": "unknown",
            "error": str(e),
        }

    percent_used = memory.percent
    status = "healthy"
    if percent_used >= MEMORY_CRITICAL_PERCENT:
        status = "critical"
    elif percent_used >= MEMORY_WARNING_PERCENT:
        status = "warning"

    return {
        "status": status,
        "total_gb": round(memory.total / (1024**3), 2),
        "available_gb": round(memory.available / (1024**3), 2),
        "percent_used": percent_used,
        "process_rss_mb": round(rss / (1024**2), 2),
    }


@router.get("/health")
async def health_check():
    """
    Basic health check endpoint.

    Returns 200 if the application is running.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": _now(),
    }


@router.get("/health/live")
async def liveness_probe():
    """
    Kubernetes liveness probe.

    Returns 200 if the application is running.
    Failure means the container should be restarted.
    """
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "alive",
            "timestamp": _now(),
        },
    )


@router.get("/health/ready")
async def readiness_probe(request: Request):
    """
    Kubernetes readiness probe.

    Returns 200 once the webhook configuration is loaded; 503 otherwise,
    meaning admission traffic should not be routed to this instance.
    """
    checks = {"webhook": check_webhook(request)}
    unhealthy = [name for name, check in checks.items() if check["status"] == "unhealthy"]

    if unhealthy:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "checks": checks,
                "failed": unhealthy,
                "timestamp": _now(),
            },
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "checks": checks,
            "timestamp": _now(),
        },
    )


@router.get("/health/detailed")
async def detailed_health_check(request: Request):
    """
    Detailed health check with webhook and memory checks.
    """
    checks = {
        "webhook": check_webhook(request),
        "memory": check_memory(),
    }

    statuses = [check.get("status", "unknown") for check in checks.values()]

    if "unhealthy" in statuses or "critical" in statuses:
        overall_status = "unhealthy"
        http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    elif "warning" in statuses:
        overall_status = "degraded"
        http_status = status.HTTP_200_OK
    else:
        overall_status = "healthy"
        http_status = status.HTTP_200_OK

    return JSONResponse(
        status_code=http_status,
        content={
            "status": overall_status,
            "version": __version__,
            "checks": checks,
            "timestamp": _now(),
        },
    )
