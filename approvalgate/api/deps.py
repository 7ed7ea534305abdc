from fastapi import Request

from approvalgate.core.config import Settings
from src.common.config import WebhookConfig


def get_webhook_config(request: Request) -> WebhookConfig:
    """Webhook configuration the running app was built with."""
    return request.app.state.webhook_config


def get_app_settings(request: Request) -> Settings:
    """Process settings the running app was built with."""
    return request.app.state.settings
