import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI

from approvalgate import __version__
from approvalgate.core.config import Settings, get_settings
from approvalgate.api.routers import admission, health
from src.common.config import WebhookConfig, load_typed_config
from src.common.logger import setup_logger

logger = logging.getLogger(__name__)


def load_webhook_config(settings: Settings) -> WebhookConfig:
    """Load the YAML webhook configuration, falling back to defaults."""
    if not Path(settings.config_path).exists():
        return WebhookConfig()
    return load_typed_config(settings.config_path)


def create_app(
    settings: Optional[Settings] = None,
    webhook_config: Optional[WebhookConfig] = None,
) -> FastAPI:
    settings = settings or get_settings()
    webhook_config = webhook_config or load_webhook_config(settings)

    setup_logger("approvalgate", webhook_config.logging, level=settings.log_level)
    logger.info(
        f"Serving admission for {webhook_config.target} on {webhook_config.path} "
        f"(disallow_unknown_fields={webhook_config.disallow_unknown_fields})"
    )

    app = FastAPI(
        title=settings.app_name,
        description="Validating admission webhook for ApprovalTask updates",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.webhook_config = webhook_config

    app.include_router(health.router)
    app.include_router(admission.build_router(webhook_config.path))

    return app


app = create_app()
