"""Common utilities for the approval gate webhook."""

from .logger import setup_logger, get_logger
from .config import WebhookConfig, load_config, load_typed_config

__all__ = [
    "WebhookConfig",
    "get_logger",
    "load_config",
    "load_typed_config",
    "setup_logger",
]
