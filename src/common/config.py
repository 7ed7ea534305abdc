"""Configuration management for the approval gate webhook.

Handles loading and validation of the YAML webhook configuration file:
where the admission endpoint is served, which resource it guards, how
strictly request bodies are decoded, and how logging is set up.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


DEFAULT_CONFIG_PATH = "/etc/approval-gate/config.yaml"
DEFAULT_WEBHOOK_PATH = "/validate-approvaltask"
DEFAULT_LOG_DIR = "/var/log/approval-gate"


@dataclass
class TargetConfig:
    """The resource kind guarded by the webhook."""

    group: str = "openshift-pipelines.org"
    version: str = "v1alpha1"
    kind: str = "ApprovalTask"

    def matches(self, group: str, version: str, kind: str) -> bool:
        return (group, version, kind) == (self.group, self.version, self.kind)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}, Kind={self.kind}"


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    log_dir: str = DEFAULT_LOG_DIR
    file_logging: bool = False
    console_logging: bool = True


@dataclass
class WebhookConfig:
    """Top-level webhook configuration."""

    path: str = DEFAULT_WEBHOOK_PATH
    disallow_unknown_fields: bool = True
    target: TargetConfig = field(default_factory=TargetConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def parse_target_config(target_dict: Dict[str, Any]) -> TargetConfig:
    """Parse the guarded resource section.

    Args:
        target_dict: Target configuration dictionary

    Returns:
        TargetConfig instance
    """
    defaults = TargetConfig()
    return TargetConfig(
        group=target_dict.get("group", defaults.group),
        version=target_dict.get("version", defaults.version),
        kind=target_dict.get("kind", defaults.kind),
    )


def parse_logging_config(logging_dict: Dict[str, Any]) -> LoggingConfig:
    """Parse the logging section.

    Args:
        logging_dict: Logging configuration dictionary

    Returns:
        LoggingConfig instance
    """
    return LoggingConfig(
        level=logging_dict.get("level", "INFO"),
        log_dir=logging_dict.get("log_dir", DEFAULT_LOG_DIR),
        file_logging=logging_dict.get("file_logging", False),
        console_logging=logging_dict.get("console_logging", True),
    )


def parse_config(config_dict: Dict[str, Any]) -> WebhookConfig:
    """Parse the full configuration dictionary.

    Args:
        config_dict: Full configuration dictionary

    Returns:
        WebhookConfig instance

    Raises:
        ValueError: If the webhook path is not absolute
    """
    path = config_dict.get("path", DEFAULT_WEBHOOK_PATH)
    if not isinstance(path, str) or not path.startswith("/"):
        raise ValueError(f"Webhook path must start with '/', got {path!r}")

    return WebhookConfig(
        path=path,
        disallow_unknown_fields=config_dict.get("disallow_unknown_fields", True),
        target=parse_target_config(config_dict.get("target") or {}),
        logging=parse_logging_config(config_dict.get("logging") or {}),
    )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
        TypeError: If the document root is not a mapping
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_file.open("r") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise TypeError(
            f"Configuration root must be a mapping, got {type(config).__name__}"
        )

    return _expand_env_vars(config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in string values."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj


def load_typed_config(config_path: str = DEFAULT_CONFIG_PATH) -> WebhookConfig:
    """Load and parse configuration into typed dataclasses.

    Args:
        config_path: Path to configuration file

    Returns:
        WebhookConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    return parse_config(load_config(config_path))
