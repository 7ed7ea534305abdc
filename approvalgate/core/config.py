from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional

from src.common.config import DEFAULT_CONFIG_PATH


class Settings(BaseSettings):
    # App
    app_name: str = "Approval Gate Webhook"
    debug: bool = False

    # Webhook configuration file (YAML)
    config_path: str = DEFAULT_CONFIG_PATH

    # Server
    host: str = "0.0.0.0"
    port: int = 8443
    tls_cert_file: Optional[str] = None
    tls_key_file: Optional[str] = None

    @property
    def tls_enabled(self) -> bool:
        return bool(self.tls_cert_file and self.tls_key_file)

    # Logging
    log_level: Optional[str] = None  # overrides the level from the config file

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APPROVAL_GATE_",
        case_sensitive=False,
        extra="ignore"  # Allow extra env vars without raising validation errors
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
