"""Tests for application assembly and settings."""

from fastapi.testclient import TestClient

from approvalgate.api.main import create_app, load_webhook_config
from approvalgate.core.config import Settings
from src.common.config import WebhookConfig


class TestSettings:
    """Tests for process settings."""

    def test_defaults(self, monkeypatch):
        """Test default settings."""
        monkeypatch.delenv("APPROVAL_GATE_PORT", raising=False)
        settings = Settings(_env_file=None)

        assert settings.port == 8443
        assert settings.debug is False
        assert not settings.tls_enabled

    def test_env_prefix(self, monkeypatch):
        """Test reading settings from prefixed environment variables."""
        monkeypatch.setenv("APPROVAL_GATE_PORT", "9443")
        monkeypatch.setenv("APPROVAL_GATE_TLS_CERT_FILE", "/certs/tls.crt")
        monkeypatch.setenv("APPROVAL_GATE_TLS_KEY_FILE", "/certs/tls.key")

        settings = Settings(_env_file=None)

        assert settings.port == 9443
        assert settings.tls_enabled


class TestCreateApp:
    """Tests for building the FastAPI application."""

    def test_missing_config_file_uses_defaults(self, tmp_path):
        """Test that a missing config file falls back to defaults."""
        settings = Settings(config_path=str(tmp_path / "missing.yaml"))
        assert load_webhook_config(settings) == WebhookConfig()

    def test_config_file_is_loaded(self, tmp_path):
        """Test building the app from a YAML config file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "path: /gate\n"
            "disallow_unknown_fields: false\n"
            "logging:\n"
            "  console_logging: false\n"
        )

        app = create_app(Settings(config_path=str(config_file)))

        assert app.state.webhook_config.path == "/gate"
        response = TestClient(app).get("/health/ready")
        assert response.json()["checks"]["webhook"]["path"] == "/gate"

    def test_docs_only_in_debug(self, tmp_path, webhook_config):
        """Test that API docs are served only in debug mode."""
        settings = Settings(config_path=str(tmp_path / "missing.yaml"), debug=True)
        app = create_app(settings, webhook_config)

        assert TestClient(app).get("/docs").status_code == 200
