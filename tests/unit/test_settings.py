"""
Unit tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from validate_secrets.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in [
        "WEBHOOK_HOST",
        "WEBHOOK_PORT",
        "TLS_ENABLED",
        "TLS_CERT_FILE",
        "TLS_PRIVATE_KEY_FILE",
        "SAR_TIMEOUT_SECONDS",
        "MAX_REQUEST_BYTES",
        "LOG_LEVEL",
        "JSON_LOGS",
        "METRICS_ENABLED",
    ]:
        monkeypatch.delenv(var, raising=False)


def test_defaults():
    config = Settings()

    assert config.host == "0.0.0.0"
    assert config.port == 8443
    assert config.tls_enabled is True
    assert config.tls_cert_file == "/etc/webhook/cert.pem"
    assert config.tls_private_key_file == "/etc/webhook/key.pem"
    assert config.sar_timeout_seconds == 10.0
    assert config.max_request_bytes == 4 * 1024 * 1024
    assert config.log_level == "INFO"
    assert config.json_logs is True
    assert config.metrics_enabled is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WEBHOOK_PORT", "9443")
    monkeypatch.setenv("TLS_CERT_FILE", "/certs/tls.crt")
    monkeypatch.setenv("TLS_PRIVATE_KEY_FILE", "/certs/tls.key")
    monkeypatch.setenv("SAR_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("JSON_LOGS", "false")
    monkeypatch.setenv("MAX_REQUEST_BYTES", "8388608")

    config = Settings()

    assert config.port == 9443
    assert config.tls_cert_file == "/certs/tls.crt"
    assert config.tls_private_key_file == "/certs/tls.key"
    assert config.sar_timeout_seconds == 2.5
    assert config.json_logs is False
    assert config.max_request_bytes == 8388608


@pytest.mark.parametrize(
    ("var", "value"),
    [
        ("WEBHOOK_PORT", "70000"),
        ("SAR_TIMEOUT_SECONDS", "0"),
        ("MAX_REQUEST_BYTES", "0"),
        ("WEBHOOK_PORT", "x"),
    ],
)
def test_invalid_values_rejected(monkeypatch, var, value):
    monkeypatch.setenv(var, value)

    with pytest.raises(ValidationError):
        Settings()
