"""Centralized webhook settings using pydantic-settings.

This module provides a single source of truth for all webhook configuration
loaded from environment variables. Command-line flags override a subset of
these values at startup (see ``validate_secrets.webhook``).
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from validate_secrets.constants import (
    DEFAULT_MAX_REQUEST_BYTES,
    DEFAULT_SAR_TIMEOUT_SECONDS,
    DEFAULT_TLS_CERT_FILE,
    DEFAULT_TLS_PRIVATE_KEY_FILE,
    DEFAULT_WEBHOOK_PORT,
)


class Settings(BaseSettings):
    """Webhook configuration loaded from environment variables.

    All settings have sensible defaults for an in-cluster deployment.
    Override via environment variables as documented per field.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = Field(
        default="0.0.0.0",
        validation_alias="WEBHOOK_HOST",
        description="Host address the webhook server binds to",
    )
    port: int = Field(
        default=DEFAULT_WEBHOOK_PORT,
        ge=0,
        le=65535,
        validation_alias="WEBHOOK_PORT",
        description="Secure port that the webhook listens on",
    )
    max_request_bytes: int = Field(
        default=DEFAULT_MAX_REQUEST_BYTES,
        gt=0,
        validation_alias="MAX_REQUEST_BYTES",
        description="Largest admission review body accepted, in bytes",
    )

    # TLS
    tls_enabled: bool = Field(
        default=True,
        validation_alias="TLS_ENABLED",
        description="Serve over HTTPS (the API server only calls HTTPS webhooks)",
    )
    tls_cert_file: str = Field(
        default=DEFAULT_TLS_CERT_FILE,
        validation_alias="TLS_CERT_FILE",
        description="x509 certificate for HTTPS (CA cert, if any, concatenated after server cert)",
    )
    tls_private_key_file: str = Field(
        default=DEFAULT_TLS_PRIVATE_KEY_FILE,
        validation_alias="TLS_PRIVATE_KEY_FILE",
        description="x509 private key matching the certificate",
    )

    # Authorization checks
    sar_timeout_seconds: float = Field(
        default=DEFAULT_SAR_TIMEOUT_SECONDS,
        gt=0,
        validation_alias="SAR_TIMEOUT_SECONDS",
        description="Request timeout for a single SubjectAccessReview call",
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        validation_alias="JSON_LOGS",
        description="Enable JSON formatted logging for structured log aggregation",
    )
    correlation_ids: bool = Field(
        default=True,
        validation_alias="CORRELATION_IDS",
        description="Tag log lines with the admission request UID",
    )
    log_health_probes: bool = Field(
        default=False,
        validation_alias="LOG_HEALTH_PROBES",
        description="Log readiness, liveness and metrics requests",
    )

    # Metrics
    metrics_enabled: bool = Field(
        default=True,
        validation_alias="METRICS_ENABLED",
        description="Expose Prometheus metrics on /metrics",
    )


# Global settings instance - initialized once at module import
settings = Settings()
