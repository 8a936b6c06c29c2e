"""
Structured logging utilities for the secret access webhook.

This module provides correlation ID tracking (the admission request UID),
structured log formatting, and audit logging of admission decisions.
"""

import json
import logging
from contextvars import ContextVar
from datetime import UTC, datetime

# Context variable for tracking the admission request being decided
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Paths filtered from the aiohttp access log (probes and scrapes)
ACCESS_LOGGER_NAME = "aiohttp.access"
HEALTH_PROBE_PATHS = frozenset({"/healthz", "/readyz", "/metrics"})

# Record attributes copied into the JSON document when present
STRUCTURED_FIELDS = (
    "namespace",
    "identity",
    "secret_name",
    "kind",
    "operation",
    "object_name",
    "dry_run",
    "result",
    "duration",
    "error_type",
    "audit",
)


class HealthProbeFilter(logging.Filter):
    """
    Access log filter that suppresses health probe and metrics endpoint logs.

    These endpoints are hit frequently by Kubernetes probes and Prometheus,
    generating excessive noise in logs.
    """

    def __init__(self, suppress_health_logs: bool = True):
        super().__init__()
        self.suppress_health_logs = suppress_health_logs

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.suppress_health_logs:
            return True

        message = record.getMessage()
        return all(path not in message for path in HEALTH_PROBE_PATHS)


class CorrelationIDFilter(logging.Filter):
    """Logging filter that adds the correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id.get()
        return True


class StructuredFormatter(logging.Formatter):
    """
    Structured JSON formatter for logs with correlation ID support.

    Formats log records as one JSON document per line for log aggregation.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", ""),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for field in STRUCTURED_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data, default=str)


def set_correlation_id(corr_id: str) -> str:
    """
    Set the correlation ID for the current context.

    Args:
        corr_id: Correlation ID to set

    Returns:
        The correlation ID that was set
    """
    correlation_id.set(corr_id)
    return corr_id


def get_correlation_id() -> str:
    """Get the current correlation ID, or an empty string if none is set."""
    return correlation_id.get("")


def setup_structured_logging(
    log_level: str = "INFO",
    enable_json_formatting: bool = True,
    correlation_id_enabled: bool = True,
    log_health_probes: bool = False,
) -> None:
    """
    Set up structured logging for the webhook.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_json_formatting: Whether to use JSON formatting
        correlation_id_enabled: Whether to tag records with the request UID
        log_health_probes: Whether to log probe and metrics requests
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()

    if enable_json_formatting:
        formatter: logging.Formatter = StructuredFormatter()
    elif correlation_id_enabled:
        formatter = logging.Formatter(
            "%(asctime)s - %(correlation_id)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    handler.setFormatter(formatter)

    if correlation_id_enabled:
        handler.addFilter(CorrelationIDFilter())

    root_logger.addHandler(handler)

    # Only access log lines are matched against probe paths
    access_logger = logging.getLogger(ACCESS_LOGGER_NAME)
    for existing in access_logger.filters[:]:
        if isinstance(existing, HealthProbeFilter):
            access_logger.removeFilter(existing)
    if not log_health_probes:
        access_logger.addFilter(HealthProbeFilter(suppress_health_logs=True))
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Quieten third-party libraries
    logging.getLogger("kubernetes").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("aiohttp.server").setLevel(logging.WARNING)
    logging.getLogger("aiohttp.web").setLevel(logging.WARNING)


class AdmissionLogger:
    """
    Logger for admission decisions with structured fields.

    Denials are emitted as audit events so they can be told apart from
    operational errors in log aggregation.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log_decision_start(
        self,
        uid: str,
        identity: str,
        namespace: str,
        kind: str,
        operation: str,
        object_name: str = "",
        dry_run: bool = False,
    ) -> None:
        """
        Log the start of an admission decision and bind its correlation ID.

        Args:
            uid: Admission request UID, used as correlation ID
            identity: Requesting username
            namespace: Namespace of the workload
            kind: Workload kind
            operation: Admission operation (CREATE, UPDATE, ...)
            object_name: Name of the workload, empty when generated by the server
            dry_run: Whether the request will not be persisted
        """
        set_correlation_id(uid)
        self.logger.info(
            f"Validating secret access of {identity} for {kind} in {namespace}",
            extra={
                "identity": identity,
                "namespace": namespace,
                "kind": kind,
                "operation": operation,
                "object_name": object_name,
                "dry_run": dry_run,
            },
        )

    def log_decision_allowed(
        self, identity: str, namespace: str, reason: str, duration: float
    ) -> None:
        """
        Log an admitted request.

        Args:
            identity: Requesting username
            namespace: Namespace of the workload
            reason: Why the request was admitted
            duration: Decision duration in seconds
        """
        self.logger.info(
            f"Admitted request from {identity} in {namespace} ({reason})",
            extra={
                "identity": identity,
                "namespace": namespace,
                "result": "allowed",
                "duration": duration,
            },
        )

    def log_decision_denied(
        self,
        identity: str,
        namespace: str,
        message: str,
        error: Exception,
        duration: float,
    ) -> None:
        """
        Log a denied request.

        Permission denials are audit events at WARNING level; anything else
        (unreachable API server, malformed input) is logged as an error.

        Args:
            identity: Requesting username
            namespace: Namespace of the workload
            message: Denial message returned to the API server
            error: The error that caused the denial
            duration: Decision duration in seconds
        """
        category = getattr(error, "category", "internal")
        level = logging.WARNING if category == "access" else logging.ERROR
        self.logger.log(
            level,
            f"Denied request from {identity} in {namespace}: {message}",
            extra={
                "identity": identity,
                "namespace": namespace,
                "result": "denied",
                "error_type": type(error).__name__,
                "duration": duration,
                "audit": {
                    "audit_event": "secret_access_denied",
                    "category": category,
                    "timestamp": datetime.now(UTC).isoformat(),
                },
            },
        )

    def log_access_check(
        self,
        identity: str,
        namespace: str,
        secret_name: str,
        allowed: bool,
        duration: float,
    ) -> None:
        """
        Log the outcome of a single SubjectAccessReview.

        Args:
            identity: Username the review was made for
            namespace: Namespace of the secret
            secret_name: Name of the secret
            allowed: Whether read access was granted
            duration: Round trip duration in seconds
        """
        self.logger.debug(
            f"Access to secret {secret_name} in {namespace} for {identity}: "
            f"{'allowed' if allowed else 'denied'}",
            extra={
                "identity": identity,
                "namespace": namespace,
                "secret_name": secret_name,
                "result": "allowed" if allowed else "denied",
                "duration": duration,
            },
        )
