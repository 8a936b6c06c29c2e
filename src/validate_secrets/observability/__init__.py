"""
Observability utilities for the secret access webhook.

This module provides Prometheus metrics and structured logging
capabilities for production monitoring and troubleshooting.
"""

from .logging import AdmissionLogger, setup_structured_logging
from .metrics import get_metrics_registry, metrics_collector

__all__ = [
    "AdmissionLogger",
    "get_metrics_registry",
    "metrics_collector",
    "setup_structured_logging",
]
