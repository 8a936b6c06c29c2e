"""
Prometheus metrics for the secret access webhook.

This module tracks admission decisions and the SubjectAccessReview calls
made while reaching them.
"""

from prometheus_client import CollectorRegistry, Counter, Histogram

# Global metrics registry
_metrics_registry: CollectorRegistry | None = None

ADMISSION_DECISIONS_TOTAL = Counter(
    "validate_secrets_admission_decisions_total",
    "Total number of admission decisions",
    ["result", "reason"],
    registry=None,  # Registered in get_metrics_registry()
)

ACCESS_CHECKS_TOTAL = Counter(
    "validate_secrets_access_checks_total",
    "Total number of SubjectAccessReview checks for secrets",
    ["result"],
    registry=None,
)

ACCESS_CHECK_DURATION = Histogram(
    "validate_secrets_access_check_duration_seconds",
    "Time spent waiting for a SubjectAccessReview response",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
    registry=None,
)


def get_metrics_registry() -> CollectorRegistry:
    """Get or create the global metrics registry."""
    global _metrics_registry

    if _metrics_registry is None:
        _metrics_registry = CollectorRegistry()
        for metric in [
            ADMISSION_DECISIONS_TOTAL,
            ACCESS_CHECKS_TOTAL,
            ACCESS_CHECK_DURATION,
        ]:
            _metrics_registry.register(metric)

    return _metrics_registry


class MetricsCollector:
    """Records webhook metrics."""

    def record_decision(self, allowed: bool, reason: str) -> None:
        """
        Record an admission decision.

        Args:
            allowed: Whether the request was admitted
            reason: Short reason label (exempt, no_secrets, authorized, or an error category)
        """
        ADMISSION_DECISIONS_TOTAL.labels(
            result="allowed" if allowed else "denied", reason=reason
        ).inc()

    def record_access_check(self, result: str, duration: float) -> None:
        """
        Record a SubjectAccessReview round trip.

        Args:
            result: allowed, denied or error
            duration: Round trip duration in seconds
        """
        ACCESS_CHECKS_TOTAL.labels(result=result).inc()
        ACCESS_CHECK_DURATION.observe(duration)


# Global metrics collector instance
metrics_collector = MetricsCollector()
