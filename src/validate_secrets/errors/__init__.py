"""
Error handling module for the secret access webhook.

Every error raised while deciding an admission request derives from
``AdmissionDecisionError`` and is converted into a denial at the engine
boundary, so no request is ever left unanswered.
"""

from .webhook_errors import (
    AccessDeniedError,
    AdmissionDecisionError,
    ConfigurationError,
    MalformedPayloadError,
    MalformedReviewError,
    OracleUnreachableError,
    UnsupportedKindError,
    WebhookError,
)

__all__ = [
    "WebhookError",
    "MalformedReviewError",
    "AdmissionDecisionError",
    "UnsupportedKindError",
    "MalformedPayloadError",
    "OracleUnreachableError",
    "AccessDeniedError",
    "ConfigurationError",
]
