"""
Webhook error hierarchy with categorization.

This module defines the error types used throughout the webhook. Each
admission decision error knows the HTTP status code reported back in the
AdmissionReview response, so the engine can turn it into a denial without
inspecting its type.
"""

from validate_secrets.constants import (
    ERROR_CHECKING_PERMISSIONS,
    ERROR_MALFORMED_PAYLOAD,
    ERROR_MALFORMED_REVIEW,
    ERROR_SECRET_ACCESS_DENIED,
    ERROR_UNSUPPORTED_KIND,
    STATUS_CODE_BAD_REQUEST,
    STATUS_CODE_FORBIDDEN,
    STATUS_CODE_INTERNAL_ERROR,
)


class WebhookError(Exception):
    """
    Base error class for all webhook-related exceptions.

    Provides categorization and optional user guidance for resolution.
    """

    def __init__(
        self,
        message: str,
        category: str,
        user_action: str | None = None,
        cause: Exception | None = None,
    ):
        """
        Initialize webhook error.

        Args:
            message: Human-readable error description
            category: Error category (review, kind, payload, oracle, access, configuration)
            user_action: What the user should do to resolve the issue
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.category = category
        self.user_action = user_action
        self.cause = cause

    def __str__(self) -> str:
        """Enhanced string representation with user guidance."""
        base_msg = super().__str__()
        if self.user_action:
            return f"{base_msg}\nAction required: {self.user_action}"
        return base_msg


class MalformedReviewError(WebhookError):
    """The request body is not an AdmissionReview envelope."""

    def __init__(self, reason: str, cause: Exception | None = None):
        super().__init__(
            message=ERROR_MALFORMED_REVIEW.format(reason),
            category="review",
            cause=cause,
        )


class AdmissionDecisionError(WebhookError):
    """Error that ends an admission decision with a denial."""

    code: int = STATUS_CODE_INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        category: str,
        user_action: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(
            message=message, category=category, user_action=user_action, cause=cause
        )


class UnsupportedKindError(AdmissionDecisionError):
    """The workload kind/version has no registered decoder."""

    code = STATUS_CODE_BAD_REQUEST

    def __init__(self, kind: str):
        super().__init__(message=ERROR_UNSUPPORTED_KIND.format(kind), category="kind")
        self.kind = kind


class MalformedPayloadError(AdmissionDecisionError):
    """The raw workload object cannot be decoded into the expected shape."""

    code = STATUS_CODE_BAD_REQUEST

    def __init__(self, kind: str, reason: str, cause: Exception | None = None):
        super().__init__(
            message=ERROR_MALFORMED_PAYLOAD.format(kind, reason),
            category="payload",
            cause=cause,
        )
        self.kind = kind


class OracleUnreachableError(AdmissionDecisionError):
    """A SubjectAccessReview could not be completed."""

    code = STATUS_CODE_INTERNAL_ERROR

    def __init__(self, reason: str, cause: Exception | None = None):
        super().__init__(
            message=ERROR_CHECKING_PERMISSIONS.format(reason),
            category="oracle",
            cause=cause,
        )


class AccessDeniedError(AdmissionDecisionError):
    """The API server denied read access to a referenced secret."""

    code = STATUS_CODE_FORBIDDEN

    def __init__(self, identity: str, secret_name: str, namespace: str):
        super().__init__(
            message=ERROR_SECRET_ACCESS_DENIED.format(identity, secret_name, namespace),
            category="access",
        )
        self.identity = identity
        self.secret_name = secret_name
        self.namespace = namespace


class ConfigurationError(WebhookError):
    """Error in webhook configuration detected at startup."""

    def __init__(self, message: str, user_action: str | None = None):
        super().__init__(
            message=message,
            category="configuration",
            user_action=user_action or "Review and correct configuration",
        )
