"""
RBAC utilities for checking read access to secrets.

This module asks the API server, through a SubjectAccessReview, whether a
user may ``get`` a named secret in a namespace. Every check is a single
round trip: there is no caching, batching or retrying, and a failed call is
reported as an error rather than as an allow or a deny.
"""

import asyncio
import logging
import time

from kubernetes import client
from kubernetes.client.rest import ApiException

from validate_secrets.constants import (
    CORE_API_GROUP,
    SECRET_READ_VERB,
    SECRET_RESOURCE,
)
from validate_secrets.errors import OracleUnreachableError
from validate_secrets.models import AccessVerdict
from validate_secrets.observability.logging import AdmissionLogger
from validate_secrets.observability.metrics import metrics_collector

logger = logging.getLogger(__name__)
admission_logger = AdmissionLogger(__name__)


def build_secret_access_review(
    username: str, namespace: str, secret_name: str
) -> client.V1SubjectAccessReview:
    """
    Build the SubjectAccessReview for reading one secret.

    Group memberships of the user are not included.

    Args:
        username: User to check
        namespace: Namespace containing the secret
        secret_name: Name of the secret

    Returns:
        SubjectAccessReview ready to be created
    """
    return client.V1SubjectAccessReview(
        spec=client.V1SubjectAccessReviewSpec(
            resource_attributes=client.V1ResourceAttributes(
                namespace=namespace,
                verb=SECRET_READ_VERB,
                group=CORE_API_GROUP,
                resource=SECRET_RESOURCE,
                name=secret_name,
            ),
            user=username,
        )
    )


def _record_access_check_metric(result: str, duration: float) -> None:
    metrics_collector.record_access_check(result, duration)


class SecretAccessChecker:
    """Checks secret read access through SubjectAccessReviews."""

    def __init__(
        self,
        api_client: client.ApiClient | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the checker.

        Args:
            api_client: Shared Kubernetes API client (default client if None)
            timeout: Request timeout in seconds for each review
        """
        self.auth_api = client.AuthorizationV1Api(api_client)
        self.timeout = timeout

    def _create_review(
        self, review: client.V1SubjectAccessReview
    ) -> client.V1SubjectAccessReview:
        """Synchronous helper to create a review (runs in thread pool)."""
        if self.timeout is None:
            return self.auth_api.create_subject_access_review(body=review)
        return self.auth_api.create_subject_access_review(
            body=review, _request_timeout=self.timeout
        )

    async def check(
        self, username: str, namespace: str, secret_name: str
    ) -> AccessVerdict:
        """
        Check whether a user may read a secret.

        Args:
            username: User to check
            namespace: Namespace containing the secret
            secret_name: Name of the secret

        Returns:
            AccessVerdict with the API server's answer

        Raises:
            OracleUnreachableError: If the review could not be completed
        """
        review = build_secret_access_review(username, namespace, secret_name)
        start = time.monotonic()

        try:
            result = await asyncio.to_thread(self._create_review, review)
        except ApiException as e:
            duration = time.monotonic() - start
            _record_access_check_metric("error", duration)
            logger.error(
                f"API error checking access to secret {secret_name} in {namespace}: "
                f"{e.status} {e.reason}"
            )
            raise OracleUnreachableError(
                f"API error {e.status}: {e.reason}", cause=e
            ) from e
        except Exception as e:
            duration = time.monotonic() - start
            _record_access_check_metric("error", duration)
            logger.error(
                f"Unexpected error checking access to secret {secret_name} "
                f"in {namespace}: {e}"
            )
            raise OracleUnreachableError(
                f"{type(e).__name__}: {e}", cause=e
            ) from e

        duration = time.monotonic() - start
        status = result.status
        if status is None:
            _record_access_check_metric("error", duration)
            raise OracleUnreachableError("SubjectAccessReview returned no status")

        allowed = bool(status.allowed)
        _record_access_check_metric("allowed" if allowed else "denied", duration)
        admission_logger.log_access_check(
            username, namespace, secret_name, allowed, duration
        )

        if allowed:
            return AccessVerdict(allowed=True)

        reason = status.reason or status.evaluation_error or "Unknown reason"
        return AccessVerdict(allowed=False, reason=reason)
