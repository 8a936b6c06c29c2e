"""
Admission decision engine for secret access.

For each admission request the engine:
1. Admits requests from built-in workload controllers outright
2. Decodes the workload according to its kind
3. Extracts every secret the workload references
4. Checks read access to each secret in order, stopping at the first denial

Any error along the way ends in a denial carrying the request UID, so the
API server always gets an answer and never an implicit allow.
"""

import logging
import time
from typing import Protocol

from validate_secrets.constants import ERROR_INTERNAL, STATUS_CODE_INTERNAL_ERROR
from validate_secrets.errors import AccessDeniedError, AdmissionDecisionError
from validate_secrets.models import AccessVerdict, AdmissionRequest, AdmissionVerdict
from validate_secrets.observability.logging import AdmissionLogger
from validate_secrets.observability.metrics import metrics_collector
from validate_secrets.services.decoders import decode_workload
from validate_secrets.utils.exemptions import is_controller_identity
from validate_secrets.utils.secret_refs import get_secrets_from_pod_spec

logger = logging.getLogger(__name__)

REASON_EXEMPT = "exempt"
REASON_NO_SECRETS = "no_secrets"
REASON_AUTHORIZED = "authorized"


class AccessChecker(Protocol):
    """Anything that can answer "may this user read this secret?"."""

    async def check(
        self, username: str, namespace: str, secret_name: str
    ) -> AccessVerdict: ...


class AdmissionDecisionEngine:
    """Decides whether a workload may be admitted based on its secrets."""

    def __init__(self, access_checker: AccessChecker):
        self.access_checker = access_checker
        self.admission_logger = AdmissionLogger(__name__)

    async def decide(self, request: AdmissionRequest) -> AdmissionVerdict:
        """
        Decide a single admission request.

        Args:
            request: Admission request to decide

        Returns:
            Verdict with the request's UID; denials carry a message and code
        """
        start = time.monotonic()
        self.admission_logger.log_decision_start(
            request.uid,
            request.identity,
            request.namespace,
            str(request.kind),
            request.operation,
            object_name=request.name,
            dry_run=request.dry_run,
        )

        try:
            reason = await self._evaluate(request)
        except AdmissionDecisionError as e:
            return self._deny(request, e, e.message, e.code, start)
        except Exception as e:
            logger.exception(f"Unexpected error validating request {request.uid}")
            return self._deny(
                request,
                e,
                ERROR_INTERNAL.format(e),
                STATUS_CODE_INTERNAL_ERROR,
                start,
            )

        metrics_collector.record_decision(True, reason)
        self.admission_logger.log_decision_allowed(
            request.identity, request.namespace, reason, time.monotonic() - start
        )
        return AdmissionVerdict.allow(request.uid)

    async def _evaluate(self, request: AdmissionRequest) -> str:
        """
        Run the checks for a request.

        Returns:
            Why the request is admitted

        Raises:
            AdmissionDecisionError: If the request must be denied
        """
        # Pods created by controllers were authorized through their owner
        if is_controller_identity(request.identity):
            return REASON_EXEMPT

        pod_spec = decode_workload(request.kind, request.object)

        secrets = get_secrets_from_pod_spec(pod_spec)
        if not secrets:
            return REASON_NO_SECRETS

        # TODO: check the permissions of the user's groups as well.
        for secret in secrets:
            verdict = await self.access_checker.check(
                request.identity, request.namespace, secret
            )
            if not verdict.allowed:
                raise AccessDeniedError(request.identity, secret, request.namespace)

        return REASON_AUTHORIZED

    def _deny(
        self,
        request: AdmissionRequest,
        error: Exception,
        message: str,
        code: int,
        start: float,
    ) -> AdmissionVerdict:
        metrics_collector.record_decision(False, getattr(error, "category", "internal"))
        self.admission_logger.log_decision_denied(
            request.identity,
            request.namespace,
            message,
            error,
            time.monotonic() - start,
        )
        return AdmissionVerdict.deny(request.uid, message, code)
