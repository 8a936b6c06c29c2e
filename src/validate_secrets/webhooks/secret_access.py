"""
HTTP handler for the secret access admission webhook.
"""

import logging

from aiohttp.web import Request, Response, json_response

from validate_secrets.constants import STATUS_CODE_BAD_REQUEST
from validate_secrets.errors import MalformedReviewError
from validate_secrets.models import AdmissionVerdict
from validate_secrets.services.decision_engine import AdmissionDecisionEngine
from validate_secrets.webhooks.review import (
    build_admission_review,
    parse_admission_review,
    recover_request_uid,
)

logger = logging.getLogger(__name__)


class SecretAccessWebhook:
    """Serves AdmissionReview requests with an AdmissionDecisionEngine."""

    def __init__(self, engine: AdmissionDecisionEngine):
        self.engine = engine

    async def handle(self, request: Request) -> Response:
        """
        Handle ``POST /validate``.

        Always answers with an AdmissionReview, even when the body cannot be
        decoded, so the API server gets a denial instead of a transport error.
        """
        body = await request.read()

        try:
            review = parse_admission_review(body)
        except MalformedReviewError as e:
            logger.error(f"Rejecting undecodable admission review: {e.message}")
            verdict = AdmissionVerdict.deny(
                recover_request_uid(body), e.message, STATUS_CODE_BAD_REQUEST
            )
            return json_response(build_admission_review(verdict))

        verdict = await self.engine.decide(review.request)
        response = build_admission_review(verdict, review.api_version)
        logger.info(f"Sending response: {response}")
        return json_response(response)
