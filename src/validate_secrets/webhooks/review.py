"""
AdmissionReview envelope encoding and decoding.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from validate_secrets.constants import (
    ADMISSION_API_VERSION,
    ADMISSION_REVIEW_KIND,
    SUPPORTED_ADMISSION_API_VERSIONS,
)
from validate_secrets.errors import MalformedReviewError
from validate_secrets.models import AdmissionRequest, AdmissionVerdict


class AdmissionReview(BaseModel):
    """Incoming AdmissionReview envelope."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    api_version: str = Field(alias="apiVersion")
    kind: str
    request: AdmissionRequest


def _load_body(body: bytes | str | dict[str, Any]) -> dict[str, Any]:
    if isinstance(body, dict):
        return body
    try:
        data = json.loads(body)
    except ValueError as e:
        raise MalformedReviewError(f"invalid JSON: {e}", cause=e) from e
    if not isinstance(data, dict):
        raise MalformedReviewError(
            f"expected a JSON object, got {type(data).__name__}"
        )
    return data


def parse_admission_review(body: bytes | str | dict[str, Any]) -> AdmissionReview:
    """
    Decode an AdmissionReview request body.

    Args:
        body: Raw request body or already decoded JSON

    Returns:
        Parsed AdmissionReview

    Raises:
        MalformedReviewError: If the body is not a supported AdmissionReview
    """
    data = _load_body(body)

    if data.get("kind") != ADMISSION_REVIEW_KIND:
        raise MalformedReviewError(f"unexpected kind {data.get('kind')!r}")
    if data.get("apiVersion") not in SUPPORTED_ADMISSION_API_VERSIONS:
        raise MalformedReviewError(
            f"unsupported apiVersion {data.get('apiVersion')!r}"
        )

    try:
        return AdmissionReview.model_validate(data)
    except ValidationError as e:
        raise MalformedReviewError(str(e), cause=e) from e


def recover_request_uid(body: bytes | str | dict[str, Any]) -> str:
    """
    Best-effort extraction of the request UID from a body that failed to parse.

    Returns:
        The UID if one can be found, otherwise an empty string
    """
    try:
        data = _load_body(body)
    except MalformedReviewError:
        return ""
    request = data.get("request")
    if isinstance(request, dict) and isinstance(request.get("uid"), str):
        return request["uid"]
    return ""


def build_admission_review(
    verdict: AdmissionVerdict, api_version: str = ADMISSION_API_VERSION
) -> dict[str, Any]:
    """
    Encode a verdict as an AdmissionReview response.

    Args:
        verdict: Verdict to send back
        api_version: apiVersion of the incoming review, echoed back

    Returns:
        AdmissionReview response document
    """
    if api_version not in SUPPORTED_ADMISSION_API_VERSIONS:
        api_version = ADMISSION_API_VERSION

    response: dict[str, Any] = {
        "uid": verdict.uid,
        "allowed": verdict.allowed,
    }
    if not verdict.allowed:
        status: dict[str, Any] = {"message": verdict.message}
        if verdict.code is not None:
            status["code"] = verdict.code
        response["status"] = status

    return {
        "apiVersion": api_version,
        "kind": ADMISSION_REVIEW_KIND,
        "response": response,
    }
