"""
Unit tests for the admission decision engine.

The SubjectAccessReview API is replaced by a recording access checker so
the number and order of queries can be asserted.
"""

import logging
from unittest.mock import AsyncMock

import pytest

from tests.fixtures.admission_resources import (
    ALL_SOURCES_POD,
    ALL_SOURCES_SECRETS,
    DB_CREDS_POD,
    JOB_CONTROLLER,
    PLAIN_POD,
    RecordingAccessChecker,
    create_request,
    create_review,
    pod_with_volume_secrets,
)
from validate_secrets.constants import CONTROLLER_SERVICE_ACCOUNTS
from validate_secrets.models import AdmissionRequest
from validate_secrets.services.decision_engine import AdmissionDecisionEngine


class TestExemptIdentities:
    """Controller identities skip every check."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username", sorted(CONTROLLER_SERVICE_ACCOUNTS))
    async def test_controller_allowed_without_queries(self, username):
        checker = RecordingAccessChecker(denied={"db-creds"})
        engine = AdmissionDecisionEngine(checker)

        verdict = await engine.decide(create_request(DB_CREDS_POD, username=username))

        assert verdict.allowed is True
        assert checker.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [None, "garbage", {"spec": {"volumes": 1}}])
    async def test_controller_allowed_for_malformed_payload(self, payload):
        checker = RecordingAccessChecker()
        engine = AdmissionDecisionEngine(checker)

        verdict = await engine.decide(
            create_request(payload, username=JOB_CONTROLLER, uid="job-1")
        )

        assert verdict.allowed is True
        assert verdict.uid == "job-1"
        assert checker.calls == []

    @pytest.mark.asyncio
    async def test_controller_allowed_when_oracle_down(self):
        checker = RecordingAccessChecker(failing={"db-creds"})
        engine = AdmissionDecisionEngine(checker)

        verdict = await engine.decide(
            create_request(DB_CREDS_POD, username=JOB_CONTROLLER)
        )

        assert verdict.allowed is True
        assert checker.calls == []

    @pytest.mark.asyncio
    async def test_controller_allowed_for_unsupported_kind(self, engine, access_checker):
        verdict = await engine.decide(
            create_request({}, username=JOB_CONTROLLER, kind="ConfigMap")
        )

        assert verdict.allowed is True
        assert access_checker.calls == []


class TestAllowedRequests:
    """Requests whose secrets are all readable."""

    @pytest.mark.asyncio
    async def test_no_secrets_allowed_without_queries(self, engine, access_checker):
        verdict = await engine.decide(create_request(PLAIN_POD, uid="plain-1"))

        assert verdict.allowed is True
        assert verdict.uid == "plain-1"
        assert verdict.message == ""
        assert access_checker.calls == []

    @pytest.mark.asyncio
    async def test_one_query_per_reference_including_duplicates(
        self, engine, access_checker
    ):
        verdict = await engine.decide(create_request(ALL_SOURCES_POD))

        assert verdict.allowed is True
        assert access_checker.checked_secrets == ALL_SOURCES_SECRETS

    @pytest.mark.asyncio
    async def test_queries_use_identity_and_namespace(self, engine, access_checker):
        await engine.decide(
            create_request(DB_CREDS_POD, username="bob", namespace="staging")
        )

        assert access_checker.calls == [("bob", "staging", "db-creds")]


class TestDeniedRequests:
    """Requests that must be rejected."""

    @pytest.mark.asyncio
    async def test_alice_denied_db_creds(self):
        checker = RecordingAccessChecker(denied={"db-creds"})
        engine = AdmissionDecisionEngine(checker)

        verdict = await engine.decide(
            create_request(DB_CREDS_POD, username="alice", namespace="prod", uid="u-1")
        )

        assert verdict.allowed is False
        assert verdict.uid == "u-1"
        assert "alice" in verdict.message
        assert "db-creds" in verdict.message
        assert "prod" in verdict.message
        assert verdict.code == 403

    @pytest.mark.asyncio
    @pytest.mark.parametrize("denied_index", [0, 1, 2, 3])
    async def test_first_denial_stops_checking(self, denied_index):
        secrets = ["s0", "s1", "s2", "s3"]
        checker = RecordingAccessChecker(denied={secrets[denied_index]})
        engine = AdmissionDecisionEngine(checker)

        verdict = await engine.decide(create_request(pod_with_volume_secrets(*secrets)))

        assert verdict.allowed is False
        assert f'"{secrets[denied_index]}"' in verdict.message
        assert checker.checked_secrets == secrets[: denied_index + 1]

    @pytest.mark.asyncio
    async def test_first_denied_secret_is_reported(self):
        checker = RecordingAccessChecker(denied={"s1", "s2"})
        engine = AdmissionDecisionEngine(checker)

        verdict = await engine.decide(
            create_request(pod_with_volume_secrets("s0", "s1", "s2"))
        )

        assert '"s1"' in verdict.message
        assert '"s2"' not in verdict.message

    @pytest.mark.asyncio
    async def test_unsupported_kind(self, engine, access_checker):
        verdict = await engine.decide(
            create_request({"kind": "ConfigMap"}, kind="ConfigMap", uid="cm-1")
        )

        assert verdict.allowed is False
        assert verdict.uid == "cm-1"
        assert "unsupported kind" in verdict.message
        assert "ConfigMap" in verdict.message
        assert access_checker.calls == []

    @pytest.mark.asyncio
    async def test_malformed_payload(self, engine, access_checker):
        verdict = await engine.decide(
            create_request({"spec": {"volumes": "oops"}}, uid="bad-1")
        )

        assert verdict.allowed is False
        assert verdict.uid == "bad-1"
        assert "could not interpret workload object" in verdict.message
        assert verdict.code == 400
        assert access_checker.calls == []

    @pytest.mark.asyncio
    async def test_oracle_failure_denies(self):
        checker = RecordingAccessChecker(failing={"s1"})
        engine = AdmissionDecisionEngine(checker)

        verdict = await engine.decide(
            create_request(pod_with_volume_secrets("s0", "s1", "s2"), uid="down-1")
        )

        assert verdict.allowed is False
        assert verdict.uid == "down-1"
        assert "checking permissions failed" in verdict.message
        assert verdict.code == 500
        assert checker.checked_secrets == ["s0", "s1"]

    @pytest.mark.asyncio
    async def test_unexpected_error_denies(self):
        checker = AsyncMock()
        checker.check.side_effect = RuntimeError("boom")
        engine = AdmissionDecisionEngine(checker)

        verdict = await engine.decide(create_request(DB_CREDS_POD, uid="boom-1"))

        assert verdict.allowed is False
        assert verdict.uid == "boom-1"
        assert "boom" in verdict.message
        assert verdict.code == 500


class TestDeterminism:
    """Identical inputs and answers give identical verdicts."""

    @pytest.mark.asyncio
    async def test_repeated_decisions_are_identical(self):
        checker = RecordingAccessChecker(denied={"api-token"})
        engine = AdmissionDecisionEngine(checker)
        request = create_request(ALL_SOURCES_POD)

        first = await engine.decide(request)
        second = await engine.decide(request)

        assert first.model_dump_json() == second.model_dump_json()
        assert checker.checked_secrets == [
            "tls-cert",
            "app-env-secret",
            "api-token",
        ] * 2


class TestDecisionLogging:
    """The decision log identifies the object being admitted."""

    @pytest.mark.asyncio
    async def test_object_name_and_dry_run_are_logged(self, engine, caplog):
        raw = create_review(PLAIN_POD, uid="named")["request"]
        raw.update(name="web-0", dryRun=True)

        with caplog.at_level(
            logging.INFO, logger="validate_secrets.services.decision_engine"
        ):
            await engine.decide(AdmissionRequest.model_validate(raw))

        start = next(r for r in caplog.records if hasattr(r, "object_name"))
        assert start.object_name == "web-0"
        assert start.dry_run is True
