"""Shared pytest fixtures for the webhook tests."""

import pytest

from tests.fixtures.admission_resources import RecordingAccessChecker
from validate_secrets.services.decision_engine import AdmissionDecisionEngine


@pytest.fixture
def access_checker() -> RecordingAccessChecker:
    """Access checker that allows every secret."""
    return RecordingAccessChecker()


@pytest.fixture
def engine(access_checker) -> AdmissionDecisionEngine:
    """Decision engine backed by the recording access checker."""
    return AdmissionDecisionEngine(access_checker)
