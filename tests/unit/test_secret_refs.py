"""
Unit tests for secret reference extraction from pod specs.
"""

from tests.fixtures.admission_resources import (
    ALL_SOURCES_POD,
    ALL_SOURCES_SECRETS,
    PLAIN_POD,
)
from validate_secrets.models import Pod, PodSpec
from validate_secrets.utils.secret_refs import get_secrets_from_pod_spec


def _spec(pod: dict) -> PodSpec:
    return Pod.model_validate(pod).spec


class TestGetSecretsFromPodSpec:
    """Test get_secrets_from_pod_spec ordering and coverage."""

    def test_empty_spec_has_no_secrets(self):
        assert get_secrets_from_pod_spec(PodSpec()) == []

    def test_pod_without_secrets(self):
        assert get_secrets_from_pod_spec(_spec(PLAIN_POD)) == []

    def test_all_sources_in_declaration_order(self):
        """Volumes first, then per container envFrom before env."""
        assert get_secrets_from_pod_spec(_spec(ALL_SOURCES_POD)) == ALL_SOURCES_SECRETS

    def test_duplicates_are_kept(self):
        spec = _spec(
            {
                "spec": {
                    "volumes": [
                        {"name": "a", "secret": {"secretName": "shared"}},
                        {"name": "b", "secret": {"secretName": "shared"}},
                    ]
                }
            }
        )
        assert get_secrets_from_pod_spec(spec) == ["shared", "shared"]

    def test_env_from_before_env_within_container(self):
        spec = _spec(
            {
                "spec": {
                    "containers": [
                        {
                            "name": "app",
                            "env": [
                                {
                                    "name": "K",
                                    "valueFrom": {
                                        "secretKeyRef": {"name": "second", "key": "k"}
                                    },
                                }
                            ],
                            "envFrom": [{"secretRef": {"name": "first"}}],
                        }
                    ]
                }
            }
        )
        assert get_secrets_from_pod_spec(spec) == ["first", "second"]

    def test_containers_keep_their_order(self):
        spec = _spec(
            {
                "spec": {
                    "containers": [
                        {"name": "b", "envFrom": [{"secretRef": {"name": "from-b"}}]},
                        {"name": "a", "envFrom": [{"secretRef": {"name": "from-a"}}]},
                    ]
                }
            }
        )
        assert get_secrets_from_pod_spec(spec) == ["from-b", "from-a"]

    def test_non_secret_sources_are_ignored(self):
        spec = _spec(
            {
                "spec": {
                    "volumes": [{"name": "cm", "configMap": {"name": "cfg"}}],
                    "containers": [
                        {
                            "name": "app",
                            "envFrom": [{"configMapRef": {"name": "cfg"}}],
                            "env": [
                                {
                                    "name": "CM",
                                    "valueFrom": {
                                        "configMapKeyRef": {"name": "cfg", "key": "k"}
                                    },
                                }
                            ],
                        }
                    ],
                }
            }
        )
        assert get_secrets_from_pod_spec(spec) == []

    def test_null_lists_are_treated_as_empty(self):
        spec = _spec(
            {"spec": {"volumes": None, "containers": [{"name": "a", "env": None}]}}
        )
        assert get_secrets_from_pod_spec(spec) == []

    def test_null_spec_and_env_from_are_treated_as_empty(self):
        assert _spec({"spec": None}) == PodSpec()

        spec = _spec(
            {
                "spec": {
                    "containers": [
                        {
                            "name": "a",
                            "envFrom": None,
                            "env": [
                                {
                                    "name": "TOKEN",
                                    "valueFrom": {
                                        "secretKeyRef": {"name": "api-token", "key": "t"}
                                    },
                                }
                            ],
                        }
                    ]
                }
            }
        )
        assert get_secrets_from_pod_spec(spec) == ["api-token"]

    def test_null_optional_sources_stay_unset(self):
        spec = _spec({"spec": {"volumes": [{"name": "v", "secret": None}]}})

        assert spec.volumes[0].secret is None
        assert get_secrets_from_pod_spec(spec) == []
