"""
Utility modules for the secret access webhook.

This package contains helpers for:
- Kubernetes client configuration
- Secret reference extraction from pod specs
- Controller identity exemptions
- SubjectAccessReview based access checks
"""

from .exemptions import is_controller_identity
from .rbac import SecretAccessChecker
from .secret_refs import get_secrets_from_pod_spec

__all__ = [
    "SecretAccessChecker",
    "get_secrets_from_pod_spec",
    "is_controller_identity",
]
