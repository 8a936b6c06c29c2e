"""Exemptions for built-in workload controllers."""

from validate_secrets.constants import CONTROLLER_SERVICE_ACCOUNTS


def is_controller_identity(username: str) -> bool:
    """
    Check whether a username belongs to a built-in workload controller.

    Pods created by the replicaset, job, statefulset, ... controllers are
    derived from objects that were already admitted, so they skip the
    secret access checks. Matching is exact and case-sensitive; any other
    identity, including other service accounts, is checked in full.

    Args:
        username: Username from the admission request's userInfo

    Returns:
        True if the username is a known controller service account
    """
    return username in CONTROLLER_SERVICE_ACCOUNTS
