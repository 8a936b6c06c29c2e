"""
Secret reference extraction for pod specs.
"""

from validate_secrets.models.workload import PodSpec


def get_secrets_from_pod_spec(pod_spec: PodSpec) -> list[str]:
    """
    Collect the names of all secrets a pod spec references.

    Secrets are returned in declaration order: volumes first, then for each
    container its envFrom sources followed by its individual env vars.
    Duplicates are kept.

    Args:
        pod_spec: Decoded pod specification

    Returns:
        Secret names in the order they are referenced
    """
    secrets: list[str] = []

    # Secrets mounted as volumes
    for volume in pod_spec.volumes:
        if volume.secret is not None:
            secrets.append(volume.secret.secret_name)

    # Secrets exposed through environment variables
    for container in pod_spec.containers:
        for env_from in container.env_from:
            if env_from.secret_ref is not None:
                secrets.append(env_from.secret_ref.name)

        for env in container.env:
            if env.value_from is None:
                continue
            if env.value_from.secret_key_ref is None:
                continue
            secrets.append(env.value_from.secret_key_ref.name)

    return secrets
