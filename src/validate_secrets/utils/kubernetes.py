"""
Kubernetes client configuration for the webhook.

The webhook talks to the API server with its own service account when
running in a pod, and falls back to the local kubeconfig for development.
"""

import logging

from kubernetes import client, config

from validate_secrets.errors import ConfigurationError

logger = logging.getLogger(__name__)


def get_kubernetes_client() -> client.ApiClient:
    """
    Get a configured Kubernetes API client.

    Returns:
        Configured Kubernetes API client

    Raises:
        ConfigurationError: If neither in-cluster nor kubeconfig credentials load
    """
    try:
        # Try in-cluster config first (when running in a pod)
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes configuration")
    except config.ConfigException:
        try:
            # Fall back to local kubeconfig (for development)
            config.load_kube_config()
            logger.info("Loaded kubeconfig from local environment")
        except config.ConfigException as e:
            logger.error(f"Failed to load Kubernetes configuration: {e}")
            raise ConfigurationError(
                f"Unable to load Kubernetes configuration: {e}",
                user_action="Run inside a pod with a service account or provide a kubeconfig",
            ) from e

    return client.ApiClient()
