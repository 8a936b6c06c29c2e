#!/usr/bin/env python3
"""
validate-secrets - Main entry point for the secret access admission webhook.

Starts an HTTPS server that answers ValidatingAdmissionWebhook calls. After
deploying it to a cluster, an administrator registers it with a
ValidatingWebhookConfiguration pointing at ``/validate`` for pod creation.

Usage:
    validate-secrets --tls-cert-file /etc/webhook/cert.pem \\
        --tls-private-key-file /etc/webhook/key.pem --port 8443
    # Or as a module:
    python -m validate_secrets.webhook

Environment Variables:
    See ``validate_secrets.settings.Settings``; flags take precedence.
"""

import argparse
import asyncio
import logging
import sys

from validate_secrets import __version__
from validate_secrets.errors import ConfigurationError
from validate_secrets.observability.logging import setup_structured_logging
from validate_secrets.server import WebhookServer, create_ssl_context
from validate_secrets.services.decision_engine import AdmissionDecisionEngine
from validate_secrets.settings import Settings
from validate_secrets.settings import settings as webhook_settings
from validate_secrets.utils.kubernetes import get_kubernetes_client
from validate_secrets.utils.rbac import SecretAccessChecker
from validate_secrets.webhooks.secret_access import SecretAccessWebhook

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags, defaulting to the environment settings."""
    parser = argparse.ArgumentParser(
        prog="validate-secrets",
        description=(
            "Validating admission webhook that rejects pods referencing "
            "secrets the requesting user cannot read."
        ),
    )
    parser.add_argument(
        "--tls-cert-file",
        default=webhook_settings.tls_cert_file,
        help="File containing the x509 certificate for HTTPS "
        "(CA cert, if any, concatenated after server cert)",
    )
    parser.add_argument(
        "--tls-private-key-file",
        default=webhook_settings.tls_private_key_file,
        help="File containing the x509 private key matching --tls-cert-file",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=webhook_settings.port,
        help="Secure port that the webhook listens on",
    )
    parser.add_argument(
        "--host",
        default=webhook_settings.host,
        help="Address to bind to",
    )
    parser.add_argument(
        "--log-level",
        default=webhook_settings.log_level,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        default=not webhook_settings.tls_enabled,
        help="Serve plain HTTP (local testing only)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def apply_args(base: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of the settings with command-line overrides applied."""
    return base.model_copy(
        update={
            "tls_cert_file": args.tls_cert_file,
            "tls_private_key_file": args.tls_private_key_file,
            "port": args.port,
            "host": args.host,
            "log_level": args.log_level,
            "tls_enabled": not args.insecure,
        }
    )


def build_server(config: Settings) -> WebhookServer:
    """
    Wire the webhook components together.

    Raises:
        ConfigurationError: If cluster credentials or TLS material cannot be loaded
    """
    ssl_context = None
    if config.tls_enabled:
        ssl_context = create_ssl_context(
            config.tls_cert_file, config.tls_private_key_file
        )

    checker = SecretAccessChecker(
        api_client=get_kubernetes_client(), timeout=config.sar_timeout_seconds
    )
    engine = AdmissionDecisionEngine(checker)

    return WebhookServer(
        SecretAccessWebhook(engine),
        port=config.port,
        host=config.host,
        ssl_context=ssl_context,
        metrics_enabled=config.metrics_enabled,
        max_request_bytes=config.max_request_bytes,
    )


async def serve(server: WebhookServer) -> None:
    """Run the server until cancelled."""
    async with server:
        await asyncio.Event().wait()


def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for the webhook.

    This function:
    1. Parses flags over the environment settings
    2. Configures logging
    3. Loads cluster credentials and TLS material
    4. Serves admission reviews until interrupted
    """
    config = apply_args(webhook_settings, parse_args(argv))

    setup_structured_logging(
        log_level=config.log_level.upper(),
        enable_json_formatting=config.json_logs,
        correlation_id_enabled=config.correlation_ids,
        log_health_probes=config.log_health_probes,
    )

    try:
        server = build_server(config)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.info("Starting Server")
    try:
        asyncio.run(serve(server))
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Webhook server failed with error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
