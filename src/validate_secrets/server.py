"""
HTTPS server for the secret access webhook.

Serves the admission endpoint together with readiness, liveness and
Prometheus endpoints on a single aiohttp application.
"""

import logging
import ssl

from aiohttp.web import (
    Application,
    AppRunner,
    Request,
    Response,
    TCPSite,
)
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from validate_secrets.constants import (
    DEFAULT_MAX_REQUEST_BYTES,
    HEALTHZ_PATH,
    METRICS_PATH,
    READYZ_PATH,
    VALIDATE_PATH,
)
from validate_secrets.errors import ConfigurationError
from validate_secrets.observability.metrics import get_metrics_registry
from validate_secrets.webhooks.secret_access import SecretAccessWebhook

logger = logging.getLogger(__name__)


def create_ssl_context(certfile: str, keyfile: str) -> ssl.SSLContext:
    """
    Create the server TLS context.

    Args:
        certfile: x509 certificate (CA cert, if any, concatenated after it)
        keyfile: Private key matching the certificate

    Raises:
        ConfigurationError: If the certificate or key cannot be loaded
    """
    context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    try:
        context.load_cert_chain(certfile=certfile, keyfile=keyfile)
    except (OSError, ssl.SSLError) as e:
        raise ConfigurationError(
            f"Unable to load TLS certificate {certfile} and key {keyfile}: {e}",
            user_action="Mount a valid serving certificate and private key",
        ) from e
    return context


class WebhookServer:
    """aiohttp server for the admission webhook."""

    def __init__(
        self,
        webhook: SecretAccessWebhook,
        port: int = 8443,
        host: str = "0.0.0.0",
        ssl_context: ssl.SSLContext | None = None,
        metrics_enabled: bool = True,
        max_request_bytes: int = DEFAULT_MAX_REQUEST_BYTES,
    ):
        """
        Initialize webhook server.

        Args:
            webhook: Handler for admission reviews
            port: Port to listen on
            host: Host interface to bind to
            ssl_context: TLS context; plain HTTP if None
            metrics_enabled: Whether to expose /metrics
            max_request_bytes: Largest request body accepted
        """
        self.webhook = webhook
        self.port = port
        self.host = host
        self.ssl_context = ssl_context
        self.metrics_enabled = metrics_enabled
        self.max_request_bytes = max_request_bytes
        self.app = Application(client_max_size=max_request_bytes)
        self.runner: AppRunner | None = None
        self.site: TCPSite | None = None
        self._setup_routes()

    def _setup_routes(self) -> None:
        """Set up HTTP routes for the webhook server."""
        self.app.router.add_post(VALIDATE_PATH, self.webhook.handle)
        self.app.router.add_get(READYZ_PATH, self._ok_handler)
        self.app.router.add_get(HEALTHZ_PATH, self._ok_handler)
        if self.metrics_enabled:
            self.app.router.add_get(METRICS_PATH, self._metrics_handler)

    async def _ok_handler(self, request: Request) -> Response:
        """Handle readiness and liveness probes."""
        return Response(text="ok")

    async def _metrics_handler(self, request: Request) -> Response:
        """Handle /metrics endpoint for Prometheus scraping."""
        try:
            metrics_data = generate_latest(get_metrics_registry())
            return Response(
                body=metrics_data, headers={"Content-Type": CONTENT_TYPE_LATEST}
            )
        except Exception as e:
            logger.error(f"Failed to generate metrics: {e}")
            return Response(
                text=f"Error generating metrics: {type(e).__name__}. Check logs for details.",
                status=500,
            )

    async def start(self) -> None:
        """Start the webhook server."""
        self.runner = AppRunner(self.app)
        await self.runner.setup()

        self.site = TCPSite(
            self.runner, self.host, self.port, ssl_context=self.ssl_context
        )
        await self.site.start()

        scheme = "https" if self.ssl_context else "http"
        logger.info(f"Webhook server started on {scheme}://{self.host}:{self.port}")
        if self.ssl_context is None:
            logger.warning("TLS disabled, the API server will not call this webhook")

    async def stop(self) -> None:
        """Stop the webhook server."""
        if self.site:
            await self.site.stop()
            self.site = None

        if self.runner:
            await self.runner.cleanup()
            self.runner = None

        logger.info("Webhook server stopped")

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()
