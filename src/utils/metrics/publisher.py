"""
Metrics publisher for Prometheus HTTP server.

Starts the HTTP server that exposes metrics on the /metrics endpoint
and publishes application build information.
"""

import logging

from prometheus_client import REGISTRY, CollectorRegistry, Info, start_http_server

from .registry import get_or_create_metric

logger = logging.getLogger(__name__)


class MetricsPublisher:
    """
    Exposes a Prometheus registry over HTTP.
    """

    def __init__(
        self,
        port: int = 9091,
        registry: CollectorRegistry | None = None,
    ):
        """
        Initialize metrics publisher

        Args:
            port: Port to expose metrics on (default: 9091)
            registry: Custom Prometheus registry (default: global REGISTRY)
        """
        self.port = port
        self.registry = registry or REGISTRY
        self._server_started = False

    def start(self) -> None:
        """Start the metrics HTTP server"""
        if self._server_started:
            logger.warning(f"Metrics server already running on port {self.port}")
            return

        try:
            start_http_server(self.port, registry=self.registry)
        except OSError as e:
            raise RuntimeError(
                f"Metrics server could not bind port {self.port}: {e}"
            ) from e

        self._server_started = True
        logger.info(f"Metrics server started on port {self.port}")

    def is_started(self) -> bool:
        return self._server_started


class ApplicationInfo:
    """
    Application metadata exposed as a Prometheus Info metric.
    """

    def __init__(
        self,
        app_name: str = "row-validation",
        version: str = "1.0.0",
        registry: CollectorRegistry | None = None,
    ):
        self.registry = registry or REGISTRY
        self.info = get_or_create_metric(
            lambda: Info("row_validation_application", "Application metadata", registry=self.registry),
            "row_validation_application_info",
            registry=self.registry,
        )
        self.info.info({"name": app_name, "version": version})
