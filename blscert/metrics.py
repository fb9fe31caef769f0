"""Prometheus metrics for blscert with standalone HTTP server.

This module defines and exposes all Prometheus metrics used by blscert.
Metrics are served on a separate port using prometheus_client's built-in HTTP server.

Multi-process support:
When running with multiple Granian workers, each process has its own memory space.
Prometheus client supports multi-process mode via files in PROMETHEUS_MULTIPROC_DIR.
This module automatically detects multi-process mode and configures the registry accordingly.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from litestar import Controller, get
from litestar.response import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    generate_latest,
    start_http_server,
)
from prometheus_client.multiprocess import MultiProcessCollector

from . import __version__

if TYPE_CHECKING:
    import threading
    from wsgiref.simple_server import WSGIServer

logger = logging.getLogger(__name__)


def setup_multiproc_dir() -> Path | None:
    """Set up Prometheus multi-process directory if needed.

    Returns:
        Path to the multi-process directory, or None if not needed.
    """
    if "PROMETHEUS_MULTIPROC_DIR" in os.environ:
        multiproc_dir = Path(os.environ["PROMETHEUS_MULTIPROC_DIR"])
        multiproc_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Using existing PROMETHEUS_MULTIPROC_DIR: {multiproc_dir}")
        return multiproc_dir

    workers = int(os.environ.get("BLSCERT_WORKERS", "1"))
    if workers <= 1:
        logger.debug("Single worker mode, no multi-process metrics needed")
        return None

    multiproc_dir = Path(tempfile.gettempdir()) / "blscert_metrics"
    multiproc_dir.mkdir(parents=True, exist_ok=True)
    os.environ["PROMETHEUS_MULTIPROC_DIR"] = str(multiproc_dir)

    logger.info(
        f"Multi-process mode detected ({workers} workers). "
        f"Using PROMETHEUS_MULTIPROC_DIR: {multiproc_dir}"
    )
    return multiproc_dir


def cleanup_multiproc_dir() -> None:
    """Remove metrics files left behind by a previous run.

    This prevents stale counters from leaking into the current run.
    """
    if _MULTIPROC_DIR is None or not _MULTIPROC_DIR.exists():
        return

    for file_path in _MULTIPROC_DIR.glob("*.db"):
        try:
            file_path.unlink()
            logger.debug(f"Cleaned up stale metrics file: {file_path}")
        except OSError as e:
            logger.warning(f"Could not remove stale metrics file {file_path}: {e}")


_MULTIPROC_DIR = setup_multiproc_dir()

REGISTRY = CollectorRegistry()
if _MULTIPROC_DIR is not None:
    # Aggregates metrics written by all worker processes
    MultiProcessCollector(REGISTRY, path=str(_MULTIPROC_DIR))  # type: ignore[no-untyped-call]
    logger.debug("Using MultiProcessCollector for multi-process metrics")

# Worker processes write values to files read by the collector, so metrics
# only register directly in single-process mode
_METRICS_REGISTRY = REGISTRY if _MULTIPROC_DIR is None else None


# Application info
APP_INFO = Info(
    "blscert_build_info",
    "Build information about blscert",
    registry=_METRICS_REGISTRY,
)
APP_INFO.info({"version": __version__, "name": "blscert"})

# BLS operation metrics
BLS_OPERATIONS_TOTAL = Counter(
    "bls_operations_total",
    "Total number of BLS verification and aggregation calls",
    ["operation"],
    registry=_METRICS_REGISTRY,
)

BLS_OPERATION_DURATION_SECONDS = Histogram(
    "bls_operation_duration_seconds",
    "Time spent performing BLS operations",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
    registry=_METRICS_REGISTRY,
)

BLS_FAILURES_TOTAL = Counter(
    "bls_failures_total",
    "Total number of BLS calls that did not succeed, by internal reason",
    ["operation", "reason"],
    registry=_METRICS_REGISTRY,
)

BATCH_SIZE = Histogram(
    "bls_batch_size",
    "Number of signatures or public keys per aggregate call",
    ["operation"],
    buckets=[1, 2, 4, 8, 16, 32, 64, 128, 256, 512, 1024],
    registry=_METRICS_REGISTRY,
)


def get_metrics_output() -> bytes:
    """Generate Prometheus-formatted metrics output."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for Prometheus metrics."""
    return CONTENT_TYPE_LATEST


class MetricsController(Controller):  # type: ignore[misc]
    """Prometheus metrics HTTP endpoints.

    In production, metrics are served on a separate port via the
    standalone metrics server. This controller is used for testing.
    """

    path = "/"

    @get("/metrics")  # type: ignore[untyped-decorator]
    async def metrics(self) -> Response:
        """Handler for the /metrics endpoint."""
        return Response(
            content=get_metrics_output(),
            headers={"Content-Type": get_metrics_content_type()},
        )


class MetricsServer:
    """Standalone Prometheus metrics HTTP server using prometheus_client.start_http_server.

    This runs the metrics endpoint on a separate port from the main API,
    allowing metrics to be scraped independently.
    """

    def __init__(self, host: str = "127.0.0.1", port: int = 8081) -> None:
        self._host = host
        self._port = port
        self._httpd: WSGIServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._httpd is not None

    def start(self) -> None:
        """Start the metrics server in a background daemon thread."""
        try:
            self._httpd, self._thread = start_http_server(
                port=self._port,
                addr=self._host,
                registry=REGISTRY,
            )
        except OSError:
            logger.exception("Failed to start metrics server")
            raise
        logger.info(
            f"Metrics server started at http://{self._host}:{self._port}/metrics",
        )

    def stop(self) -> None:
        """Stop the metrics server."""
        if self._httpd is not None:
            try:
                self._httpd.shutdown()
                self._httpd.server_close()
            except OSError:
                logger.exception("Error stopping metrics server")
            finally:
                self._httpd = None

        if self._thread is not None:
            self._thread.join(timeout=2)
            self._thread = None

        logger.info("Metrics server stopped")
