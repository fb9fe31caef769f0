"""Litestar server setup with Granian ASGI server."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from granian import Granian
from granian.constants import Interfaces
from litestar import Litestar
from litestar.datastructures import State
from litestar.di import Provide

from .ciphersuite import DST
from .config import Config
from .handlers import get_routers
from .verifier import Verifier

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


# Dependency providers for Litestar DI


def provide_verifier(state: State) -> Verifier:
    """Provide Verifier from application state.

    This dependency provider allows handlers to receive Verifier
    via dependency injection instead of accessing request.app.state directly.
    """
    result: Verifier = state["verifier"]
    return result


def provide_config(state: State) -> Config:
    """Provide Config from application state."""
    result: Config = state["config"]
    return result


def create_app(
    config: Config | None = None,
    verifier: Verifier | None = None,
) -> Litestar:
    """Create and configure the Litestar application."""
    if config is None:
        config = Config()
    if verifier is None:
        verifier = Verifier()

    @asynccontextmanager
    async def lifespan(_app: Litestar) -> AsyncGenerator[None]:
        """Lifespan context manager for startup/shutdown."""
        logger.info(f"Starting blscert server (DST={DST.decode('ascii')})")
        yield
        logger.info("Stopping blscert server")

    return Litestar(
        route_handlers=get_routers(),
        lifespan=[lifespan],
        debug=False,
        state=State(
            {
                "config": config,
                "verifier": verifier,
            },
        ),
        dependencies={
            "verifier": Provide(provide_verifier, sync_to_thread=False),
            "config": Provide(provide_config, sync_to_thread=False),
        },
    )


def run_server(config: Config) -> None:
    """Run the Litestar server with Granian."""
    logger.info(f"Starting blscert on {config.host}:{config.port} with {config.workers} worker(s)")

    # Workers read this at import time to pick multi-process metrics mode
    os.environ["BLSCERT_WORKERS"] = str(config.workers)

    from . import asgi
    from .metrics import MetricsServer, cleanup_multiproc_dir

    asgi.store_config_in_env(config)

    server = Granian(
        target="blscert.asgi:app",
        address=config.host,
        port=config.port,
        interface=Interfaces.ASGI,
        workers=config.workers,
        log_level=config.log_level.lower(),
    )

    # Clean up any stale metrics files before starting
    cleanup_multiproc_dir()

    metrics_server: MetricsServer | None = None
    if config.metrics_enabled:
        metrics_server = MetricsServer(host=config.metrics_host, port=config.metrics_port)
        metrics_server.start()

    try:
        server.serve()
    finally:
        if metrics_server is not None:
            metrics_server.stop()
