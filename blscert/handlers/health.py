"""Health check endpoints."""

from litestar import Controller, get

from blscert.ciphersuite import DST

from .base import HealthResponse


class HealthController(Controller):  # type: ignore[misc]
    """Health check endpoints."""

    path = "/"

    @get("/health")  # type: ignore[untyped-decorator]
    async def health(self) -> HealthResponse:
        """Health check endpoint, reporting the domain separation tag in use."""
        return HealthResponse(status="healthy", dst=DST.decode("ascii"))
