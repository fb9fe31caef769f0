"""HTTP route handlers with Litestar.

This package provides controller modules for different API endpoints:
- health: Health check endpoints
- verification: BLS verification and aggregation endpoints
"""

from litestar import Router

from .health import HealthController
from .verification import VerificationController


def get_routers() -> list[Router]:
    """Get all routers for the application."""
    return [
        Router(path="/", route_handlers=[HealthController]),
        Router(path="/", route_handlers=[VerificationController]),
    ]


__all__ = [
    "HealthController",
    "VerificationController",
    "get_routers",
]
