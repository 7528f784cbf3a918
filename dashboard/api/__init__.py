"""
Remote API access layer.

Provides:
- ServiceGateway: Abstract contract for the remote service collection
- HttpServiceGateway: httpx-based implementation
- Typed errors surfaced to the store
"""

from dashboard.api.errors import (
    DashboardError,
    GatewayError,
    NotFoundError,
    ValidationError,
)
from dashboard.api.gateway import ServiceGateway
from dashboard.api.client import HttpServiceGateway

__all__ = [
    # Errors
    "DashboardError",
    "GatewayError",
    "NotFoundError",
    "ValidationError",
    # Gateways
    "ServiceGateway",
    "HttpServiceGateway",
]
