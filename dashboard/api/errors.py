"""
Dashboard exceptions.

Every error carries a human-readable message suitable for display.
"""


class DashboardError(Exception):
    """Base exception for dashboard sync errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DashboardError):
    """Input rejected on the client before any remote call."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class GatewayError(DashboardError):
    """Remote call failed: network error, timeout or non-2xx response."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(GatewayError):
    """Mutation target does not exist on the server."""

    def __init__(
        self,
        message: str = "service not found",
        missing_ids: list[str] | None = None,
    ):
        self.missing_ids = missing_ids or []
        super().__init__(message, status_code=404)
