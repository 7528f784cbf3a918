"""
Remote gateway interface.
"""

from abc import ABC, abstractmethod

from dashboard.models import (
    BulkOperationResult,
    BulkUpdateItem,
    NotificationConfig,
    ServiceInput,
    ServiceRecord,
    ServiceStatusReport,
)


class ServiceGateway(ABC):
    """
    Abstract access to the remote collection of monitored services.

    Implementations should:
    - Return parsed Pydantic models
    - Raise GatewayError (or NotFoundError) on any remote failure
    - Treat bulk calls as all-or-nothing: success means every item was
      processed by the server
    """

    @abstractmethod
    async def list_services(self) -> list[ServiceRecord]:
        """Fetch every service, in server order."""
        ...

    @abstractmethod
    async def create(self, data: ServiceInput) -> ServiceRecord:
        """Create a service; the server assigns id and initial status."""
        ...

    @abstractmethod
    async def update(self, service_id: str, data: ServiceInput) -> ServiceRecord:
        ...

    @abstractmethod
    async def delete(self, service_id: str) -> None:
        ...

    @abstractmethod
    async def get_status(self, service_id: str) -> ServiceStatusReport:
        ...

    @abstractmethod
    async def bulk_create(self, items: list[ServiceInput]) -> BulkOperationResult:
        ...

    @abstractmethod
    async def bulk_update(self, items: list[BulkUpdateItem]) -> BulkOperationResult:
        ...

    @abstractmethod
    async def bulk_delete(self, service_ids: list[str]) -> BulkOperationResult:
        ...

    @abstractmethod
    async def get_notification_config(self) -> NotificationConfig:
        ...

    @abstractmethod
    async def update_notification_config(self, config: NotificationConfig) -> None:
        ...

    async def close(self) -> None:
        """Release transport resources."""
        return None
