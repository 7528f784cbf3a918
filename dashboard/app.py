"""
DashboardStore - explicitly constructed aggregate of the sync engine.

One instance per session, passed by reference to whatever renders or
drives the dashboard.
"""

from loguru import logger

from dashboard.api.client import HttpServiceGateway
from dashboard.api.gateway import ServiceGateway
from dashboard.scheduler import SyncScheduler
from dashboard.settings import Settings
from dashboard.store.bulk import BulkOperationCoordinator
from dashboard.store.cache import ServiceCache
from dashboard.store.notifications import NotificationSettings
from dashboard.store.selection import SelectionTracker


class DashboardStore:
    """
    Wires one gateway to the cache, selection, bulk coordinator,
    notification settings and refresh scheduler.

    Usage:
        store = DashboardStore.from_settings(global_settings)
        store.scheduler.start()
        ...
        await store.close()
    """

    def __init__(
        self,
        gateway: ServiceGateway,
        refresh_interval_seconds: float = 30.0,
        max_bulk_size: int = 100,
    ):
        self.gateway = gateway
        self.cache = ServiceCache(gateway)
        self.selection = SelectionTracker(self.cache)
        self.bulk = BulkOperationCoordinator(
            gateway, self.cache, self.selection, max_batch_size=max_bulk_size
        )
        self.notifications = NotificationSettings(gateway)
        self.scheduler = SyncScheduler(self.cache, interval_seconds=refresh_interval_seconds)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DashboardStore":
        gateway = HttpServiceGateway(settings.api_url, timeout=settings.api_timeout)
        return cls(
            gateway,
            refresh_interval_seconds=settings.refresh_interval_seconds,
            max_bulk_size=settings.max_bulk_size,
        )

    async def close(self) -> None:
        """Stop the scheduler and release the gateway."""
        if self.scheduler.is_running():
            self.scheduler.stop()
        self.selection.detach()
        await self.gateway.close()
        logger.debug("DashboardStore closed")

    async def __aenter__(self) -> "DashboardStore":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
