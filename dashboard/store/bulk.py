"""
BulkOperationCoordinator - multi-record update and delete.

A bulk request is atomic at the client boundary: success means the server
processed every id in the request, failure means no client-visible state
changed. The cache is never updated speculatively.
"""

from collections.abc import Iterable

from loguru import logger

from dashboard.api.errors import GatewayError, ValidationError
from dashboard.api.gateway import ServiceGateway
from dashboard.models import BulkOperationResult, BulkUpdateItem
from dashboard.store.cache import ServiceCache
from dashboard.store.selection import SelectionTracker
from dashboard.store.validation import validate_input, validate_interval
from dashboard.utils import logged_operation


class BulkOperationCoordinator:
    """
    Applies one mutation to many services with a single gateway request.

    Usage:
        bulk = BulkOperationCoordinator(gateway, cache, selection)
        await bulk.bulk_update_interval(120)
        await bulk.bulk_delete(["svc-1", "svc-2"])
    """

    def __init__(
        self,
        gateway: ServiceGateway,
        cache: ServiceCache,
        selection: SelectionTracker,
        max_batch_size: int = 100,
    ):
        self._gateway = gateway
        self._cache = cache
        self._selection = selection
        self._max_batch_size = max_batch_size

    def _check_batch(self, size: int) -> None:
        if size == 0:
            raise ValidationError("No services selected")
        if size > self._max_batch_size:
            raise ValidationError(
                f"At most {self._max_batch_size} services can be changed at once "
                f"({size} selected)"
            )

    @logged_operation
    async def bulk_update_interval(self, new_interval: int) -> BulkOperationResult:
        """
        Set the check interval of every selected service.

        Each request item carries the record's current name and url plus the
        new interval. On success the cache is refreshed from the server and
        the selection cleared.

        Raises:
            ValidationError: If the interval is out of range, nothing is
                selected, or the selection exceeds the batch limit
            GatewayError: If the server rejects the batch
        """
        validate_interval(new_interval)

        selected = self._selection.selected
        targets = [r for r in self._cache.records if r.id in selected]
        self._check_batch(len(targets))

        items = [
            validate_input(
                {"id": r.id, "name": r.name, "url": r.url, "interval": new_interval},
                model=BulkUpdateItem,
            )
            for r in targets
        ]

        try:
            result = await self._gateway.bulk_update(items)
        except GatewayError as e:
            logger.error(f"Bulk update of {len(items)} services failed: {e}")
            raise

        logger.info(f"Bulk updated interval to {new_interval}s for {len(items)} services")
        await self._cache.refresh()
        self._selection.clear()
        return result

    @logged_operation
    async def bulk_delete(self, service_ids: Iterable[str] | None = None) -> BulkOperationResult:
        """
        Delete many services in one request, then drop them locally.

        Args:
            service_ids: Ids to delete; defaults to the current selection

        Raises:
            ValidationError: If no ids are given or the batch limit is exceeded
            GatewayError: If the server rejects the batch
        """
        if service_ids is None:
            selected = self._selection.selected
            ids = [r.id for r in self._cache.records if r.id in selected]
        else:
            ids = list(dict.fromkeys(service_ids))
        self._check_batch(len(ids))

        try:
            result = await self._gateway.bulk_delete(ids)
        except GatewayError as e:
            logger.error(f"Bulk delete of {len(ids)} services failed: {e}")
            raise

        self._cache.evict(ids)
        self._selection.clear()
        logger.info(f"Bulk deleted {len(ids)} services")
        return result
