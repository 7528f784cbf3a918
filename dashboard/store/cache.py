"""
ServiceCache - the local view of the remote service collection.

Features:
- Wholesale replacement on refresh, stale-but-available on failure
- Local patching after single-record mutations (no refetch)
- Refresh sequence numbers: only the latest issued refresh may apply
- Change listeners notified with the current id set after every change
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from loguru import logger
from pydantic import BaseModel

from dashboard.api.errors import DashboardError, GatewayError, ValidationError
from dashboard.api.gateway import ServiceGateway
from dashboard.models import ServiceRecord, ServiceStatusReport
from dashboard.store.cancellation import CancellationToken
from dashboard.store.validation import validate_input
from dashboard.utils import logged_operation

RecordsListener = Callable[[frozenset[str]], None]
ServiceData = BaseModel | Mapping[str, Any]


class ServiceCache:
    """
    Owns the ordered list of service records plus loading/error flags.

    Records are only ever replaced, appended or removed from a gateway
    response; nothing outside this class writes them.

    Usage:
        cache = ServiceCache(gateway)
        await cache.refresh()
        record = await cache.create({"name": "API", "url": "https://x.com", "interval": 60})
    """

    def __init__(self, gateway: ServiceGateway):
        self._gateway = gateway
        self._records: list[ServiceRecord] = []
        self._listeners: list[RecordsListener] = []

        self.loading = False
        self.error: str | None = None

        # Latest refresh issued; older responses are discarded
        self._refresh_seq = 0
        self._refreshes_in_flight = 0

    @property
    def records(self) -> tuple[ServiceRecord, ...]:
        """Read-only snapshot of the current records, in server order."""
        return tuple(self._records)

    def ids(self) -> frozenset[str]:
        return frozenset(record.id for record in self._records)

    def get(self, service_id: str) -> ServiceRecord | None:
        for record in self._records:
            if record.id == service_id:
                return record
        return None

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, service_id: object) -> bool:
        return any(record.id == service_id for record in self._records)

    def subscribe(self, listener: RecordsListener) -> Callable[[], None]:
        """
        Register a callback run after every change to the record list.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        ids = self.ids()
        for listener in list(self._listeners):
            listener(ids)

    # Remote operations

    async def refresh(self, token: CancellationToken | None = None) -> bool:
        """
        Replace the record list with the gateway's current list.

        Never raises: on failure the message is stored in ``error`` and the
        previous records stay available. A response is dropped when a newer
        refresh has been issued since or ``token`` was cancelled.

        Returns:
            True if the response was applied
        """
        self._refresh_seq += 1
        seq = self._refresh_seq
        self._refreshes_in_flight += 1
        self.loading = True

        try:
            records = await self._gateway.list_services()
        except DashboardError as e:
            if self._is_superseded(seq, token):
                return False
            self.error = e.message
            logger.warning(f"Refresh failed, keeping {len(self._records)} cached services: {e}")
            return False
        finally:
            self._refreshes_in_flight -= 1
            self.loading = self._refreshes_in_flight > 0

        if self._is_superseded(seq, token):
            return False

        self._records = list(records)
        self.error = None
        logger.info(f"Refreshed service list: {len(self._records)} services")
        self._notify()
        return True

    def _is_superseded(self, seq: int, token: CancellationToken | None) -> bool:
        if token is not None and token.cancelled:
            logger.debug(f"Dropping refresh #{seq}: cancelled")
            return True
        if seq != self._refresh_seq:
            logger.warning(f"Discarding refresh #{seq}: refresh #{self._refresh_seq} is newer")
            return True
        return False

    @logged_operation
    async def create(self, data: ServiceData) -> ServiceRecord:
        """
        Validate and create a service, then append it locally.

        Raises:
            ValidationError: If name, url or interval is invalid (no remote call)
            GatewayError: If the server rejects the request
        """
        payload = validate_input(data)
        try:
            record = await self._gateway.create(payload)
        except GatewayError as e:
            self.error = e.message
            raise

        self._records.append(record)
        logger.info(f"Created service {record.id} ({record.name})")
        self._notify()
        return record

    @logged_operation
    async def update(self, service_id: str, data: ServiceData) -> ServiceRecord:
        """
        Validate and update a service, replacing it in place.

        Raises:
            ValidationError: If name, url or interval is invalid (no remote call)
            NotFoundError: If the server does not know ``service_id``
            GatewayError: On any other remote failure
        """
        payload = validate_input(data)
        try:
            record = await self._gateway.update(service_id, payload)
        except GatewayError as e:
            self.error = e.message
            raise

        for index, existing in enumerate(self._records):
            if existing.id == service_id:
                self._records[index] = record
                break
        else:
            logger.warning(f"Updated service {service_id} is not cached; next refresh will add it")
            return record

        logger.info(f"Updated service {service_id}")
        self._notify()
        return record

    @logged_operation
    async def delete(self, service_id: str) -> None:
        """
        Delete a service remotely, then drop it locally.

        Listeners (the selection tracker) are notified so the id leaves the
        selection as well.

        Raises:
            NotFoundError: If the server does not know ``service_id``
            GatewayError: On any other remote failure
        """
        try:
            await self._gateway.delete(service_id)
        except GatewayError as e:
            self.error = e.message
            raise

        self._records = [r for r in self._records if r.id != service_id]
        logger.info(f"Deleted service {service_id}")
        self._notify()

    @logged_operation
    async def bulk_create(self, items: Iterable[ServiceData]) -> list[ServiceRecord]:
        """
        Validate every item, create them in one request and append the results.

        Raises:
            ValidationError: If any item is invalid or the batch is empty
            GatewayError: If the server rejects the batch
        """
        payloads = []
        for index, item in enumerate(items):
            try:
                payloads.append(validate_input(item))
            except ValidationError as e:
                raise ValidationError(f"Service #{index + 1}: {e.message}", field=e.field) from e
        if not payloads:
            raise ValidationError("No services to create")

        try:
            result = await self._gateway.bulk_create(payloads)
        except GatewayError as e:
            self.error = e.message
            raise

        if not result.services:
            # Server confirmed without echoing the records
            await self.refresh()
            return []

        self._records.extend(result.services)
        logger.info(f"Created {len(result.services)} services in bulk")
        self._notify()
        return list(result.services)

    async def status(self, service_id: str) -> ServiceStatusReport:
        """Fetch the latest check outcome for a service; the cache is not touched."""
        return await self._gateway.get_status(service_id)

    # Local operations

    def evict(self, service_ids: Iterable[str]) -> int:
        """
        Remove records whose deletion the gateway has already confirmed.

        Returns:
            Number of records removed
        """
        doomed = set(service_ids)
        before = len(self._records)
        self._records = [r for r in self._records if r.id not in doomed]
        removed = before - len(self._records)
        if removed:
            logger.info(f"Evicted {removed} services from cache")
            self._notify()
        return removed

    def clear_error(self) -> None:
        self.error = None
