import asyncio
from typing import Any

import pytest

from dashboard.api.errors import DashboardError, NotFoundError
from dashboard.api.gateway import ServiceGateway
from dashboard.models import (
    BulkOperationResult,
    BulkUpdateItem,
    NotificationConfig,
    ServiceInput,
    ServiceRecord,
    ServiceStatus,
    ServiceStatusReport,
)
from dashboard.store.bulk import BulkOperationCoordinator
from dashboard.store.cache import ServiceCache
from dashboard.store.selection import SelectionTracker


def make_record(service_id: str, **fields: Any) -> ServiceRecord:
    data = {
        "id": service_id,
        "name": f"Service {service_id}",
        "url": f"https://{service_id}.example.com",
        "interval": 60,
        "status": "online",
    }
    data.update(fields)
    return ServiceRecord.model_validate(data)


class FakeGateway(ServiceGateway):
    """In-memory server double that records every call."""

    def __init__(self, records: list[ServiceRecord] | None = None):
        self.records: list[ServiceRecord] = list(records or [])
        self.calls: list[tuple[str, Any]] = []
        self.failures: dict[str, DashboardError] = {}
        self.notification_config = NotificationConfig()
        self.bulk_create_echoes = True

        # When set, list_services waits on a future the test resolves
        self.hold_lists = False
        self.pending_lists: list[asyncio.Future] = []
        self._next_id = 100

    def fail(self, method: str, error: DashboardError) -> None:
        self.failures[method] = error

    def called(self, method: str) -> list[Any]:
        return [args for name, args in self.calls if name == method]

    def _enter(self, method: str, args: Any = None) -> None:
        self.calls.append((method, args))
        if method in self.failures:
            raise self.failures[method]

    def _index(self, service_id: str) -> int:
        for index, record in enumerate(self.records):
            if record.id == service_id:
                return index
        raise NotFoundError("service not found")

    async def list_services(self) -> list[ServiceRecord]:
        self._enter("list_services")
        if self.hold_lists:
            future = asyncio.get_running_loop().create_future()
            self.pending_lists.append(future)
            result = await future
            if isinstance(result, Exception):
                raise result
            return list(result)
        return list(self.records)

    async def create(self, data: ServiceInput) -> ServiceRecord:
        self._enter("create", data)
        self._next_id += 1
        record = ServiceRecord(
            id=f"svc-{self._next_id}",
            name=data.name,
            url=data.url,
            interval=data.interval,
            status=ServiceStatus.UNKNOWN,
        )
        self.records.append(record)
        return record

    async def update(self, service_id: str, data: ServiceInput) -> ServiceRecord:
        self._enter("update", (service_id, data))
        index = self._index(service_id)
        record = self.records[index].model_copy(
            update={"name": data.name, "url": data.url, "interval": data.interval}
        )
        self.records[index] = record
        return record

    async def delete(self, service_id: str) -> None:
        self._enter("delete", service_id)
        del self.records[self._index(service_id)]

    async def get_status(self, service_id: str) -> ServiceStatusReport:
        self._enter("get_status", service_id)
        record = self.records[self._index(service_id)]
        return ServiceStatusReport(
            service_id=record.id, status=record.status, response_time=42
        )

    async def bulk_create(self, items: list[ServiceInput]) -> BulkOperationResult:
        self._enter("bulk_create", items)
        created = [await self.create(item) for item in items]
        self.calls = [c for c in self.calls if c[0] != "create"]
        return BulkOperationResult(
            count=len(created), services=created if self.bulk_create_echoes else []
        )

    async def bulk_update(self, items: list[BulkUpdateItem]) -> BulkOperationResult:
        self._enter("bulk_update", items)
        known = {r.id for r in self.records}
        missing = [item.id for item in items if item.id not in known]
        if missing:
            raise NotFoundError("Some services not found", missing_ids=missing)
        for item in items:
            index = self._index(item.id)
            self.records[index] = self.records[index].model_copy(
                update={"name": item.name, "url": item.url, "interval": item.interval}
            )
        return BulkOperationResult(count=len(items))

    async def bulk_delete(self, service_ids: list[str]) -> BulkOperationResult:
        self._enter("bulk_delete", list(service_ids))
        known = {r.id for r in self.records}
        missing = [i for i in service_ids if i not in known]
        if missing:
            raise NotFoundError("Some services not found", missing_ids=missing)
        self.records = [r for r in self.records if r.id not in set(service_ids)]
        return BulkOperationResult(count=len(service_ids))

    async def get_notification_config(self) -> NotificationConfig:
        self._enter("get_notification_config")
        return self.notification_config

    async def update_notification_config(self, config: NotificationConfig) -> None:
        self._enter("update_notification_config", config)
        self.notification_config = config


@pytest.fixture
def records() -> list[ServiceRecord]:
    return [make_record("a"), make_record("b"), make_record("c")]


@pytest.fixture
def gateway(records) -> FakeGateway:
    return FakeGateway(records)


@pytest.fixture
def cache(gateway) -> ServiceCache:
    return ServiceCache(gateway)


@pytest.fixture
def selection(cache) -> SelectionTracker:
    return SelectionTracker(cache)


@pytest.fixture
def bulk(gateway, cache, selection) -> BulkOperationCoordinator:
    return BulkOperationCoordinator(gateway, cache, selection, max_batch_size=100)


@pytest.fixture
async def loaded_cache(cache) -> ServiceCache:
    await cache.refresh()
    return cache
