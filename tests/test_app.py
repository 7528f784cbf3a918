import httpx

from dashboard.api.client import HttpServiceGateway
from dashboard.app import DashboardStore
from dashboard.settings import Settings

from tests.conftest import make_record


def test_from_settings_builds_http_gateway():
    settings = Settings.model_validate(
        {
            "DASHBOARD_API_URL": "http://monitor.test/api",
            "DASHBOARD_REFRESH_INTERVAL": "15",
            "DASHBOARD_MAX_BULK_SIZE": "10",
        }
    )
    store = DashboardStore.from_settings(settings)

    assert isinstance(store.gateway, HttpServiceGateway)
    assert store.selection is not None
    assert store.scheduler.is_running() is False


def test_settings_defaults():
    settings = Settings()
    assert settings.api_timeout == 10.0
    assert settings.refresh_interval_seconds == 30.0
    assert settings.max_bulk_size == 100


async def test_store_components_share_one_cache(gateway):
    store = DashboardStore(gateway)
    await store.cache.refresh()
    store.selection.select_all()

    await store.bulk.bulk_delete()

    assert len(store.cache) == 0
    assert store.selection.count == 0
    await store.close()


async def test_close_stops_scheduler(gateway):
    store = DashboardStore(gateway)
    store.scheduler.start()

    await store.close()

    assert not store.scheduler.is_running()


async def test_end_to_end_over_http():
    server_records = [make_record("1").to_wire(), make_record("2").to_wire()]

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET" and request.url.path == "/api/services":
            return httpx.Response(200, json=server_records)
        if request.method == "DELETE" and request.url.path == "/api/services/bulk":
            return httpx.Response(200, json={"success": True, "count": 1})
        return httpx.Response(500, json={"error": "unexpected"})

    gateway = HttpServiceGateway("http://monitor.test/api", transport=httpx.MockTransport(handler))
    async with DashboardStore(gateway) as store:
        await store.scheduler.refresh_now()
        store.selection.toggle("1")
        await store.bulk.bulk_delete()

        assert [r.id for r in store.cache.records] == ["2"]
        assert store.selection.count == 0
