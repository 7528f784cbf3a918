"""
HttpServiceGateway - async HTTP implementation of the remote gateway.

Talks JSON to the uptime monitor's REST API and turns every failure into a
single human-readable message:
- the response body's ``error`` field when the server sent one
- otherwise a transport-level message
"""

from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from dashboard.api.errors import GatewayError, NotFoundError
from dashboard.api.gateway import ServiceGateway
from dashboard.models import (
    BulkOperationResult,
    BulkUpdateItem,
    NotificationConfig,
    ServiceInput,
    ServiceRecord,
    ServiceStatusReport,
)

M = TypeVar("M", bound=BaseModel)


class HttpServiceGateway(ServiceGateway):
    """
    Gateway backed by ``httpx.AsyncClient``.

    Usage:
        async with HttpServiceGateway("http://localhost:8080/api") as gateway:
            services = await gateway.list_services()

    Every call is bounded by ``timeout`` seconds; a timeout is reported as a
    plain GatewayError like any other network failure.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

        # HTTP client (lazy initialization)
        self._http_client: httpx.AsyncClient | None = None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
        return self._http_client

    async def _request(
        self,
        method: str,
        path: str,
        json_data: Any = None,
    ) -> Any:
        """
        Execute a request and return the decoded JSON body.

        Returns None for empty responses (204 No Content).

        Raises:
            NotFoundError: On HTTP 404
            GatewayError: On any other non-2xx status, timeout or network error
        """
        client = await self._get_http_client()
        logger.debug(f"{method} {path}")

        try:
            response = await client.request(method, path, json=json_data)
        except httpx.TimeoutException as e:
            raise GatewayError(
                f"timeout of {int(self._timeout * 1000)}ms exceeded"
            ) from e
        except httpx.RequestError as e:
            raise GatewayError(str(e) or "Network Error") from e

        if response.is_error:
            body = _json_or_none(response)
            message = _error_message(body, response.status_code)
            logger.error(f"{method} {path} failed: HTTP {response.status_code}: {message}")
            if response.status_code == 404:
                missing = body.get("missing_ids") if isinstance(body, dict) else None
                raise NotFoundError(message, missing_ids=missing)
            raise GatewayError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(f"Invalid JSON in response to {method} {path}") from e

    async def list_services(self) -> list[ServiceRecord]:
        data = await self._request("GET", "/services")
        if data is None:
            return []
        if not isinstance(data, list):
            raise GatewayError("Unexpected response payload for ServiceRecord list")
        return [_parse(ServiceRecord, item) for item in data]

    async def create(self, data: ServiceInput) -> ServiceRecord:
        body = await self._request("POST", "/services", data.to_wire())
        return _parse(ServiceRecord, body)

    async def update(self, service_id: str, data: ServiceInput) -> ServiceRecord:
        body = await self._request("PUT", f"/services/{_service_path(service_id)}", data.to_wire())
        return _parse(ServiceRecord, body)

    async def delete(self, service_id: str) -> None:
        await self._request("DELETE", f"/services/{_service_path(service_id)}")

    async def get_status(self, service_id: str) -> ServiceStatusReport:
        body = await self._request("GET", f"/services/{_service_path(service_id)}/status")
        return _parse(ServiceStatusReport, body)

    async def bulk_create(self, items: list[ServiceInput]) -> BulkOperationResult:
        payload = {"services": [item.to_wire() for item in items]}
        body = await self._request("POST", "/services/bulk", payload)
        return _parse(BulkOperationResult, body or {})

    async def bulk_update(self, items: list[BulkUpdateItem]) -> BulkOperationResult:
        payload = {"services": [item.to_wire() for item in items]}
        body = await self._request("PUT", "/services/bulk", payload)
        return _parse(BulkOperationResult, body or {"count": len(items)})

    async def bulk_delete(self, service_ids: list[str]) -> BulkOperationResult:
        payload = {"ids": list(service_ids)}
        body = await self._request("DELETE", "/services/bulk", payload)
        return _parse(BulkOperationResult, body or {"count": len(service_ids)})

    async def get_notification_config(self) -> NotificationConfig:
        body = await self._request("GET", "/notifications/config")
        return _parse(NotificationConfig, body or {})

    async def update_notification_config(self, config: NotificationConfig) -> None:
        await self._request("POST", "/notifications/config", config.to_wire())

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("HttpServiceGateway closed")

    async def __aenter__(self) -> "HttpServiceGateway":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(body: Any, status_code: int) -> str:
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"Request failed with status code {status_code}"


def _parse(model: type[M], body: Any) -> M:
    try:
        return model.model_validate(body)
    except PydanticValidationError as e:
        raise GatewayError(f"Unexpected response payload for {model.__name__}") from e


def _service_path(service_id: str) -> str:
    return quote(service_id, safe="")
