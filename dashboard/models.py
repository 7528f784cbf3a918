"""
Wire and domain models using Pydantic.

Field aliases follow the remote API's camelCase JSON keys; Python code
uses the snake_case attribute names.
"""

from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_INTERVAL = 30
MAX_INTERVAL = 3600
MAX_NAME_LENGTH = 100
MAX_URL_LENGTH = 2048

# Go's zero time.Time, sent for services that were never checked
_ZERO_TIME_YEAR = 1


class ServiceStatus(str, Enum):
    """Health state reported by the server."""

    UP = "online"
    DOWN = "offline"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "ServiceStatus":
        aliases = {
            "up": cls.UP,
            "online": cls.UP,
            "down": cls.DOWN,
            "offline": cls.DOWN,
        }
        if isinstance(value, str):
            return aliases.get(value.lower(), cls.UNKNOWN)
        return cls.UNKNOWN


class WireModel(BaseModel):
    """Base for models exchanged with the remote API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class _CheckedModel(WireModel):
    """Shared parsing of the server's status and check timestamp."""

    status: ServiceStatus = ServiceStatus.UNKNOWN
    last_checked: datetime | None = Field(default=None, alias="lastChecked")

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> ServiceStatus:
        if value is None:
            return ServiceStatus.UNKNOWN
        return ServiceStatus(value)

    @field_validator("last_checked")
    @classmethod
    def _never_if_zero(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.year <= _ZERO_TIME_YEAR:
            return None
        return value


class ServiceRecord(_CheckedModel):
    """One monitored service as returned by the server."""

    id: str
    name: str
    url: str
    interval: int
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    consecutive_failures: int = Field(default=0, alias="consecutiveFailures")
    went_offline_at: datetime | None = Field(default=None, alias="wentOfflineAt")
    last_reminder_at: datetime | None = Field(default=None, alias="lastReminderAt")

    @property
    def never_checked(self) -> bool:
        return self.last_checked is None


class ServiceInput(WireModel):
    """Editable fields sent on create and update."""

    name: str
    url: str
    interval: int = Field(strict=True)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be empty")
        if len(value) > MAX_NAME_LENGTH:
            raise ValueError(f"name must be at most {MAX_NAME_LENGTH} characters")
        return value

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        if len(value) > MAX_URL_LENGTH:
            raise ValueError(f"url must be at most {MAX_URL_LENGTH} characters")
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ValueError("url must be an absolute http(s) URL")
        return value

    @field_validator("interval")
    @classmethod
    def _check_interval(cls, value: int) -> int:
        if not MIN_INTERVAL <= value <= MAX_INTERVAL:
            raise ValueError(
                f"Interval must be between {MIN_INTERVAL} and {MAX_INTERVAL} seconds"
            )
        return value


class BulkUpdateItem(ServiceInput):
    """A single entry of a bulk update request."""

    id: str


class BulkOperationResult(WireModel):
    """Response body of the bulk endpoints."""

    success: bool = True
    count: int = 0
    services: list[ServiceRecord] = Field(default_factory=list)


class ServiceStatusReport(_CheckedModel):
    """Latest check outcome for a single service."""

    service_id: str = Field(alias="serviceId")
    response_time: int = Field(default=0, alias="responseTime")
    error: str | None = None


class NotificationConfig(WireModel):
    """Pushover alerting credentials."""

    user_key: str = Field(default="", alias="userKey")
    app_token: str = Field(default="", alias="appToken")
    enabled: bool = False
