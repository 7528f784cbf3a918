import pytest
from pydantic import ValidationError as PydanticValidationError

from dashboard.models import (
    NotificationConfig,
    ServiceInput,
    ServiceRecord,
    ServiceStatus,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("online", ServiceStatus.UP),
        ("offline", ServiceStatus.DOWN),
        ("unknown", ServiceStatus.UNKNOWN),
        ("up", ServiceStatus.UP),
        ("DOWN", ServiceStatus.DOWN),
        ("failed", ServiceStatus.UNKNOWN),
        (None, ServiceStatus.UNKNOWN),
    ],
)
def test_status_parsing(raw, expected):
    record = ServiceRecord.model_validate(
        {"id": "1", "name": "A", "url": "https://a.com", "interval": 60, "status": raw}
    )
    assert record.status is expected


def test_zero_last_checked_means_never_checked():
    record = ServiceRecord.model_validate(
        {
            "id": "1",
            "name": "A",
            "url": "https://a.com",
            "interval": 60,
            "lastChecked": "0001-01-01T00:00:00Z",
        }
    )
    assert record.last_checked is None
    assert record.never_checked


def test_missing_last_checked_means_never_checked():
    record = ServiceRecord(id="1", name="A", url="https://a.com", interval=60)
    assert record.never_checked
    assert record.status is ServiceStatus.UNKNOWN


def test_unknown_fields_are_ignored():
    record = ServiceRecord.model_validate(
        {"id": "1", "name": "A", "url": "https://a.com", "interval": 60, "extra": True}
    )
    assert not hasattr(record, "extra")


def test_record_wire_format_uses_camel_case():
    record = ServiceRecord.model_validate(
        {
            "id": "1",
            "name": "A",
            "url": "https://a.com",
            "interval": 60,
            "status": "offline",
            "wentOfflineAt": "2024-05-01T12:00:00Z",
            "consecutiveFailures": 3,
        }
    )
    wire = record.to_wire()
    assert wire["status"] == "offline"
    assert wire["consecutiveFailures"] == 3
    assert "wentOfflineAt" in wire
    assert "lastChecked" not in wire


def test_service_input_rejects_long_name():
    with pytest.raises(PydanticValidationError):
        ServiceInput(name="x" * 101, url="https://a.com", interval=60)


def test_service_input_rejects_whitespace_name():
    with pytest.raises(PydanticValidationError):
        ServiceInput(name="   ", url="https://a.com", interval=60)


def test_service_input_rejects_overlong_url():
    with pytest.raises(PydanticValidationError):
        ServiceInput(name="A", url="https://a.com/" + "p" * 2048, interval=60)


@pytest.mark.parametrize("interval", ["120", 120.0, True])
def test_service_input_interval_must_be_an_int(interval):
    with pytest.raises(PydanticValidationError):
        ServiceInput(name="A", url="https://a.com", interval=interval)


def test_notification_config_defaults():
    config = NotificationConfig()
    assert config.to_wire() == {"userKey": "", "appToken": "", "enabled": False}
