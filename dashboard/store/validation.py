"""
Client-side input validation, run before any gateway call.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from dashboard.api.errors import ValidationError
from dashboard.models import MAX_INTERVAL, MIN_INTERVAL, ServiceInput

M = TypeVar("M", bound=ServiceInput)

_VALUE_ERROR_PREFIX = "Value error, "


def validate_input(data: BaseModel | Mapping[str, Any], model: type[M] = ServiceInput) -> M:
    """
    Validate editable service fields.

    Model instances are re-validated from their field values, so instances
    built with ``model_construct`` cannot bypass the checks.

    Raises:
        ValidationError: On the first invalid field
    """
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise _to_validation_error(e) from e


def validate_interval(value: Any) -> int:
    """Check a bare interval value against the allowed range."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Interval must be a whole number of seconds", field="interval")
    if not MIN_INTERVAL <= value <= MAX_INTERVAL:
        raise ValidationError(
            f"Interval must be between {MIN_INTERVAL} and {MAX_INTERVAL} seconds",
            field="interval",
        )
    return value


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    first = exc.errors()[0]
    loc = first.get("loc") or ()
    field = str(loc[0]) if loc else None
    message = first.get("msg", "Invalid input")
    if message.startswith(_VALUE_ERROR_PREFIX):
        message = message[len(_VALUE_ERROR_PREFIX):]
    elif field:
        message = f"{field}: {message}"
    return ValidationError(message, field=field)
