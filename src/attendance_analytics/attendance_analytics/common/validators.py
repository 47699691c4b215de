from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_param(params: Mapping[str, Any], name: str) -> Any:
    value = params.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Missing required parameter: {name}")
    return value


def require_id(params: Mapping[str, Any], name: str) -> str:
    return str(require_param(params, name)).strip()


def optional_id(params: Mapping[str, Any], name: str) -> Optional[str]:
    value = params.get(name)
    if value is None or not str(value).strip():
        return None
    return str(value).strip()


def require_date(params: Mapping[str, Any], name: str) -> date:
    return _to_date(require_param(params, name), name)


def optional_date(params: Mapping[str, Any], name: str) -> Optional[date]:
    value = params.get(name)
    if value is None or value == "":
        return None
    return _to_date(value, name)


def _to_date(value: Any, name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{name} must be an ISO date (YYYY-MM-DD)")


def require_int(params: Mapping[str, Any], name: str, *, minimum: int) -> int:
    return _to_int(require_param(params, name), name, minimum=minimum)


def optional_int(params: Mapping[str, Any], name: str, *, default: int, minimum: int) -> int:
    value = params.get(name)
    if value is None or value == "":
        return default
    return _to_int(value, name, minimum=minimum)


def _to_int(value: Any, name: str, *, minimum: int) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{name} must be an integer")
    if number != value and not isinstance(value, str):
        raise ValidationError(f"{name} must be an integer")
    if number < minimum:
        raise ValidationError(f"{name} must be >= {minimum}")
    return number


def require_date_order(date_from: Optional[date], date_to: Optional[date]) -> None:
    if date_from and date_to and date_from > date_to:
        raise ValidationError("dateFrom must not be after dateTo")
