"""Shared serialization utilities for sinks."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from open_finance.models.base import Event
from open_finance.models.financial.values import Amount


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization.

    Uses ``dataclasses.fields()`` + ``getattr`` rather than ``asdict()`` so
    nested value objects reach :func:`serialize_value` intact.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def event_to_dict(event: Any) -> dict:
    """Serialize a domain event through its envelope."""
    if hasattr(event, "to_envelope"):
        event = event.to_envelope()
    if not isinstance(event, Event):
        return to_dict(event)
    return dataclass_to_dict(event)


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, Amount):
        return {"amount": str(value.value), "currency": value.currency}
    elif is_dataclass(value) and not isinstance(value, type):
        # Single-field value objects (AccountId, BranchCode, ...) collapse to their value
        if [f.name for f in fields(value)] == ["value"]:
            return str(value.value)
        return dataclass_to_dict(value)
    elif isinstance(value, (frozenset, set)):
        return sorted(serialize_value(v) for v in value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value
