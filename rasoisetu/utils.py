"""Utility functions for the application."""

from __future__ import annotations

import datetime
from typing import Any


def utc_now() -> datetime.datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def ensure_aware(value: datetime.datetime) -> datetime.datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value


def serialize_value(value: Any) -> Any:
    """Convert Firestore values into JSON-friendly values."""
    if isinstance(value, datetime.datetime):
        return ensure_aware(value).isoformat()
    if isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def first_form_error(form: Any) -> str:
    """Return the first validation message of a WTForms form."""
    for field_name, errors in form.errors.items():
        if errors:
            field = getattr(form, field_name, None)
            label = field.label.text if field is not None else field_name
            return f"{label}: {errors[0]}"
    return "Invalid input."
