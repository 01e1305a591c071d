"""Formatting and general-purpose helpers."""

from finance_api.src.utils.formatting import (
    debounce,
    deep_clone,
    format_currency,
    format_date,
    format_datetime,
    generate_id,
    is_empty,
)

__all__ = [
    "debounce",
    "deep_clone",
    "format_currency",
    "format_date",
    "format_datetime",
    "generate_id",
    "is_empty",
]
