"""Normalization, defaulting and validation applied to entity payloads."""

from __future__ import annotations

from .compensation import EndDateCapper
from .dates import DATE_FIELDS, DateParser, FlexibleDateParser, normalize_date, normalize_date_fields
from .defaults import SaleWindowResolver, needs_sale_window, sale_window_defaults
from .time_info import TimeInfo, local_time_info, server_time_info
from .transforms import reconcile_inventory, transform_fields
from .validation import apply_default_status, require_creation_fields, validate_payload

__all__ = [
    "DATE_FIELDS",
    "DateParser",
    "EndDateCapper",
    "FlexibleDateParser",
    "SaleWindowResolver",
    "TimeInfo",
    "apply_default_status",
    "local_time_info",
    "needs_sale_window",
    "normalize_date",
    "normalize_date_fields",
    "reconcile_inventory",
    "require_creation_fields",
    "sale_window_defaults",
    "server_time_info",
    "transform_fields",
    "validate_payload",
]
