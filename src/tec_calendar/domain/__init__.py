"""Domain types for calendar entities."""

from __future__ import annotations

from .enums import PostStatus, PostType, StockMode
from .errors import (
    ApiError,
    AuthError,
    CalendarError,
    ClientInputError,
    DateFormatError,
    DependencyFetchError,
    GatewayError,
    MissingFieldError,
    NotFoundError,
    SchemaValidationError,
    TransportError,
    format_error,
)
from .models import EntityResult, TransformResult, ValidationErrorRecord

__all__ = [
    "ApiError",
    "AuthError",
    "CalendarError",
    "ClientInputError",
    "DateFormatError",
    "DependencyFetchError",
    "EntityResult",
    "GatewayError",
    "MissingFieldError",
    "NotFoundError",
    "PostStatus",
    "PostType",
    "SchemaValidationError",
    "StockMode",
    "TransformResult",
    "TransportError",
    "ValidationErrorRecord",
    "format_error",
]
