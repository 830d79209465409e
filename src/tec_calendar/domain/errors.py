from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .models import ValidationErrorRecord


class CalendarError(Exception):
    """Base class for every failure surfaced by the adapter."""


class ClientInputError(CalendarError):
    """Raised when the outer request shape is malformed."""


class MissingFieldError(CalendarError):
    """Raised when a creation request lacks a required field."""

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class RecordedValidationError(CalendarError):
    status_code = 400
    code = "rest_invalid_param"

    def __init__(self, message: str, records: Iterable[ValidationErrorRecord]) -> None:
        super().__init__(message)
        self.records: List[ValidationErrorRecord] = list(records)

    @property
    def details(self) -> Dict[str, Any]:
        return {"invalid_fields": [record.to_dict() for record in self.records]}


class DateFormatError(RecordedValidationError):
    """One or more date fields could not be normalized."""

    code = "invalid_date_format"


class SchemaValidationError(RecordedValidationError):
    """The transformed payload failed structural validation."""

    code = "invalid_payload"


class DependencyFetchError(CalendarError):
    """The related event needed to compute defaults could not be loaded."""

    def __init__(self, event_id: Any, cause: Any) -> None:
        reason = str(cause) if cause else "Unknown error"
        super().__init__(f"Failed to fetch event {event_id}: {reason}")
        self.event_id = event_id
        self.cause = cause


class GatewayError(CalendarError):
    """Base class for failures at the remote backend boundary."""


class TransportError(GatewayError):
    """Connectivity failure while talking to the backend."""


class ApiError(GatewayError):
    """The backend answered with an error payload."""

    def __init__(
        self,
        message: str,
        status_code: int,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.details = details

    @classmethod
    def from_wp_error(cls, error: Dict[str, Any], status_code: int = 400) -> "ApiError":
        data = error.get("data") if isinstance(error.get("data"), dict) else {}
        status = data.get("status") or status_code
        error_cls: type[ApiError] = cls
        if status in (401, 403):
            error_cls = AuthError
        elif status == 404:
            error_cls = NotFoundError
        return error_cls(
            str(error.get("message") or f"Request failed with status {status}"),
            status,
            error.get("code"),
            data.get("details"),
        )


class AuthError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


def format_error(error: BaseException) -> str:
    """Render an exception as the single line returned to tool callers."""

    if isinstance(error, ApiError):
        suffix = f" ({error.code})" if error.code else ""
        return f"Error {error.status_code}: {error}{suffix}"
    if isinstance(error, RecordedValidationError):
        fields = ", ".join(f"{record.field}: {record.value!r}" for record in error.records)
        message = f"Error {error.status_code}: {error} ({error.code})"
        return f"{message} [{fields}]" if fields else message
    if isinstance(error, Exception) and str(error):
        return f"Error: {error}"
    return "An unknown error occurred"
