from __future__ import annotations

from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from ..domain import MissingFieldError, PostStatus, PostType, SchemaValidationError, ValidationErrorRecord
from ..domain.schemas import request_schema_for
from .transforms import event_reference

TICKET_EVENT_REQUIRED = (
    'Tickets must be associated with an event. Please provide either "event" or "event_id" field with the event ID.'
)


def require_creation_fields(post_type: PostType, payload: Mapping[str, Any]) -> None:
    """Reject creation requests that are missing a required field."""

    post_type = PostType(post_type)
    if not payload.get("title"):
        raise MissingFieldError(f"Title is required when creating a new {post_type.value}", field="title")
    if post_type is PostType.EVENT and (not payload.get("start_date") or not payload.get("end_date")):
        missing = "start_date" if not payload.get("start_date") else "end_date"
        raise MissingFieldError("Both start_date and end_date are required when creating an event", field=missing)
    if post_type is PostType.TICKET and event_reference(payload) is None:
        raise MissingFieldError(TICKET_EVENT_REQUIRED, field="event")


def _records(error: ValidationError, payload: Mapping[str, Any]) -> List[ValidationErrorRecord]:
    records = []
    for item in error.errors():
        location = item.get("loc") or ("payload",)
        field = str(location[0])
        value = payload.get(field, item.get("input"))
        records.append(ValidationErrorRecord(field=field, value=str(value)))
    return records


def validate_payload(post_type: PostType, payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Check ``payload`` against the request schema and return the canonical dict."""

    schema = request_schema_for(post_type)
    try:
        model = schema.model_validate(dict(payload))
    except ValidationError as exc:
        records = _records(exc, payload)
        fields = ", ".join(dict.fromkeys(record.field for record in records))
        raise SchemaValidationError(f"Invalid {PostType(post_type).value} data: {fields}", records) from exc
    return model.model_dump(mode="json", exclude_unset=True)


def apply_default_status(payload: Dict[str, Any]) -> Dict[str, Any]:
    if payload.get("status") is None:
        payload["status"] = PostStatus.PUBLISH.value
    return payload
