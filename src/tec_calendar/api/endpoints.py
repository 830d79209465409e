from __future__ import annotations

from typing import Any, Dict, Optional

from .registry import register_api
from .serializers import serialize_error, serialize_result
from .state import api_state

CREATE_UPDATE_DESCRIPTION = """Create or update a calendar post (Event, Venue, Organizer, or Ticket).

For creating: provide post_type and data. For updating: provide post_type, id, and data.
Required fields on creation: Event (title, start_date, end_date), Venue (title or venue),
Organizer (title or organizer), Ticket (title, event or event_id).

Dates accept "YYYY-MM-DD HH:MM:SS", ISO 8601, or phrases such as "next monday 9am",
"tomorrow 3pm" and "+3 days"; they are always sent as YYYY-MM-DD HH:MM:SS
(sale_price_start_date / sale_price_end_date as YYYY-MM-DD).

FREE TICKETS: omit price instead of sending 0.
TICKET AVAILABILITY: start_date/end_date default to one week before the event and the
event start. Without an explicit end_date the ticket's sale end is capped to the event start.
UNLIMITED TICKETS: set manage_stock to false; stock_mode becomes "unlimited"."""

READ_DESCRIPTION = """Read, list, or search calendar posts.

Get a single post with post_type and id, list posts with post_type (and optional filters),
or search with post_type and query."""


@register_api(
    "calendar_create_update_entity",
    description=CREATE_UPDATE_DESCRIPTION,
    category="calendar",
    tags=("write",),
)
async def calendar_create_update_entity(
    post_type: str,
    data: Dict[str, Any],
    id: Optional[int] = None,
) -> Dict[str, Any]:
    arguments: Dict[str, Any] = {"post_type": post_type, "data": data}
    if id is not None:
        arguments["id"] = id
    try:
        result = await api_state.entities.create_update(arguments)
    except Exception as exc:  # noqa: BLE001
        return serialize_error(exc)
    return serialize_result(result)


@register_api(
    "calendar_read_entity",
    description=READ_DESCRIPTION,
    category="calendar",
    tags=("read",),
)
async def calendar_read_entity(
    post_type: str,
    id: Optional[int] = None,
    query: Optional[str] = None,
    filters: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    arguments: Dict[str, Any] = {"post_type": post_type}
    for key, value in (("id", id), ("query", query), ("filters", filters)):
        if value is not None:
            arguments[key] = value
    try:
        result = await api_state.entities.read(arguments)
    except Exception as exc:  # noqa: BLE001
        return serialize_error(exc)
    return serialize_result(result)


@register_api(
    "calendar_delete_entity",
    description="Delete a post (move to trash, or permanently delete with force=true).",
    category="calendar",
    tags=("write",),
)
async def calendar_delete_entity(post_type: str, id: int, force: bool = False) -> Dict[str, Any]:
    try:
        result = await api_state.entities.delete({"post_type": post_type, "id": id, "force": force})
    except Exception as exc:  # noqa: BLE001
        return serialize_error(exc)
    return serialize_result(result)


@register_api(
    "current_datetime",
    description=(
        "Get the current date and time for the local machine and the WordPress server. "
        "Call this before creating events or filtering by relative dates."
    ),
    category="time",
    tags=("read", "time"),
)
async def current_datetime() -> Dict[str, Any]:
    try:
        result = await api_state.clock.current_datetime()
    except Exception as exc:  # noqa: BLE001
        return serialize_error(exc)
    return serialize_result(result)
