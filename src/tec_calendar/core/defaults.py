from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol

from dateutil.relativedelta import relativedelta

from ..domain import DependencyFetchError, PostType
from .dates import format_datetime, parse_wall_clock
from .transforms import event_reference

# Ticket sales open this long before the event starts unless told otherwise.
SALE_WINDOW_LEAD = relativedelta(days=7)


class EventSource(Protocol):
    async def get_post(self, post_type: PostType, post_id: int) -> Dict[str, Any]:
        ...


def needs_sale_window(post_type: PostType, payload: Mapping[str, Any], *, creating: bool) -> bool:
    if PostType(post_type) is not PostType.TICKET or not creating:
        return False
    return not payload.get("start_date") or not payload.get("end_date")


def sale_window_defaults(event_start: str, payload: Mapping[str, Any]) -> Dict[str, str]:
    """Compute the missing sale-window bounds from the event start.

    Sales end when the event starts and open one calendar week earlier at the
    same wall-clock time.
    """

    defaults: Dict[str, str] = {}
    if not payload.get("end_date"):
        defaults["end_date"] = event_start
    if not payload.get("start_date"):
        start = parse_wall_clock(event_start)
        if start is None:
            raise ValueError(f"event start date {event_start!r} is not a valid timestamp")
        defaults["start_date"] = format_datetime(start - SALE_WINDOW_LEAD)
    return defaults


@dataclass(slots=True)
class SaleWindowResolver:
    """Fill a new ticket's missing sale dates from its parent event."""

    gateway: EventSource
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    async def resolve(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        event_id = event_reference(payload)
        self.logger.debug("Fetching event %s to calculate ticket sale dates", event_id)
        try:
            event = await self.gateway.get_post(PostType.EVENT, event_id)
            event_start: Optional[str] = event.get("start_date") if isinstance(event, dict) else None
            if not event_start:
                raise ValueError(f"Could not fetch event {event_id} or event has no start date")
            defaults = sale_window_defaults(event_start, payload)
        except Exception as exc:  # noqa: BLE001
            self.logger.error("Failed to fetch event %s for ticket date calculation: %s", event_id, exc)
            raise DependencyFetchError(event_id, exc) from exc

        if "end_date" in defaults:
            self.logger.info("Set ticket sale end date to event start: %s", defaults["end_date"])
        if "start_date" in defaults:
            self.logger.info("Set ticket sale start date to 1 week before event: %s", defaults["start_date"])
        return {**payload, **defaults}
