from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol

from ..domain import PostType
from .dates import parse_wall_clock


class TicketStore(Protocol):
    async def get_post(self, post_type: PostType, post_id: int) -> Dict[str, Any]:
        ...

    async def update_post(self, post_type: PostType, post_id: int, payload: Mapping[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(slots=True)
class EndDateCapper:
    """Pull a freshly created ticket's sale end back to its event's start.

    Only applies when the caller did not choose ``end_date`` themselves, and
    never fails the creation it follows.
    """

    gateway: TicketStore
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    async def apply(self, raw_data: Mapping[str, Any], created: Any) -> Any:
        if "end_date" in raw_data:
            return created
        try:
            return await self._cap(created)
        except Exception as exc:  # noqa: BLE001
            self.logger.warning("Failed to apply end_date capping after ticket creation: %s", exc)
            return created

    async def _cap(self, created: Any) -> Any:
        if not isinstance(created, dict):
            return created
        ticket_id = created.get("id")
        event_id: Optional[Any] = created.get("event_id") or created.get("event")
        ticket_end = created.get("end_date")
        if not ticket_id or not event_id or not ticket_end:
            return created

        event = await self.gateway.get_post(PostType.EVENT, event_id)
        event_start_raw = event.get("start_date") if isinstance(event, dict) else None
        if not event_start_raw:
            return created

        event_start = parse_wall_clock(event_start_raw)
        ticket_end_at = parse_wall_clock(ticket_end)
        if event_start is None or ticket_end_at is None:
            self.logger.warning("Unable to parse dates for capping comparison; skipping cap.")
            return created
        if ticket_end_at <= event_start:
            return created

        self.logger.info("Capping ticket end_date (%s) to event start (%s)", ticket_end, event_start_raw)
        return await self.gateway.update_post(PostType.TICKET, ticket_id, {"end_date": event_start_raw})
