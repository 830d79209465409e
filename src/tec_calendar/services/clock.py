from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from ..core import TimeInfo, local_time_info, server_time_info
from ..domain import EntityResult
from .context import ServiceContext

SERVER_TIME_FALLBACK = "Server timezone unavailable (using local time as fallback)"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class ClockService:
    """Reports local and WordPress server time so callers can build dates."""

    context: ServiceContext
    now: Callable[[], datetime] = _utc_now

    def local_time(self, moment: Optional[datetime] = None) -> TimeInfo:
        return local_time_info(moment or self.now())

    async def server_time(self, moment: Optional[datetime] = None) -> TimeInfo:
        """Site time from WordPress settings, or local time when the site is unreachable."""

        moment = moment or self.now()
        try:
            site_info = await self.context.gateway.get_site_info()
            return server_time_info(site_info, moment)
        except Exception as exc:  # noqa: BLE001
            self.context.logger.warning("Failed to get server time, using local time as fallback: %s", exc)
            return replace(self.local_time(moment), timezone=SERVER_TIME_FALLBACK)

    async def current_datetime(self) -> EntityResult:
        moment = self.now()
        local = self.local_time(moment)
        server = await self.server_time(moment)

        local_moment = moment.astimezone()
        payload: Dict[str, Any] = {
            "local": local.to_dict(),
            "server": server.to_dict(),
            "usage_hints": {
                "date_format": "YYYY-MM-DD HH:MM:SS",
                "example_event_dates": {
                    "today_3pm": f"{local.date} 15:00:00",
                    "tomorrow_10am": f"{(local_moment + timedelta(days=1)).strftime('%Y-%m-%d')} 10:00:00",
                    "next_week": (local_moment + timedelta(days=7)).strftime("%Y-%m-%d"),
                },
            },
        }
        summary = (
            f"Local Time: {local.datetime} ({local.timezone})\n"
            f"Server Time: {server.datetime} ({server.timezone})\n"
            "Use local time for creating events relative to the user's timezone; "
            "use server time when WordPress server context matters."
        )
        return EntityResult(summary=summary, entity=payload)
