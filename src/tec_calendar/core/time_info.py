from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Dict, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..domain.models import DATE_FORMAT, DATETIME_FORMAT


@dataclass(frozen=True)
class TimeInfo:
    datetime: str
    timestamp: int
    timezone: str
    timezone_offset: str
    date: str
    time: str
    iso8601: str
    utc_datetime: str
    utc_offset_seconds: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def format_offset(offset: timedelta) -> str:
    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{mins:02d}"


def _time_info(moment: datetime, label: str) -> TimeInfo:
    offset = moment.utcoffset() or timedelta(0)
    utc = moment.astimezone(timezone.utc)
    return TimeInfo(
        datetime=moment.strftime(DATETIME_FORMAT),
        timestamp=int(moment.timestamp()),
        timezone=label,
        timezone_offset=format_offset(offset),
        date=moment.strftime(DATE_FORMAT),
        time=moment.strftime("%H:%M:%S"),
        iso8601=utc.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        utc_datetime=utc.strftime("%Y-%m-%d %H:%M:%S.") + f"{utc.microsecond // 1000:03d}",
        utc_offset_seconds=int(offset.total_seconds()),
    )


def local_time_info(now: Optional[datetime] = None) -> TimeInfo:
    moment = (now or datetime.now(timezone.utc)).astimezone()
    return _time_info(moment, moment.tzname() or "local")


def _site_timezone(site_info: Mapping[str, Any]) -> tuple[tzinfo, str]:
    name = site_info.get("timezone_string")
    if name:
        try:
            return ZoneInfo(name), name
        except (ZoneInfoNotFoundError, ValueError):
            pass
    gmt_offset = site_info.get("gmt_offset")
    if gmt_offset not in (None, ""):
        offset = timedelta(hours=float(gmt_offset))
        return timezone(offset), f"GMT{format_offset(offset)}"
    return timezone.utc, "UTC"


def server_time_info(site_info: Mapping[str, Any], now: Optional[datetime] = None) -> TimeInfo:
    zone, label = _site_timezone(site_info)
    moment = (now or datetime.now(timezone.utc)).astimezone(zone)
    return _time_info(moment, label)
