from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

# Canonical wire formats for dates exchanged with the backend.
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"
DATETIME_PATTERN = r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

DEFAULT_TICKET_PROVIDER = "Tickets Commerce"


@dataclass(frozen=True, slots=True)
class ValidationErrorRecord:
    field: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "value": self.value}


@dataclass(slots=True)
class TransformResult:
    """Working copy produced by the field transformer.

    ``unlimited`` records that ``manage_stock`` was explicitly disabled, so
    later steps never re-enable stock tracking for the request.
    """

    payload: Dict[str, Any]
    unlimited: bool = False


@dataclass(slots=True)
class EntityResult:
    summary: str
    entity: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"summary": self.summary, "entity": self.entity}


def entity_id(entity: Any) -> Optional[Any]:
    return entity.get("id") if isinstance(entity, dict) else None
