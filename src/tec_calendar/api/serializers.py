from __future__ import annotations

import logging
from typing import Any, Dict

from ..domain import CalendarError, EntityResult, format_error

logger = logging.getLogger(__name__)


def serialize_result(result: EntityResult) -> Dict[str, Any]:
    return result.to_dict()


def serialize_error(error: Exception) -> Dict[str, Any]:
    if not isinstance(error, CalendarError):
        logger.exception("Unexpected failure while handling a tool call")
    return {"error": format_error(error)}
