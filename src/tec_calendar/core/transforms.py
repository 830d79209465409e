from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, MutableMapping, Optional

from ..domain import PostType, StockMode, TransformResult
from ..domain.models import DEFAULT_TICKET_PROVIDER

logger = logging.getLogger(__name__)

_NAMED_KINDS = (PostType.VENUE, PostType.ORGANIZER)


def is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def mirror_title(post_type: PostType, data: MutableMapping[str, Any]) -> None:
    """Keep ``title`` and the venue/organizer name field in sync."""

    if post_type not in _NAMED_KINDS:
        return
    field = post_type.value
    if data.get("title"):
        data[field] = data["title"]
        logger.debug("Mirrored title into %s field: %s", field, data["title"])
    elif data.get(field):
        data["title"] = data[field]
        logger.debug("Set title from %s field: %s", field, data[field])


def alias_event_reference(data: MutableMapping[str, Any]) -> None:
    if data.get("event_id") and not data.get("event"):
        data["event"] = data["event_id"]


def event_reference(data: Mapping[str, Any]) -> Optional[Any]:
    return data.get("event") or data.get("event_id") or None


def strip_zero_prices(data: MutableMapping[str, Any]) -> None:
    # The backend reads a missing price as free and rejects an explicit zero.
    for field in ("price", "sale_price"):
        value = data.get(field)
        if is_number(value) and value == 0:
            del data[field]
            logger.info("Removed %s set to 0; WordPress defaults it when omitted", field)


def reconcile_inventory(data: MutableMapping[str, Any]) -> bool:
    """Align stock, capacity and manage_stock; return True for unlimited tickets."""

    has_stock = is_number(data.get("stock"))
    has_capacity = is_number(data.get("capacity"))

    if has_stock and not has_capacity:
        data["capacity"] = data["stock"]
        logger.info("Capacity not provided; defaulting capacity to stock: %s", data["capacity"])
    elif has_capacity and not has_stock:
        data["stock"] = data["capacity"]
        logger.info("Stock not provided; defaulting stock to capacity: %s", data["stock"])

    unlimited = data.get("manage_stock") is False
    if unlimited:
        data["stock_mode"] = StockMode.UNLIMITED.value
        # The ticket endpoint has no manage_stock field; stock_mode carries it.
        del data["manage_stock"]
        logger.info("manage_stock disabled; stock_mode set to unlimited")

    stock = data.get("stock")
    capacity = data.get("capacity")
    if is_number(stock) and is_number(capacity) and stock > capacity:
        data["capacity"] = stock
        logger.info("Stock (%s) exceeds capacity (%s); raising capacity to %s", stock, capacity, stock)

    if not unlimited and (is_number(data.get("stock")) or is_number(data.get("capacity"))):
        if data.get("manage_stock") is not True:
            data["manage_stock"] = True
            logger.info("Stock or capacity provided; enabling manage_stock")

    return unlimited


def transform_fields(post_type: PostType, raw: Mapping[str, Any], *, creating: bool) -> TransformResult:
    """Apply kind-specific aliasing and coercion to a copy of ``raw``."""

    post_type = PostType(post_type)
    data: Dict[str, Any] = dict(raw)
    mirror_title(post_type, data)
    if post_type is not PostType.TICKET:
        return TransformResult(payload=data)

    alias_event_reference(data)
    strip_zero_prices(data)
    unlimited = reconcile_inventory(data)
    if creating and not data.get("provider"):
        data["provider"] = DEFAULT_TICKET_PROVIDER
        logger.info('Set default ticket provider to "%s"', DEFAULT_TICKET_PROVIDER)
    reference = event_reference(data)
    if reference is not None:
        data["event_id"] = reference
    return TransformResult(payload=data, unlimited=unlimited)
