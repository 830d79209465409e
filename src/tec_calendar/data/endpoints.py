from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from ..domain import PostType


@dataclass(frozen=True)
class EndpointConfig:
    namespace: str
    resource: str
    version: str = "v1"


ENDPOINTS: Dict[PostType, EndpointConfig] = {
    PostType.EVENT: EndpointConfig(namespace="tribe/events", resource="events"),
    PostType.VENUE: EndpointConfig(namespace="tribe/events", resource="venues"),
    PostType.ORGANIZER: EndpointConfig(namespace="tribe/events", resource="organizers"),
    PostType.TICKET: EndpointConfig(namespace="tribe/tickets", resource="tickets"),
}


def build_endpoint(post_type: PostType, post_id: Optional[int] = None) -> str:
    config = ENDPOINTS[PostType(post_type)]
    base = f"/wp-json/{config.namespace}/{config.version}/{config.resource}"
    return f"{base}/{post_id}" if post_id else base


def list_key(post_type: PostType) -> str:
    """Key under which list endpoints wrap their results."""

    return ENDPOINTS[PostType(post_type)].resource
