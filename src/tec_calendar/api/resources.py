from __future__ import annotations

from typing import Any, Dict

from ..domain import PostType
from .registry import get_api_functions, register_resource
from .state import api_state

SERVER_DESCRIPTION = "MCP server for The Events Calendar and Event Tickets"


@register_resource(
    "time://local",
    name="local-time",
    description="Current local time with timezone information",
)
async def local_time() -> Dict[str, Any]:
    return api_state.clock.local_time().to_dict()


@register_resource(
    "time://server",
    name="server-time",
    description="Current WordPress server time with timezone information",
)
async def server_time() -> Dict[str, Any]:
    info = await api_state.clock.server_time()
    return info.to_dict()


@register_resource(
    "info://server",
    name="server-info",
    description="Information about this MCP server",
)
async def server_info() -> Dict[str, Any]:
    server = api_state.context.settings.server
    return {
        "name": server.name,
        "version": server.version,
        "description": SERVER_DESCRIPTION,
        "supported_post_types": [post_type.value for post_type in PostType],
        "tools": [
            {"name": func.name, "description": func.description.splitlines()[0]}
            for func in sorted(get_api_functions(), key=lambda item: item.name)
        ],
    }
