from __future__ import annotations

import asyncio
import logging

from fastmcp import FastMCP

from ...api import get_api_functions, get_api_resources

INSTRUCTIONS = (
    "The Events Calendar MCP server manages events, venues, organizers, and tickets on a "
    "WordPress site. Call current_datetime before working with relative dates."
)

logger = logging.getLogger(__name__)


def build_mcp_server(name: str = "tec-mcp-server") -> FastMCP:
    server = FastMCP(name=name, instructions=INSTRUCTIONS)
    # Dynamically register all API functions as MCP tools.
    for api_function in get_api_functions():
        logger.debug("Registering MCP tool: %s", api_function.name)
        server.tool(
            api_function.func,
            name=api_function.name,
            description=api_function.description,
            tags=set(api_function.tags),
        )
    for api_resource in get_api_resources():
        logger.debug("Registering MCP resource: %s", api_resource.uri)
        server.resource(
            api_resource.uri,
            name=api_resource.name,
            description=api_resource.description,
            mime_type=api_resource.mime_type,
        )(api_resource.func)
    return server


def run_mcp_server(
    *,
    name: str = "tec-mcp-server",
    transport: str = "stdio",
    host: str = "127.0.0.1",
    port: int = 8765,
) -> None:
    server = build_mcp_server(name)
    logger.info("%s starting (%s transport)", name, transport)
    if transport == "stdio":
        asyncio.run(server.run_stdio_async())
    else:
        asyncio.run(server.run_streamable_http_async(host=host, port=port))
