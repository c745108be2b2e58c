"""Expose the tool registry through the Model Context Protocol over stdio."""

from __future__ import annotations

import logging
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from .host import HostContext
from .tools import ToolError
from .tools import ToolRegistry
from .tools import register_content_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "content-mcp"


def create_server(registry: ToolRegistry, name: str = SERVER_NAME) -> Server:
    """
    Build an MCP server backed by a tool registry.

    Error responses are raised as ToolError so the SDK reports them as
    ``isError`` results carrying the response text.
    """
    server = Server(name)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=definition.name, description=definition.description, inputSchema=definition.input_schema())
            for definition in registry.list_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        response = await registry.call(name, arguments)
        if response.is_error:
            raise ToolError(response.joined_text, tool_name=name)
        return [types.TextContent(type="text", text=block.text) for block in response.content]

    return server


async def serve(host: HostContext) -> None:
    """Register the content tools for a host and serve them over stdio until the client disconnects."""
    registry = ToolRegistry()
    await register_content_tools(host, registry)
    server = create_server(registry)
    logger.info(f"MCP server starting with {len(registry)} tools")

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await host.close()
        logger.info("MCP server stopped")
