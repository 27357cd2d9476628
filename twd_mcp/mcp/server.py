"""
Stdio tool server exposing the twd-mcp generators over the Model Context
Protocol.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .. import __version__
from ..core.config import Config
from ..core.exceptions import TwdMcpError
from .tools import call_tool, list_tools

logger = logging.getLogger(__name__)


class ToolCallError(TwdMcpError):
    """Raised inside the call_tool handler so the SDK flags the result as an error."""

    def __init__(self, payload: str, tool_name: Optional[str] = None):
        super().__init__(payload, "TOOL_CALL_FAILED", {"tool_name": tool_name})
        self.tool_name = tool_name


async def handle_list_tools() -> List[types.Tool]:
    """Advertise the registered tools."""
    return [
        types.Tool(
            name=definition.name,
            description=definition.description,
            inputSchema=definition.input_schema,
        )
        for definition in list_tools()
    ]


async def handle_call_tool(
    name: str, arguments: Optional[Dict[str, Any]]
) -> List[types.TextContent]:
    """Run a tool call and return its text content.

    Raises:
        ToolCallError: Carrying the ``Error: ...`` payload when the call failed
    """
    result = call_tool(name, arguments)
    if result.is_error:
        raise ToolCallError(result.text, tool_name=name)
    return [types.TextContent(type="text", text=result.text)]


def create_server(config: Optional[Config] = None) -> Server:
    """Create a server with the tool handlers registered."""
    config = config or Config()
    server = Server(config.server_name, version=__version__)
    server.list_tools()(handle_list_tools)
    server.call_tool()(handle_call_tool)
    return server


async def run_server(config: Optional[Config] = None) -> None:
    """Serve tool calls over stdin/stdout until the client disconnects."""
    server = create_server(config)
    async with stdio_server() as (read_stream, write_stream):
        logger.info(
            f"{server.name} server running on stdio",
            extra={"metadata": {"version": __version__}},
        )
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def serve(config: Optional[Config] = None) -> None:
    """Blocking entry point for the stdio server."""
    asyncio.run(run_server(config))
