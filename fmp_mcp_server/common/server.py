"""MCP server wiring for the FMP tools."""
from typing import Optional

import httpx
from mcp import types
from mcp.server.lowlevel import Server

from fmp_mcp_server.common.config import Settings
from fmp_mcp_server.tools.config import SERVER_NAME, SERVER_VERSION
from fmp_mcp_server.tools.fmp_tools import call_fmp_tool
from fmp_mcp_server.tools.registry import list_tools


def create_server(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Server:
    """Build an MCP server answering tools/list and tools/call.

    ``transport`` is handed to every outbound httpx client; leave it unset
    outside of tests.
    """
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return list_tools()

    # arguments are validated by each tool's own model, with our error text
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict) -> types.CallToolResult:
        result = await call_fmp_tool(name, arguments, settings, transport=transport)
        return result.to_call_tool_result()

    return server
