"""FMP tool dispatch: one tool call, one upstream GET."""
import json
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from mcp import types

from fmp_mcp_server.common.config import Settings
from fmp_mcp_server.common.errors import FMPError, UpstreamMalformedResponse
from fmp_mcp_server.tools.config import logger
from fmp_mcp_server.tools.registry import get_operation
from fmp_mcp_server.utils.utils_mcp import make_fmp_request


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False

    def to_call_tool_result(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )


def format_payload(data: Any) -> str:
    """Pretty-print an FMP response body for the client.

    NaN and Infinity have no JSON spelling, so a body carrying them is
    reported as malformed rather than relayed as invalid JSON.
    """
    try:
        return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise UpstreamMalformedResponse(f"FMP API returned non-finite numbers: {e}") from e


def error_result(error: Exception) -> ToolResult:
    return ToolResult(text=f"Error: {error}", is_error=True)


async def call_fmp_tool(
    name: str,
    arguments: Optional[dict],
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ToolResult:
    """Run a single tool invocation.

    Never raises: unknown tools, bad arguments and upstream failures all come
    back as a ToolResult with ``is_error`` set.
    """
    logger.info(f"Calling FMP tool {name}")
    try:
        operation = get_operation(name)
        endpoint = operation.build_endpoint(arguments)
        data = await make_fmp_request(
            endpoint,
            settings.fmp_api_key,
            base_url=settings.fmp_base_url,
            transport=transport,
        )
        text = format_payload(data)
    except FMPError as e:
        logger.error(f"FMP tool {name} failed - Error: {e}")
        return error_result(e)
    except Exception as e:
        logger.exception(f"Unexpected error in FMP tool {name}")
        return error_result(e)

    return ToolResult(text=text)
