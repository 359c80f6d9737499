"""Main MCP server application."""
import asyncio
import sys

from mcp.server.stdio import stdio_server

from fmp_mcp_server.common.config import Settings, load_environment, load_settings
from fmp_mcp_server.common.errors import ConfigurationMissing
from fmp_mcp_server.common.server import create_server
from fmp_mcp_server.tools.config import logger


async def serve(settings: Settings) -> None:
    server = create_server(settings)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("FMP MCP Server running on stdio")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def main() -> None:
    # ────────────────────────────────────────────────────────
    # 1) bootstrap env, fail fast without an API key
    # ────────────────────────────────────────────────────────
    load_environment()
    try:
        settings = load_settings()
    except ConfigurationMissing as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # ────────────────────────────────────────────────────────
    # 2) serve MCP over stdio
    # ────────────────────────────────────────────────────────
    logger.info("Starting FMP MCP server...")
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("FMP MCP server stopped")
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
