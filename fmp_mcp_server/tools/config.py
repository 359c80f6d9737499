"""Logging and API constants for the FMP MCP tools."""
import logging
import os
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _handlers() -> list[logging.Handler]:
    # stdout carries the MCP protocol, so console logs go to stderr
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_file = os.environ.get('FMP_LOG_FILE')
    if log_file:
        # opened on first record, not at import time
        handlers.append(logging.FileHandler(log_file, delay=True))
    return handlers


# Configure logging
logging.basicConfig(
    level=os.environ.get('FMP_LOG_LEVEL', 'INFO').upper(),
    format=LOG_FORMAT,
    handlers=_handlers()
)

# httpx logs every request URL at INFO, and FMP URLs carry the apikey
for _name in ('httpx', 'httpcore'):
    logging.getLogger(_name).setLevel(logging.WARNING)

logger = logging.getLogger('fmp_mcp_tools')

# API Constants
FMP_API_BASE = "https://financialmodelingprep.com/stable"
USER_AGENT = "fmp-mcp-server/1.1.0"
SERVER_NAME = "fmp-mcp-server"
SERVER_VERSION = "1.1.0"
