"""Utility functions for talking to the FMP API."""
import json
from typing import Any, Optional

import httpx

import logging

from fmp_mcp_server.common.errors import (
    UpstreamHttpError,
    UpstreamMalformedResponse,
    UpstreamTransportError,
)
from fmp_mcp_server.tools.config import FMP_API_BASE, USER_AGENT

# Set up logger
logger = logging.getLogger(__name__)


def build_fmp_url(endpoint: str, api_key: str, base_url: str = FMP_API_BASE) -> str:
    """Join base URL and endpoint, then append the apikey query parameter."""
    separator = "&" if "?" in endpoint else "?"
    return f"{base_url}{endpoint}{separator}apikey={api_key}"


async def make_fmp_request(
    endpoint: str,
    api_key: str,
    base_url: str = FMP_API_BASE,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """Make a single GET request to the FMP API and return the decoded JSON.

    Raises UpstreamHttpError on non-2xx statuses, UpstreamTransportError when
    no response arrives and UpstreamMalformedResponse when the body is not JSON.
    """
    logger.debug(f"Making GET request to FMP API: {endpoint}")
    url = build_fmp_url(endpoint, api_key, base_url)
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json"
    }

    async with httpx.AsyncClient(transport=transport) as client:
        try:
            response = await client.get(url, headers=headers)
        except httpx.RequestError as e:
            detail = str(e) or type(e).__name__
            logger.error(f"Error reaching FMP API: {endpoint} - Error: {detail}")
            raise UpstreamTransportError(f"Could not reach FMP API: {detail}") from e

    if not response.is_success:
        logger.error(f"FMP API returned {response.status_code} for {endpoint}")
        raise UpstreamHttpError(response.status_code, response.reason_phrase)

    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"FMP API returned a non-JSON body for {endpoint}")
        raise UpstreamMalformedResponse(f"FMP API returned invalid JSON: {e}") from e

    logger.debug(f"Successfully received response from FMP API: {endpoint}")
    return data
