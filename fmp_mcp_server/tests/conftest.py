"""Pytest configuration and fixtures."""
import httpx
import pytest

from fmp_mcp_server.common.config import Settings

TEST_API_KEY = "test-key"
TEST_BASE_URL = "https://fmp.test/stable"


class FakeFMP:
    """httpx MockTransport that replays queued responses and records requests."""

    def __init__(self):
        self.responses: list[httpx.Response] = []
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def queue(self, status_code: int = 200, **kwargs) -> None:
        self.responses.append(httpx.Response(status_code, **kwargs))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            return self.responses.pop(0)
        return httpx.Response(200, json=[])


@pytest.fixture
def mock_fmp_api_key():
    """Return a mock FMP API key."""
    return TEST_API_KEY


@pytest.fixture
def fmp_settings(mock_fmp_api_key):
    return Settings(fmp_api_key=mock_fmp_api_key, fmp_base_url=TEST_BASE_URL)


@pytest.fixture
def fake_fmp():
    return FakeFMP()
