"""Tests for FMP tool dispatch."""
import json
import logging
from unittest.mock import AsyncMock, patch

import pytest

from fmp_mcp_server.common.errors import UpstreamHttpError
from fmp_mcp_server.tools.fmp_tools import ToolResult, call_fmp_tool, format_payload


@pytest.mark.asyncio
async def test_unknown_tool_returns_error_result(fmp_settings):
    with patch('fmp_mcp_server.tools.fmp_tools.make_fmp_request', new_callable=AsyncMock) as mock_request:
        result = await call_fmp_tool("get_unicorn", {"symbol": "AAPL"}, fmp_settings)

        assert result.is_error
        assert "get_unicorn" in result.text
        assert result.text.startswith("Error: ")
        mock_request.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_quote_uppercases_symbol(fmp_settings):
    with patch('fmp_mcp_server.tools.fmp_tools.make_fmp_request', new_callable=AsyncMock) as mock_request:
        mock_request.return_value = [{"symbol": "AAPL"}]
        result = await call_fmp_tool("get_quote", {"symbol": "aapl"}, fmp_settings)

        assert not result.is_error
        mock_request.assert_awaited_once_with(
            "/quote?symbol=AAPL",
            fmp_settings.fmp_api_key,
            base_url=fmp_settings.fmp_base_url,
            transport=None,
        )


@pytest.mark.asyncio
async def test_income_statement_defaults(fmp_settings):
    with patch('fmp_mcp_server.tools.fmp_tools.make_fmp_request', new_callable=AsyncMock) as mock_request:
        mock_request.return_value = []
        await call_fmp_tool("get_income_statement", {"symbol": "msft"}, fmp_settings)

        endpoint = mock_request.call_args[0][0]
        assert "period=annual&limit=5" in endpoint


@pytest.mark.asyncio
async def test_earnings_calendar_without_dates_has_no_date_params(fake_fmp, fmp_settings):
    await call_fmp_tool("get_earnings_calendar", {}, fmp_settings, transport=fake_fmp.transport)

    params = fake_fmp.requests[0].url.params
    assert "from" not in params
    assert "to" not in params
    assert list(params.keys()) == ["apikey"]


@pytest.mark.asyncio
async def test_missing_required_argument_skips_upstream(fake_fmp, fmp_settings):
    result = await call_fmp_tool("get_quote", {}, fmp_settings, transport=fake_fmp.transport)

    assert result.is_error
    assert "symbol" in result.text
    assert "undefined" not in result.text
    assert fake_fmp.requests == []


@pytest.mark.asyncio
async def test_out_of_range_enum_is_rejected_locally(fake_fmp, fmp_settings):
    result = await call_fmp_tool(
        "get_balance_sheet", {"symbol": "aapl", "period": "monthly"}, fmp_settings,
        transport=fake_fmp.transport,
    )

    assert result.is_error
    assert "period" in result.text
    assert fake_fmp.requests == []


@pytest.mark.asyncio
async def test_upstream_404_then_recovers(fake_fmp, fmp_settings):
    fake_fmp.queue(404)
    fake_fmp.queue(200, json=[{"symbol": "AAPL", "price": 190.1}])

    failed = await call_fmp_tool("get_quote", {"symbol": "AAPL"}, fmp_settings, transport=fake_fmp.transport)
    succeeded = await call_fmp_tool("get_quote", {"symbol": "AAPL"}, fmp_settings, transport=fake_fmp.transport)

    assert failed.is_error
    assert "404" in failed.text
    assert not succeeded.is_error
    assert json.loads(succeeded.text) == [{"symbol": "AAPL", "price": 190.1}]
    assert len(fake_fmp.requests) == 2


@pytest.mark.asyncio
async def test_payload_round_trips(fake_fmp, fmp_settings):
    body = {
        "symbol": "NESN.SW",
        "companyName": "Nestlé S.A.",
        "ratios": [{"pe": 21.4, "roe": None, "flags": [True, False]}],
        "nested": {"a": {"b": [1, 2, 3]}},
    }
    fake_fmp.queue(200, json=body)

    result = await call_fmp_tool("get_company_profile", {"symbol": "nesn.sw"}, fmp_settings,
                                 transport=fake_fmp.transport)

    assert not result.is_error
    assert json.loads(result.text) == body
    assert result.text == json.dumps(body, indent=2, ensure_ascii=False)
    assert "Nestlé" in result.text


@pytest.mark.asyncio
async def test_upstream_error_message_is_wrapped(fmp_settings):
    with patch('fmp_mcp_server.tools.fmp_tools.make_fmp_request', new_callable=AsyncMock) as mock_request:
        mock_request.side_effect = UpstreamHttpError(401, "Unauthorized")
        result = await call_fmp_tool("get_market_gainers", {}, fmp_settings)

        assert result == ToolResult(text="Error: FMP API error: 401 Unauthorized", is_error=True)


@pytest.mark.asyncio
async def test_unexpected_exception_becomes_error_result(fmp_settings):
    with patch('fmp_mcp_server.tools.fmp_tools.make_fmp_request', new_callable=AsyncMock) as mock_request:
        mock_request.side_effect = RuntimeError("kaboom")
        result = await call_fmp_tool("get_sp500_constituents", None, fmp_settings)

        assert result.is_error
        assert "kaboom" in result.text


def test_tool_result_converts_to_mcp_result():
    converted = ToolResult(text="Error: nope", is_error=True).to_call_tool_result()

    assert converted.isError is True
    assert converted.content[0].type == "text"
    assert converted.content[0].text == "Error: nope"


def test_format_payload_uses_two_space_indent():
    assert format_payload({"a": [1]}) == '{\n  "a": [\n    1\n  ]\n}'


@pytest.mark.asyncio
async def test_api_key_never_reaches_the_logs(fake_fmp, fmp_settings, caplog):
    caplog.set_level(logging.DEBUG)
    fake_fmp.queue(200, json=[{"symbol": "AAPL"}])

    result = await call_fmp_tool("get_quote", {"symbol": "aapl"}, fmp_settings, transport=fake_fmp.transport)

    assert not result.is_error
    assert any("get_quote" in record.getMessage() for record in caplog.records)
    leaked = [
        f"{record.name}: {record.getMessage()}"
        for record in caplog.records
        if fmp_settings.fmp_api_key in record.getMessage()
    ]
    assert not leaked


@pytest.mark.asyncio
async def test_non_finite_numbers_become_error_result(fake_fmp, fmp_settings):
    fake_fmp.queue(200, text='[{"symbol": "AAPL", "pe": NaN, "beta": Infinity}]',
                   headers={"Content-Type": "application/json"})

    result = await call_fmp_tool("get_key_metrics", {"symbol": "aapl"}, fmp_settings,
                                 transport=fake_fmp.transport)

    assert result.is_error
    assert "non-finite" in result.text
