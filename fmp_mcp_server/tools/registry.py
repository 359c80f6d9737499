"""Registry of FMP tools.

Every tool is one ``Operation``: the descriptor advertised on ``tools/list``
plus the argument model and endpoint builder used on ``tools/call``.
The advertised catalogue is derived from this registry, so a listed tool
always has exactly one way to be dispatched.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional
from urllib.parse import quote

from mcp import types

from fmp_mcp_server.common.errors import UnknownOperation
from fmp_mcp_server.tools.schemas import (
    CHART_INTERVALS,
    PERIODS,
    TIMEFRAMES,
    ChartArgs,
    DateRangeArgs,
    EstimateArgs,
    HoldingsArgs,
    IndicatorArgs,
    NewsArgs,
    NoArgs,
    RsiArgs,
    SearchArgs,
    SectorArgs,
    StatementArgs,
    SymbolArgs,
    TechnicalArgs,
    ToolArgs,
    parse_arguments,
)


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    properties: dict[str, dict[str, Any]]
    args_model: type[ToolArgs]
    endpoint: Callable[[Any], str]

    @property
    def required(self) -> list[str]:
        return self.args_model.required_arguments()

    @property
    def input_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "object", "properties": self.properties}
        if self.required:
            schema["required"] = self.required
        return schema

    def to_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )

    def build_endpoint(self, arguments: Optional[dict]) -> str:
        """Validate arguments and return the endpoint path with its query string."""
        args = parse_arguments(self.name, self.args_model, arguments)
        return self.endpoint(args)


# ────────────────────────────────────────────────────────
# schema fragments
# ────────────────────────────────────────────────────────
SYMBOL = {"type": "string", "description": "Stock ticker symbol"}
PERIOD = {
    "type": "string",
    "description": "Period type (annual or quarter)",
    "enum": PERIODS,
}
TIMEFRAME = {
    "type": "string",
    "description": "Timeframe (1min, 5min, 15min, 30min, 1hour, 4hour, 1day)",
    "enum": TIMEFRAMES,
}
FROM_DATE = {"type": "string", "description": "Start date in YYYY-MM-DD format (optional)"}
TO_DATE = {"type": "string", "description": "End date in YYYY-MM-DD format (optional)"}


def _limit(default: int, what: str = "periods") -> dict[str, str]:
    return {"type": "number", "description": f"Number of {what} to return (default: {default})"}


def _period_length(default: int) -> dict[str, str]:
    return {"type": "number", "description": f"Period length (default: {default})"}


def _statement_properties(default_limit: int = 5) -> dict[str, dict[str, Any]]:
    return {"symbol": SYMBOL, "period": PERIOD, "limit": _limit(default_limit)}


def _technical_properties(default_period: int) -> dict[str, dict[str, Any]]:
    return {"symbol": SYMBOL, "timeframe": TIMEFRAME, "period": _period_length(default_period)}


# ────────────────────────────────────────────────────────
# endpoint builders
# ────────────────────────────────────────────────────────
# characters JavaScript's encodeURIComponent leaves alone
URI_COMPONENT_SAFE = "-_.!~*'()"

def _with_query(path: str, params: list[str]) -> str:
    return f"{path}?{'&'.join(params)}" if params else path


def _fixed(path: str) -> Callable[[NoArgs], str]:
    return lambda args: path


def _by_symbol(path: str) -> Callable[[SymbolArgs], str]:
    return lambda args: f"{path}?symbol={args.symbol}"


def _statement(path: str) -> Callable[[StatementArgs], str]:
    return lambda args: f"{path}?symbol={args.symbol}&period={args.period}&limit={args.limit}"


def _symbol_limit(path: str) -> Callable[[HoldingsArgs], str]:
    return lambda args: f"{path}?symbol={args.symbol}&limit={args.limit}"


def _calendar(path: str) -> Callable[[DateRangeArgs], str]:
    return lambda args: _with_query(path, args.date_params())


def _technical(kind: str) -> Callable[[TechnicalArgs], str]:
    return lambda args: (
        f"/technical-indicators/{kind}?symbol={args.symbol}"
        f"&timeframe={args.timeframe}&periodLength={args.period}"
    )


def _search(args: SearchArgs) -> str:
    return f"/search-symbol?query={quote(args.query, safe=URI_COMPONENT_SAFE)}&limit=10"


def _news(args: NewsArgs) -> str:
    return f"/news/stock?symbols={args.symbol}&limit={args.limit}"


def _sector_performance(args: SectorArgs) -> str:
    day = args.date or datetime.now(timezone.utc).date()
    return f"/sector-performance-snapshot?date={day.isoformat()}"


def _economic_indicator(args: IndicatorArgs) -> str:
    return _with_query("/economic-indicators", [f"name={args.name}", *args.date_params()])


def _historical_chart(args: ChartArgs) -> str:
    return _with_query(
        f"/historical-chart/{args.interval}",
        [f"symbol={args.symbol}", *args.date_params()],
    )


OPERATIONS: list[Operation] = [
    Operation(
        name="get_quote",
        description="Get real-time stock quote for a symbol (e.g., AAPL, TSLA, MSFT)",
        properties={"symbol": {"type": "string", "description": "Stock ticker symbol (e.g., AAPL)"}},
        args_model=SymbolArgs,
        endpoint=_by_symbol("/quote"),
    ),
    Operation(
        name="search_symbol",
        description="Search for stock symbols by company name or ticker",
        properties={"query": {"type": "string", "description": "Search query (company name or ticker)"}},
        args_model=SearchArgs,
        endpoint=_search,
    ),
    Operation(
        name="get_company_profile",
        description=(
            "Get detailed company profile information including description, "
            "industry, sector, CEO, and more"
        ),
        properties={"symbol": SYMBOL},
        args_model=SymbolArgs,
        endpoint=_by_symbol("/profile"),
    ),
    Operation(
        name="get_income_statement",
        description="Get company income statement (annual or quarterly)",
        properties=_statement_properties(),
        args_model=StatementArgs,
        endpoint=_statement("/income-statement"),
    ),
    Operation(
        name="get_balance_sheet",
        description="Get company balance sheet statement (annual or quarterly)",
        properties=_statement_properties(),
        args_model=StatementArgs,
        endpoint=_statement("/balance-sheet-statement"),
    ),
    Operation(
        name="get_cash_flow",
        description="Get company cash flow statement (annual or quarterly)",
        properties=_statement_properties(),
        args_model=StatementArgs,
        endpoint=_statement("/cash-flow-statement"),
    ),
    Operation(
        name="get_stock_news",
        description="Get latest news articles for a stock symbol",
        properties={"symbol": SYMBOL, "limit": _limit(10, "articles")},
        args_model=NewsArgs,
        endpoint=_news,
    ),
    Operation(
        name="get_market_gainers",
        description="Get stocks with the largest price increases (top gainers)",
        properties={},
        args_model=NoArgs,
        endpoint=_fixed("/biggest-gainers"),
    ),
    Operation(
        name="get_market_losers",
        description="Get stocks with the largest price drops (top losers)",
        properties={},
        args_model=NoArgs,
        endpoint=_fixed("/biggest-losers"),
    ),
    Operation(
        name="get_most_active",
        description="Get most actively traded stocks by volume",
        properties={},
        args_model=NoArgs,
        endpoint=_fixed("/most-actives"),
    ),
    Operation(
        name="get_sector_performance",
        description="Get current sector performance snapshot",
        properties={
            "date": {
                "type": "string",
                "description": "Date in YYYY-MM-DD format (optional, defaults to latest)",
            },
        },
        args_model=SectorArgs,
        endpoint=_sector_performance,
    ),
    Operation(
        name="get_analyst_estimates",
        description="Get analyst financial estimates for a stock (revenue, EPS forecasts)",
        properties=_statement_properties(default_limit=10),
        args_model=EstimateArgs,
        endpoint=_statement("/analyst-estimates"),
    ),
    Operation(
        name="get_price_target",
        description="Get analyst price target summary for a stock",
        properties={"symbol": SYMBOL},
        args_model=SymbolArgs,
        endpoint=_by_symbol("/price-target-summary"),
    ),
    Operation(
        name="get_analyst_ratings",
        description="Get analyst ratings and upgrades/downgrades for a stock",
        properties={"symbol": SYMBOL},
        args_model=SymbolArgs,
        endpoint=_by_symbol("/grades"),
    ),
    Operation(
        name="get_insider_trading",
        description="Get recent insider trading activity for a stock",
        properties={"symbol": SYMBOL, "limit": _limit(100, "transactions")},
        args_model=HoldingsArgs,
        endpoint=_symbol_limit("/insider-trading/search"),
    ),
    Operation(
        name="get_key_metrics",
        description="Get key financial metrics (P/E, ROE, debt ratios, etc.)",
        properties=_statement_properties(),
        args_model=StatementArgs,
        endpoint=_statement("/key-metrics"),
    ),
    Operation(
        name="get_financial_ratios",
        description="Get detailed financial ratios (profitability, liquidity, efficiency)",
        properties=_statement_properties(),
        args_model=StatementArgs,
        endpoint=_statement("/ratios"),
    ),
    Operation(
        name="get_earnings_calendar",
        description="Get upcoming earnings announcements calendar",
        properties={"from": FROM_DATE, "to": TO_DATE},
        args_model=DateRangeArgs,
        endpoint=_calendar("/earnings-calendar"),
    ),
    Operation(
        name="get_economic_calendar",
        description="Get upcoming economic data releases calendar",
        properties={"from": FROM_DATE, "to": TO_DATE},
        args_model=DateRangeArgs,
        endpoint=_calendar("/economic-calendar"),
    ),
    Operation(
        name="get_economic_indicator",
        description="Get economic indicator data (GDP, unemployment, inflation, etc.)",
        properties={
            "name": {
                "type": "string",
                "description": "Indicator name (e.g., GDP, unemploymentRate, CPI)",
            },
            "from": FROM_DATE,
            "to": TO_DATE,
        },
        args_model=IndicatorArgs,
        endpoint=_economic_indicator,
    ),
    Operation(
        name="get_technical_indicator_rsi",
        description="Get Relative Strength Index (RSI) technical indicator",
        properties=_technical_properties(14),
        args_model=RsiArgs,
        endpoint=_technical("rsi"),
    ),
    Operation(
        name="get_technical_indicator_sma",
        description="Get Simple Moving Average (SMA) technical indicator",
        properties=_technical_properties(10),
        args_model=TechnicalArgs,
        endpoint=_technical("sma"),
    ),
    Operation(
        name="get_technical_indicator_ema",
        description="Get Exponential Moving Average (EMA) technical indicator",
        properties=_technical_properties(10),
        args_model=TechnicalArgs,
        endpoint=_technical("ema"),
    ),
    Operation(
        name="get_historical_chart",
        description="Get historical price data with flexible time intervals",
        properties={
            "symbol": SYMBOL,
            "interval": {
                "type": "string",
                "description": "Time interval (1min, 5min, 15min, 30min, 1hour, 4hour)",
                "enum": CHART_INTERVALS,
            },
            "from": FROM_DATE,
            "to": TO_DATE,
        },
        args_model=ChartArgs,
        endpoint=_historical_chart,
    ),
    Operation(
        name="get_institutional_holders",
        description="Get institutional ownership (13F filings) for a stock",
        properties={"symbol": SYMBOL, "limit": _limit(100, "holders")},
        args_model=HoldingsArgs,
        endpoint=_symbol_limit("/institutional-ownership/latest"),
    ),
    Operation(
        name="get_sp500_constituents",
        description="Get list of S&P 500 index constituents",
        properties={},
        args_model=NoArgs,
        endpoint=_fixed("/sp500-constituent"),
    ),
]

REGISTRY: dict[str, Operation] = {op.name: op for op in OPERATIONS}


def get_operation(name: str) -> Operation:
    try:
        return REGISTRY[name]
    except KeyError:
        raise UnknownOperation(name) from None


def list_tools() -> list[types.Tool]:
    """The full tool catalogue, in registry order."""
    return [op.to_tool() for op in OPERATIONS]
