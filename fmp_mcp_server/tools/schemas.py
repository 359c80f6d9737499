"""Typed argument records for FMP tools.

Each tool validates its loose MCP argument bag into one of these models
before any URL is built. Required fields, defaults and enumerations here are
also what the advertised input schemas declare.
"""
from __future__ import annotations

import datetime as dt
from typing import Annotated, Any, Literal, Optional, get_args

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, field_validator

from fmp_mcp_server.common.errors import MissingOrMalformedParameter

Period = Literal["annual", "quarter"]
Timeframe = Literal["1min", "5min", "15min", "30min", "1hour", "4hour", "1day"]
ChartInterval = Literal["1min", "5min", "15min", "30min", "1hour", "4hour"]

PERIODS = list(get_args(Period))
TIMEFRAMES = list(get_args(Timeframe))
CHART_INTERVALS = list(get_args(ChartInterval))

# letters, digits and the separators FMP uses (BRK-B, NESN.SW, ^GSPC)
TICKER_PATTERN = r"^[A-Za-z0-9.^-]+$"


def _plain_number(value: Any) -> Any:
    # bool is an int subclass and numeric strings would be coerced otherwise
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    return value


Count = Annotated[int, BeforeValidator(_plain_number), Field(ge=1)]


class ToolArgs(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @classmethod
    def required_arguments(cls) -> list[str]:
        """Argument names (as sent by clients) that have no default."""
        return [
            field.alias or name
            for name, field in cls.model_fields.items()
            if field.is_required()
        ]


class NoArgs(ToolArgs):
    pass


class SymbolArgs(ToolArgs):
    symbol: str = Field(min_length=1, pattern=TICKER_PATTERN)

    @field_validator("symbol")
    @classmethod
    def _upper_symbol(cls, value: str) -> str:
        return value.upper()


class SearchArgs(ToolArgs):
    query: str = Field(min_length=1)


class StatementArgs(SymbolArgs):
    period: Period = "annual"
    limit: Count = 5


class EstimateArgs(StatementArgs):
    limit: Count = 10


class NewsArgs(SymbolArgs):
    limit: Count = 10


class HoldingsArgs(SymbolArgs):
    limit: Count = 100


class SectorArgs(ToolArgs):
    date: Optional[dt.date] = None

    @field_validator("date", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        return None if value == "" else value


class DateRangeArgs(ToolArgs):
    from_date: Optional[dt.date] = Field(default=None, alias="from")
    to_date: Optional[dt.date] = Field(default=None, alias="to")

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def _blank_dates(cls, value: Any) -> Any:
        return None if value == "" else value

    def date_params(self) -> list[str]:
        params = []
        if self.from_date:
            params.append(f"from={self.from_date.isoformat()}")
        if self.to_date:
            params.append(f"to={self.to_date.isoformat()}")
        return params


class IndicatorArgs(DateRangeArgs):
    name: str = Field(min_length=1)


class TechnicalArgs(SymbolArgs):
    timeframe: Timeframe
    period: Count = 10


class RsiArgs(TechnicalArgs):
    period: Count = 14


class ChartArgs(SymbolArgs, DateRangeArgs):
    interval: ChartInterval


def parse_arguments(tool: str, model: type[ToolArgs], arguments: Optional[dict]) -> ToolArgs:
    """Validate an MCP argument bag, raising MissingOrMalformedParameter."""
    try:
        return model.model_validate(arguments or {})
    except ValidationError as e:
        problems = []
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "arguments"
            problems.append(f"{field}: {err['msg']}")
        raise MissingOrMalformedParameter(tool, problems) from e
