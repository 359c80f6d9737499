"""Errors raised while serving FMP tool invocations.

Everything except ``ConfigurationMissing`` is caught at the dispatch boundary
and turned into an error result for the calling client.
"""
from typing import Optional


class FMPError(Exception):
    """Base class for all FMP MCP server errors."""


class ConfigurationMissing(FMPError):
    """A required setting (the FMP API key) is not configured."""

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"{variable} environment variable is required")


class UnknownOperation(FMPError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class MissingOrMalformedParameter(FMPError):
    """Tool arguments failed validation against the operation's schema."""

    def __init__(self, tool: str, problems: list[str]):
        self.tool = tool
        self.problems = problems
        super().__init__(f"Invalid arguments for {tool}: {'; '.join(problems)}")


class UpstreamHttpError(FMPError):
    """FMP answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"FMP API error: {status_code} {self.reason}".rstrip())


class UpstreamTransportError(FMPError):
    """The request never got an HTTP answer (DNS, connect, timeout...)."""


class UpstreamMalformedResponse(FMPError):
    """FMP answered 2xx but the body is not valid JSON."""
