"""Financial Modeling Prep MCP server."""

__version__ = "1.1.0"
