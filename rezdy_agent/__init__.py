"""MCP server exposing the Rezdy Agent marketplace API as tools."""

__version__ = "1.0.0"
