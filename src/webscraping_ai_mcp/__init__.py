"""MCP server exposing the WebScraping.AI API as tools."""

__version__ = "1.0.1"
