"""MCP server exposing the WebScraping.AI API."""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from webscraping_ai_mcp.admin import register_admin_routes
from webscraping_ai_mcp.client import WebScrapingAIClient
from webscraping_ai_mcp.config import Settings
from webscraping_ai_mcp.tools import ToolRouter, register_scraping_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "WebScraping.AI MCP Server"


def create_server(settings: Settings, client: WebScrapingAIClient | None = None) -> FastMCP:
    """Build the MCP server with one shared client and router.

    Args:
        settings: Server settings
        client: Request client to use (built from settings if omitted)

    Returns:
        Configured FastMCP instance

    Raises:
        ConfigError: If the settings do not yield a valid client configuration
    """
    if client is None:
        client = WebScrapingAIClient(settings.client_config())
    router = ToolRouter(client)

    mcp = FastMCP(
        SERVER_NAME,
        instructions=(
            "Tools for the WebScraping.AI API: ask questions about webpages, extract structured "
            "fields, and fetch rendered HTML, visible text or CSS-selected elements."
        ),
    )
    register_scraping_tools(mcp, router, settings)
    register_admin_routes(mcp, client, settings)

    logger.info(f"{SERVER_NAME} created with tools: {', '.join(router.tool_names())}")
    return mcp


def run_server(
    settings: Settings,
    transport: str = "stdio",
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Run the MCP server.

    Args:
        settings: Server settings
        transport: Transport type ('stdio', 'streamable-http' or 'sse')
        host: Host to bind to for HTTP transports
        port: Port to bind to for HTTP transports
    """
    client = WebScrapingAIClient(settings.client_config())
    mcp = create_server(settings, client=client)

    # Configure host and port via settings
    mcp.settings.host = host
    mcp.settings.port = port

    try:
        mcp.run(transport=transport)
    finally:
        client.close()
        logger.info("HTTP session closed")
