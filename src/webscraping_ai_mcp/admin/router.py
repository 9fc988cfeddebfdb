"""Admin API routes for health, stats and config."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from webscraping_ai_mcp.admin.service import get_current_config, get_stats
from webscraping_ai_mcp.client import WebScrapingAIClient
from webscraping_ai_mcp.config import Settings


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint for container orchestration.

    Returns:
        JSONResponse with status: healthy
    """
    return JSONResponse({"status": "healthy"})


def register_admin_routes(mcp: FastMCP, client: WebScrapingAIClient, settings: Settings) -> None:
    """Register admin HTTP routes (served on HTTP transports only).

    Args:
        mcp: FastMCP server instance to register routes on
        client: Request client whose metrics and queue are reported
        settings: Settings reported by the config endpoint
    """

    async def api_stats(request: Request) -> JSONResponse:
        return JSONResponse(get_stats(client))

    async def api_config_get(request: Request) -> JSONResponse:
        return JSONResponse(get_current_config(settings))

    mcp.custom_route("/healthz", methods=["GET"])(health_check)
    mcp.custom_route("/api/stats", methods=["GET"])(api_stats)
    mcp.custom_route("/api/config", methods=["GET"])(api_config_get)
