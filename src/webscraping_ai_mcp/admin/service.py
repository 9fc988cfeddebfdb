"""Admin service layer for stats and configuration reporting."""

from __future__ import annotations

from typing import Any

from webscraping_ai_mcp.client import WebScrapingAIClient
from webscraping_ai_mcp.config import Settings


def get_stats(client: WebScrapingAIClient) -> dict[str, Any]:
    """Get request metrics together with the live queue state.

    Args:
        client: The server's request client

    Returns:
        Dictionary with request metrics and queue occupancy
    """
    stats = client.metrics.to_dict()
    stats["queue"] = {
        "concurrency": client.queue.concurrency,
        "running": client.queue.running,
        "pending": client.queue.pending,
    }
    return stats


def get_current_config(settings: Settings) -> dict[str, Any]:
    """Get the effective configuration.

    Returns:
        Dictionary with current config and note
    """
    return {
        "config": settings.public_dict(),
        "note": "Configuration is read from the environment at startup and cannot be changed at runtime",
    }
