"""Exception hierarchy for the WebScraping.AI MCP server."""

from __future__ import annotations

from webscraping_ai_mcp.models.errors import ApiErrorPayload


class WebScrapingAIMCPError(Exception):
    """Base class for all server errors."""


class ConfigError(WebScrapingAIMCPError):
    """Missing or invalid configuration. Fatal at startup."""


class ToolValidationError(WebScrapingAIMCPError):
    """A tool invocation was rejected before reaching the upstream API."""


class ApiError(WebScrapingAIMCPError):
    """An upstream call failed (non-2xx status, network error or timeout).

    The exception text is the serialized payload, so callers that only see
    ``str(exc)`` still get the full normalized error.
    """

    def __init__(self, payload: ApiErrorPayload) -> None:
        self.payload = payload
        super().__init__(payload.to_text())

    @property
    def status_code(self) -> int | None:
        return self.payload.status_code
