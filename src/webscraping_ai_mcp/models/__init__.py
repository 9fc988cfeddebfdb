"""Pydantic data models shared across the server.

This module defines the wire-level structures produced by the request client:
- ApiErrorPayload: the normalized shape of every failed upstream call
"""

from webscraping_ai_mcp.models.errors import ApiErrorPayload

__all__ = [
    "ApiErrorPayload",
]
