"""Admin API functionality for monitoring.

This module provides read-only administrative endpoints for:
- Health checks and server status
- Upstream request statistics and live queue state
- Effective configuration (API key masked)

The admin module follows a router -> service pattern:
- router.py: HTTP endpoint handlers
- service.py: Business logic for stats and config reporting
"""

from webscraping_ai_mcp.admin.router import register_admin_routes
from webscraping_ai_mcp.admin.service import get_current_config, get_stats

__all__ = [
    # Router functions
    "register_admin_routes",
    # Service functions
    "get_current_config",
    "get_stats",
]
