"""Main entry point for the WebScraping.AI MCP server."""

from __future__ import annotations

import logging
import sys

from webscraping_ai_mcp.config import Settings
from webscraping_ai_mcp.errors import ConfigError
from webscraping_ai_mcp.server import run_server

logger = logging.getLogger("webscraping_ai_mcp")


def main() -> None:
    """Main entry point."""
    try:
        settings = Settings.from_env()
        settings.client_config()
    except ConfigError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(str(e))
        sys.exit(1)

    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    # Parse command line arguments
    transport = "stdio"
    host = "127.0.0.1"
    port = 8000

    if len(sys.argv) > 1:
        transport = sys.argv[1]
    if len(sys.argv) > 2:
        host = sys.argv[2]
    if len(sys.argv) > 3:
        port = int(sys.argv[3])

    logger.info(f"Starting WebScraping.AI MCP server with {transport} transport")
    run_server(settings, transport=transport, host=host, port=port)


if __name__ == "__main__":
    main()
