"""MCP tools for the WebScraping.AI API.

The tools module follows a router -> service pattern:
- router.py: MCP tool definitions, parameter schemas and registration
- service.py: Dispatch table, required-field validation and response envelopes

Tools:
- webscraping_ai_question: Ask an LLM about a page
- webscraping_ai_fields: Extract named fields from a page
- webscraping_ai_html: Rendered page HTML
- webscraping_ai_text: Visible page text
- webscraping_ai_selected: HTML of one CSS selector
- webscraping_ai_selected_multiple: HTML of several CSS selectors
- webscraping_ai_account: Account usage and remaining credits
"""

from webscraping_ai_mcp.tools.router import merge_options, register_scraping_tools
from webscraping_ai_mcp.tools.service import TOOL_SPECS, ToolRouter, ToolSpec, envelope

__all__ = [
    # Registration functions
    "register_scraping_tools",
    "merge_options",
    # Service
    "TOOL_SPECS",
    "ToolRouter",
    "ToolSpec",
    "envelope",
]
