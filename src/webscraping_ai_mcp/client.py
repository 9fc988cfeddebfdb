"""Request client for the WebScraping.AI API with bounded concurrency."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any

import requests

from webscraping_ai_mcp import __version__
from webscraping_ai_mcp.config import ClientConfig
from webscraping_ai_mcp.errors import ApiError
from webscraping_ai_mcp.metrics import ServerMetrics, get_metrics
from webscraping_ai_mcp.models import ApiErrorPayload
from webscraping_ai_mcp.queue import RequestQueue

logger = logging.getLogger(__name__)


def encode_params(params: dict[str, Any]) -> dict[str, Any]:
    """Convert a parameter mapping to the query-string form the API expects.

    Unset values are dropped, booleans become ``true``/``false`` and lists are
    sent as repeated ``key[]`` entries.

    Args:
        params: Parameter mapping of scalars and lists of strings

    Returns:
        Mapping suitable for the ``params`` argument of ``requests``
    """
    encoded: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            encoded[f"{key}[]"] = [str(item) for item in value]
        else:
            encoded[key] = value
    return encoded


def _response_body(response: requests.Response) -> Any:
    """Decode JSON bodies, return everything else as text."""
    content_type = response.headers.get("Content-Type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


class WebScrapingAIClient:
    """Authenticated client for the WebScraping.AI API.

    Every call goes through a ``RequestQueue`` so at most
    ``config.concurrency`` upstream requests are in flight, however many tool
    calls arrive at once. Blocking HTTP I/O runs in the default executor.
    """

    def __init__(
        self,
        config: ClientConfig,
        session: requests.Session | None = None,
        metrics: ServerMetrics | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Immutable connection settings
            session: HTTP session to use (a new one is created if omitted)
            metrics: Metrics sink (the global server metrics if omitted)
        """
        self.config = config
        self.queue = RequestQueue(config.concurrency)
        self.metrics = metrics if metrics is not None else get_metrics()

        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": f"webscraping-ai-mcp/{__version__}",
            }
        )

        logger.info(
            f"WebScrapingAIClient initialized (base_url={config.base_url}, "
            f"concurrency={config.concurrency}, timeout_ms={config.timeout_ms})"
        )

    def build_params(self, params: dict[str, Any]) -> dict[str, Any]:
        """Merge caller parameters with the credentials every request carries.

        The API key and ``from_mcp_server`` flag are applied last so callers
        cannot shadow them.
        """
        return encode_params({**params, "api_key": self.config.api_key, "from_mcp_server": True})

    async def request(self, endpoint: str, params: dict[str, Any]) -> Any:
        """Call an API endpoint through the concurrency queue.

        The configured timeout bounds the connect and each socket read
        separately, not the whole exchange, so a server that keeps trickling
        bytes can hold a queue slot longer than ``timeout_ms``.

        Args:
            endpoint: Endpoint path, e.g. ``/html``
            params: Query parameters for the call

        Returns:
            The response body: parsed JSON for JSON responses, text otherwise

        Raises:
            ApiError: On timeout, network failure or any non-2xx response
        """
        url = f"{self.config.base_url}{endpoint}"
        query = self.build_params(params)
        return await self.queue.submit(lambda: self._get(endpoint, url, query))

    async def _get(self, endpoint: str, url: str, query: dict[str, Any]) -> Any:
        loop = asyncio.get_running_loop()
        started = time.monotonic()
        try:
            response = await loop.run_in_executor(
                None,
                lambda: self.session.get(url, params=query, timeout=self.config.timeout_seconds),
            )
        except requests.RequestException as e:
            elapsed_ms = (time.monotonic() - started) * 1000
            logger.warning(f"Request to {endpoint} failed: {type(e).__name__}")
            self.metrics.record_request(
                endpoint=endpoint, success=False, elapsed_ms=elapsed_ms, error=type(e).__name__
            )
            raise ApiError(ApiErrorPayload()) from e

        elapsed_ms = (time.monotonic() - started) * 1000
        body = _response_body(response)

        if not 200 <= response.status_code < 300:
            logger.warning(f"Request to {endpoint} returned HTTP {response.status_code}")
            self.metrics.record_request(
                endpoint=endpoint,
                success=False,
                status_code=response.status_code,
                elapsed_ms=elapsed_ms,
                error=f"HTTP {response.status_code}",
            )
            raise ApiError(
                ApiErrorPayload(
                    status_code=response.status_code,
                    status_message=response.reason,
                    body=body,
                )
            )

        logger.debug(f"Request to {endpoint} returned HTTP {response.status_code} in {elapsed_ms:.0f}ms")
        self.metrics.record_request(
            endpoint=endpoint, success=True, status_code=response.status_code, elapsed_ms=elapsed_ms
        )
        return body

    async def question(self, url: str, question: str, **options: Any) -> Any:
        """Ask an LLM a question about the target page."""
        return await self.request("/ai/question", {"url": url, "question": question, **options})

    async def fields(self, url: str, fields: dict[str, str], **options: Any) -> Any:
        """Extract named fields from the target page; ``fields`` is sent as JSON."""
        return await self.request("/ai/fields", {"url": url, "fields": json.dumps(fields), **options})

    async def html(self, url: str, **options: Any) -> Any:
        return await self.request("/html", {"url": url, **options})

    async def text(self, url: str, **options: Any) -> Any:
        return await self.request("/text", {"url": url, **options})

    async def selected(self, url: str, selector: str, **options: Any) -> Any:
        return await self.request("/selected", {"url": url, "selector": selector, **options})

    async def selected_multiple(self, url: str, selectors: list[str], **options: Any) -> Any:
        return await self.request("/selected-multiple", {"url": url, "selectors": selectors, **options})

    async def account(self) -> Any:
        """Get account usage and remaining credits."""
        return await self.request("/account", {})

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
