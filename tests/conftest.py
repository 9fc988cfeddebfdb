"""Pytest configuration and fixtures for webscraping-ai-mcp tests."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import Mock

import pytest
import requests

from webscraping_ai_mcp.client import WebScrapingAIClient
from webscraping_ai_mcp.config import ClientConfig, Settings
from webscraping_ai_mcp.metrics import ServerMetrics


def make_response(
    status_code: int = 200,
    body: Any = "",
    content_type: str | None = None,
    reason: str = "OK",
) -> requests.Response:
    """Build a real requests.Response with the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.encoding = "utf-8"
    if isinstance(body, (dict, list)):
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = content_type or "application/json; charset=utf-8"
    else:
        response._content = str(body).encode("utf-8")
        response.headers["Content-Type"] = content_type or "text/html; charset=utf-8"
    return response


@pytest.fixture
def response_factory():
    """Factory for fake upstream responses."""
    return make_response


@pytest.fixture
def client_config() -> ClientConfig:
    """Client configuration pointing at a fake upstream."""
    return ClientConfig(
        api_key="test-api-key",
        base_url="https://api.example.test",
        timeout_ms=5000,
        concurrency=2,
    )


@pytest.fixture
def mock_session() -> Mock:
    """Stand-in for requests.Session returning an empty 200 response."""
    session = Mock()
    session.headers = {}
    session.get.return_value = make_response(200, "")
    return session


@pytest.fixture
def metrics() -> ServerMetrics:
    return ServerMetrics()


@pytest.fixture
def client(client_config: ClientConfig, mock_session: Mock, metrics: ServerMetrics) -> WebScrapingAIClient:
    """Request client wired to the mock session."""
    return WebScrapingAIClient(client_config, session=mock_session, metrics=metrics)


@pytest.fixture
def settings() -> Settings:
    """Settings with a test key and the stock defaults."""
    return Settings(api_key="test-api-key", api_url="https://api.example.test")
