"""Environment-driven configuration for the MCP server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from webscraping_ai_mcp.errors import ConfigError

ENV_PREFIX = "WEBSCRAPING_AI_"
DEFAULT_API_URL = "https://api.webscraping.ai"
DEFAULT_REQUEST_TIMEOUT_MS = 15000
DEFAULT_CONCURRENCY = 5
DEFAULT_PROXY_TYPE = "residential"
DEFAULT_PAGE_TIMEOUT_MS = 15000
DEFAULT_JS_TIMEOUT_MS = 2000


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the upstream API. Immutable once built."""

    api_key: str
    base_url: str = DEFAULT_API_URL
    timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS
    concurrency: int = DEFAULT_CONCURRENCY

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigError("WebScraping.AI API key is required")
        if self.timeout_ms <= 0:
            raise ConfigError(f"timeout_ms must be positive, got {self.timeout_ms}")
        if self.concurrency < 1:
            raise ConfigError(f"concurrency must be at least 1, got {self.concurrency}")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


class Settings(BaseSettings):
    """Process-wide settings read once at startup.

    Fields are populated from ``WEBSCRAPING_AI_*`` environment variables or a
    ``.env`` file. The ``default_*`` values are per-call tool options: they are
    merged into each tool's argument bag and sent upstream as plain query
    parameters.
    """

    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT_MS
    concurrency_limit: int = DEFAULT_CONCURRENCY
    default_proxy_type: Literal["datacenter", "residential"] = DEFAULT_PROXY_TYPE
    default_js_rendering: bool = True
    default_timeout: int = DEFAULT_PAGE_TIMEOUT_MS
    default_js_timeout: int = DEFAULT_JS_TIMEOUT_MS
    log_level: str = Field("INFO", validation_alias=AliasChoices("log_level", "LOG_LEVEL"))

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_file=".env", extra="ignore", frozen=True)

    @field_validator("default_js_rendering", mode="before")
    @classmethod
    def _js_rendering(cls, value: Any) -> Any:
        # Anything except the literal "false" keeps JS rendering on
        if isinstance(value, str):
            return value != "false"
        return value

    @field_validator("log_level")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the environment and ``.env``.

        Raises:
            ConfigError: If a variable has the wrong type or an unknown value
        """
        try:
            return cls()
        except ValidationError as e:
            problems = "; ".join(
                f"{ENV_PREFIX}{str(error['loc'][0]).upper()}: {error['msg']}" for error in e.errors()
            )
            raise ConfigError(f"Invalid configuration: {problems}") from None

    def client_config(self) -> ClientConfig:
        """Return the immutable client configuration.

        Raises:
            ConfigError: If the API key is missing or limits are invalid
        """
        return ClientConfig(
            api_key=self.api_key,
            base_url=self.api_url,
            timeout_ms=self.request_timeout,
            concurrency=self.concurrency_limit,
        )

    def default_options(self) -> dict[str, Any]:
        """Default option values merged into every scraping tool call."""
        return {
            "timeout": self.default_timeout,
            "js": self.default_js_rendering,
            "js_timeout": self.default_js_timeout,
            "proxy": self.default_proxy_type,
        }

    def public_dict(self) -> dict[str, Any]:
        """Settings as a dictionary with the API key masked."""
        masked = f"{self.api_key[:4]}..." if len(self.api_key) > 8 else "***"
        data = self.model_dump()
        data["api_key"] = masked if self.api_key else ""
        return data
