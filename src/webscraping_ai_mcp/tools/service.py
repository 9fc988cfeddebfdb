"""Dispatch of tool invocations to the request client."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable

from mcp.types import CallToolResult, TextContent

from webscraping_ai_mcp.client import WebScrapingAIClient
from webscraping_ai_mcp.errors import ToolValidationError

logger = logging.getLogger(__name__)


def as_text(result: Any) -> str:
    """Strings pass through; anything else is serialized as compact JSON."""
    if isinstance(result, str):
        return result
    return json.dumps(result, ensure_ascii=False, separators=(",", ":"))


def as_pretty_json(result: Any) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False)


def as_html(result: Any, fmt: str | None) -> str:
    """Wrap the result as ``{"html": ...}`` when JSON output was requested."""
    if fmt == "json":
        return json.dumps({"html": result}, ensure_ascii=False, separators=(",", ":"))
    return as_text(result)


@dataclass(frozen=True)
class ToolSpec:
    """Dispatch entry for one tool.

    ``required`` fields are validated, removed from the argument bag and passed
    positionally to ``method``; the remaining arguments are forwarded as options
    unless ``forward_options`` is off.
    Keys in ``presentation`` are consumed here and never sent upstream.
    """

    name: str
    method: str
    required: tuple[str, ...]
    render: Callable[[Any, dict[str, Any]], str]
    presentation: tuple[str, ...] = ()
    forward_options: bool = True


TOOL_SPECS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            name="webscraping_ai_question",
            method="question",
            required=("url", "question"),
            render=lambda result, _: as_text(result),
        ),
        ToolSpec(
            name="webscraping_ai_fields",
            method="fields",
            required=("url", "fields"),
            render=lambda result, _: as_pretty_json(result),
        ),
        ToolSpec(
            name="webscraping_ai_html",
            method="html",
            required=("url",),
            render=lambda result, extra: as_html(result, extra.get("format")),
            presentation=("format",),
        ),
        ToolSpec(
            name="webscraping_ai_text",
            method="text",
            required=("url",),
            render=lambda result, _: as_text(result),
        ),
        ToolSpec(
            name="webscraping_ai_selected",
            method="selected",
            required=("url", "selector"),
            render=lambda result, extra: as_html(result, extra.get("format")),
            presentation=("format",),
        ),
        ToolSpec(
            name="webscraping_ai_selected_multiple",
            method="selected_multiple",
            required=("url", "selectors"),
            render=lambda result, _: as_pretty_json(result),
        ),
        ToolSpec(
            name="webscraping_ai_account",
            method="account",
            required=(),
            render=lambda result, _: as_pretty_json(result),
            forward_options=False,
        ),
    )
}


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def split_arguments(spec: ToolSpec, arguments: dict[str, Any]) -> tuple[list[Any], dict[str, Any], dict[str, Any]]:
    """Separate an argument bag into required values, presentation options and the rest.

    Args:
        spec: Dispatch entry of the tool being called
        arguments: Argument bag as received

    Returns:
        Tuple of (required values in declared order, presentation options, upstream options)

    Raises:
        ToolValidationError: If any required field is absent or empty
    """
    missing = [name for name in spec.required if _is_missing(arguments.get(name))]
    if missing:
        raise ToolValidationError(f"Missing required arguments for {spec.name}: {', '.join(missing)}")

    positional = [arguments[name] for name in spec.required]
    presentation = {key: arguments[key] for key in spec.presentation if key in arguments}
    options = {
        key: value
        for key, value in arguments.items()
        if key not in spec.required and key not in spec.presentation
    }
    return positional, presentation, options


def envelope(text: str, is_error: bool = False) -> CallToolResult:
    """Build the uniform tool response."""
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


class ToolRouter:
    """Maps tool names to request client calls.

    Holds no mutable state: every invocation is independent, and admission
    control is left to the client's queue.
    """

    def __init__(self, client: WebScrapingAIClient) -> None:
        self.client = client

    @staticmethod
    def tool_names() -> list[str]:
        return list(TOOL_SPECS)

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> CallToolResult:
        """Run a tool and wrap the outcome in a response envelope.

        Validation failures and upstream errors are returned as
        ``isError=True`` envelopes; this method does not raise.

        Args:
            name: Tool name
            arguments: Argument bag for the tool

        Returns:
            CallToolResult with a single text content item
        """
        try:
            spec = TOOL_SPECS.get(name)
            if spec is None:
                raise ToolValidationError(f"Unknown tool: {name}")

            positional, presentation, options = split_arguments(spec, dict(arguments or {}))
            method = getattr(self.client, spec.method)
            if spec.forward_options:
                result = await method(*positional, **options)
            else:
                result = await method(*positional)
            return envelope(spec.render(result, presentation))
        except ToolValidationError as e:
            logger.info(f"Rejected {name}: {e}")
            return envelope(str(e), is_error=True)
        except Exception as e:
            logger.warning(f"Tool {name} failed: {e}")
            return envelope(str(e), is_error=True)
