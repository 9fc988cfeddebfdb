"""Pydantic model for normalized upstream errors."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ApiErrorPayload(BaseModel):
    """Normalized error produced once per failed upstream call."""

    message: str = Field(default="API Error", description="Fixed error label")
    status_code: int | None = Field(default=None, description="HTTP status code, if a response was received")
    status_message: str | None = Field(default=None, description="HTTP reason phrase, if a response was received")
    body: Any | None = Field(default=None, description="Response body, if a response was received")

    def to_text(self) -> str:
        """Serialize as compact JSON, omitting fields that were never set."""
        return self.model_dump_json(exclude_none=True)
