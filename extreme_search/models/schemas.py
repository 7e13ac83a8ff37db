from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# --- Requests ---


class ResearchRequest(BaseModel):
    prompt: str = Field(min_length=1)
    model: str | None = None


# --- Responses ---


class ResearchResponse(BaseModel):
    text: str
    toolResults: list[dict[str, Any]]
    sources: list[dict[str, Any]]
    charts: list[Any]
