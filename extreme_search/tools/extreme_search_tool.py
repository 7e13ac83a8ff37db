"""Tool wrapper that lets a host chat agent call the whole research engine."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from extreme_search.agents.orchestrator import ResearchOrchestrator, research_topic
from extreme_search.services.event_sink import EventSink
from extreme_search.services.prompt_store import render_prompt

TOOL_NAME = "extreme_search"


class ExtremeSearchInput(BaseModel):
    prompt: str = Field(min_length=1)


def extreme_search_tool_definition() -> dict[str, Any]:
    return {
        "name": TOOL_NAME,
        "description": render_prompt("tool.extreme_search_description"),
        "input_schema": {
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": render_prompt("tool.prompt_description"),
                }
            },
            "required": ["prompt"],
        },
    }


async def execute_extreme_search_tool(
    tool_input: dict[str, Any],
    sink: EventSink | None = None,
    *,
    orchestrator: ResearchOrchestrator | None = None,
) -> dict[str, Any]:
    params = ExtremeSearchInput.model_validate(tool_input)
    bundle = await research_topic(params.prompt, sink, orchestrator=orchestrator)
    return {"research": bundle.to_dict()}
