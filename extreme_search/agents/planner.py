from __future__ import annotations

import time
from datetime import date
from typing import Any

from extreme_search.agents.base import log_response_usage
from extreme_search.config import settings
from extreme_search.llm_client import get_client, get_planner_model
from extreme_search.models.plan import PlanResult, PlanSchemaViolation, ResearchPlan, parse_plan
from extreme_search.services import streaming
from extreme_search.services.event_sink import EventSink, emit
from extreme_search.services.prompt_store import format_today, render_prompt

PLAN_TOOL_NAME = "submit_research_plan"


class Planner:
    """Turns a research prompt into a bounded ResearchPlan with one structured call.

    The model is forced to answer through a tool whose input schema is the plan
    schema; the tool input is then validated. Non-conforming output comes back as
    a PlanResult carrying the violation rather than as an exception. Transport
    errors from the client propagate.
    """

    name = "planner"

    def __init__(self, model: str | None = None, client: Any = None):
        self.model = model or get_planner_model()
        self.client = client

    def _client(self) -> Any:
        if self.client is None:
            self.client = get_client()
        return self.client

    @staticmethod
    def tool_definition() -> dict[str, Any]:
        return {
            "name": PLAN_TOOL_NAME,
            "description": "Submit the structured research plan.",
            "input_schema": ResearchPlan.input_schema(),
        }

    async def plan(
        self,
        prompt: str,
        *,
        sink: EventSink | None = None,
        today: date | None = None,
    ) -> PlanResult:
        emit(sink, streaming.planning_started())

        t0 = time.monotonic()
        response = await self._client().messages.create(
            model=self.model,
            max_tokens=settings.planner_max_tokens,
            system=render_prompt("planner.system_prompt"),
            messages=[
                {
                    "role": "user",
                    "content": render_prompt(
                        "planner.user_prompt", topic=prompt, today=format_today(today)
                    ),
                }
            ],
            tools=[self.tool_definition()],
            tool_choice={"type": "tool", "name": PLAN_TOOL_NAME},
        )
        log_response_usage(self.model, "planner.plan", response, int((time.monotonic() - t0) * 1000))

        raw_plan = None
        for block in getattr(response, "content", None) or []:
            if getattr(block, "type", None) == "tool_use" and block.name == PLAN_TOOL_NAME:
                raw_plan = block.input
                break

        if raw_plan is None:
            return PlanResult(
                violation=PlanSchemaViolation(message="model returned no structured plan")
            )

        result = parse_plan(raw_plan)
        if result.plan is not None:
            emit(sink, streaming.plan_ready(result.plan))
        return result
