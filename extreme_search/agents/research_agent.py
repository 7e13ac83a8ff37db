from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel

from extreme_search.agents.base import BaseAgent
from extreme_search.config import settings
from extreme_search.models.plan import ResearchPlan
from extreme_search.models.run import OrchestratorRun
from extreme_search.services.prompt_store import format_today, render_prompt
from extreme_search.tools.web_search import TOOL_NAME, WebSearchInput, WebSearchTool


class ResearchAgent(BaseAgent):
    """Autonomous research agent whose only capability is web search."""

    name = "research_agent"

    def __init__(
        self,
        model: str | None = None,
        client: Any = None,
        search_tool: WebSearchTool | None = None,
    ):
        super().__init__(model, client=client)
        self.search_tool = search_tool or WebSearchTool()
        self.tools = [WebSearchTool.definition()]

    @staticmethod
    def build_system_prompt(plan: ResearchPlan, step_budget: int, today: date | None = None) -> str:
        return render_prompt(
            "agent.system_prompt",
            today=format_today(today),
            step_budget=step_budget,
            step_allowance=settings.step_error_allowance,
            plan_json=plan.to_json(),
        )

    def parse_tool_input(self, tool_name: str, tool_input: dict[str, Any]) -> BaseModel:
        if tool_name == TOOL_NAME:
            return WebSearchInput.model_validate(tool_input)
        raise NotImplementedError(f"Unknown tool: {tool_name}")

    async def handle_tool_call(
        self,
        run: OrchestratorRun,
        tool_call_id: str,
        tool_name: str,
        params: BaseModel,
    ) -> Any:
        if tool_name == TOOL_NAME and isinstance(params, WebSearchInput):
            results = await self.search_tool(run, tool_call_id, params)
            return [r.to_tool_output() for r in results]

        raise NotImplementedError(f"Unknown tool: {tool_name}")
