from __future__ import annotations

import asyncio
import time
from datetime import date
from typing import Any

from extreme_search.agents.planner import Planner
from extreme_search.agents.research_agent import ResearchAgent
from extreme_search.config import settings
from extreme_search.exceptions import ResearchTimeoutError
from extreme_search.llm_client import get_client, get_model
from extreme_search.models.plan import ResearchPlan
from extreme_search.models.research import AgentRunResult, ResearchBundle
from extreme_search.models.run import OrchestratorRun
from extreme_search.services import logger as log_service
from extreme_search.services import streaming
from extreme_search.services.aggregation import aggregate_sources, extract_charts
from extreme_search.services.event_sink import EventSink, emit
from extreme_search.tools.content_retrieval import ContentRetrievalChain
from extreme_search.tools.web_search import WebSearchTool


class ResearchOrchestrator:
    """Orchestrates one research run.

    Flow:
      1. Generate a bounded research plan (Planner)
      2. Run the research agent with web_search as its only tool, capped at
         one step per plan todo
      3. Deduplicate collected sources and extract charts
      4. Return the ResearchBundle

    Progress events go to the optional sink in emission order.
    """

    def __init__(
        self,
        model: str | None = None,
        client: Any = None,
        *,
        planner: Planner | None = None,
        retrieval: ContentRetrievalChain | None = None,
        timeout_seconds: float | None = None,
    ):
        self.model = model or get_model()
        self.client = client
        # An explicit model covers planning too, unless a planner override is configured.
        self.planner = planner or Planner(
            model=settings.planner_model.strip() or model,
            client=client,
        )
        self.retrieval = retrieval or ContentRetrievalChain()
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.research_timeout_seconds
        )

    def _client(self) -> Any:
        if self.client is None:
            self.client = get_client()
        return self.client

    def _build_agent(self) -> ResearchAgent:
        return ResearchAgent(
            model=self.model,
            client=self._client(),
            search_tool=WebSearchTool(retrieval=self.retrieval),
        )

    async def run(
        self,
        prompt: str,
        plan: ResearchPlan,
        step_budget: int,
        *,
        sink: EventSink | None = None,
        today: date | None = None,
    ) -> tuple[AgentRunResult, OrchestratorRun]:
        """Run the bounded agent pass; generation failures propagate."""
        run = OrchestratorRun(step_budget=step_budget, sink=sink)
        agent = self._build_agent()
        system_prompt = agent.build_system_prompt(plan, step_budget, today)

        log_service.log_research_step(
            run.run_id, "agent", "started", {"step_budget": step_budget, "model": self.model}
        )
        try:
            result = await asyncio.wait_for(
                agent.run(run, prompt, system_prompt=system_prompt),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            log_service.log_research_step(
                run.run_id, "agent", "timeout", {"steps_used": run.steps_used}
            )
            raise ResearchTimeoutError(
                f"Research agent exceeded {self.timeout_seconds:.0f}s"
            ) from exc

        log_service.log_research_step(
            run.run_id,
            "agent",
            "completed",
            {"steps_used": result.steps_used, "tool_calls": len(result.tool_results)},
        )
        return result, run

    async def research(
        self,
        prompt: str,
        sink: EventSink | None = None,
        *,
        today: date | None = None,
    ) -> ResearchBundle:
        t0 = time.monotonic()
        plan_result = await self.planner.plan(prompt, sink=sink, today=today)
        if not plan_result.ok:
            log_service.log_event(
                event_type="plan_rejected",
                message="Research plan violates schema",
                violation=plan_result.violation.message if plan_result.violation else None,
            )
        plan = plan_result.unwrap()

        step_budget = plan.step_budget
        result, run = await self.run(prompt, plan, step_budget, sink=sink, today=today)

        bundle = ResearchBundle(
            text=result.text,
            tool_results=result.tool_results,
            sources=aggregate_sources(run.sources),
            charts=extract_charts(result.tool_results),
        )
        emit(sink, streaming.research_completed())

        log_service.log_event(
            event_type="research_complete",
            message="Research completed",
            run_id=run.run_id,
            steps_used=result.steps_used,
            step_budget=step_budget,
            sources=len(bundle.sources),
            runtime_ms=int((time.monotonic() - t0) * 1000),
        )
        return bundle


async def research_topic(
    prompt: str,
    sink: EventSink | None = None,
    *,
    orchestrator: ResearchOrchestrator | None = None,
) -> ResearchBundle:
    """Public entry point: plan, research and aggregate one prompt."""
    active = orchestrator or ResearchOrchestrator()
    try:
        return await active.research(prompt, sink)
    except Exception:
        log_service.logger.exception("research failed")
        raise
