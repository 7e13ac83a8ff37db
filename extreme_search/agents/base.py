from __future__ import annotations

import json
import time
from typing import Any

from pydantic import BaseModel, ValidationError

from extreme_search.config import settings
from extreme_search.llm_client import get_client, get_model
from extreme_search.models.research import AgentRunResult, ToolCallRecord
from extreme_search.models.run import OrchestratorRun
from extreme_search.services import logger as log_service
from extreme_search.services.prompt_store import render_prompt


def log_response_usage(model: str, caller: str, response: Any, elapsed_ms: int) -> None:
    usage = getattr(response, "usage", None)
    input_tokens = getattr(usage, "input_tokens", 0) if usage else 0
    output_tokens = getattr(usage, "output_tokens", 0) if usage else 0
    log_service.log_llm_call(
        model=model,
        caller=caller,
        input_tokens=input_tokens if isinstance(input_tokens, int) else 0,
        output_tokens=output_tokens if isinstance(output_tokens, int) else 0,
        duration_ms=elapsed_ms,
    )


def response_text(response: Any) -> str:
    blocks = getattr(response, "content", None) or []
    return "\n".join(
        b.text for b in blocks if getattr(b, "type", None) == "text" and isinstance(b.text, str)
    ).strip()


class BaseAgent:
    """Base agent that wraps the Anthropic tool-use loop under a step budget.

    Subclasses define `tools`, `parse_tool_input` and `handle_tool_call`.
    Every executed tool call consumes one step of the run's budget. Once the
    budget is spent, further tool calls are rejected without running, and the
    model is given one text-only turn to wrap up.
    """

    name: str = "base"
    tools: list[dict[str, Any]] = []

    def __init__(self, model: str | None = None, client: Any = None):
        self.model = model or get_model()
        self.client = client

    def _client(self) -> Any:
        if self.client is None:
            self.client = get_client()
        return self.client

    @property
    def tool_names(self) -> set[str]:
        return {tool["name"] for tool in self.tools}

    def parse_tool_input(self, tool_name: str, tool_input: dict[str, Any]) -> BaseModel:
        """Validate raw tool input. Must be overridden by subclasses that define tools."""
        raise NotImplementedError(f"Tool {tool_name} not handled")

    async def handle_tool_call(
        self,
        run: OrchestratorRun,
        tool_call_id: str,
        tool_name: str,
        params: BaseModel,
    ) -> Any:
        """Execute a validated tool call and return its JSON-serializable output."""
        raise NotImplementedError(f"Tool {tool_name} not handled")

    async def _execute_tool_block(self, run: OrchestratorRun, block: Any) -> dict[str, Any]:
        tool_input = block.input if isinstance(block.input, dict) else {}
        output: Any
        is_error = False

        if block.name not in self.tool_names:
            output = f"Error: unknown tool {block.name}"
            is_error = True
        else:
            try:
                params = self.parse_tool_input(block.name, tool_input)
            except ValidationError as e:
                params = None
                output = f"Error: invalid input for {block.name}: {e.error_count()} validation error(s)"
                is_error = True

            if params is not None:
                if not run.consume_step():
                    output = render_prompt(
                        "agent.budget_exhausted_result", step_budget=run.step_budget
                    )
                    is_error = True
                else:
                    try:
                        output = await self.handle_tool_call(run, block.id, block.name, params)
                    except Exception as e:
                        output = f"Error: {e}"
                        is_error = True

        run.record(
            ToolCallRecord(
                tool_call_id=block.id,
                tool_name=block.name,
                input=tool_input,
                output=output,
                is_error=is_error,
            )
        )
        log_service.log_research_step(
            run.run_id,
            step_type=block.name,
            status="error" if is_error else "completed",
            data={"tool_call_id": block.id, "steps_used": run.steps_used},
        )

        result: dict[str, Any] = {
            "type": "tool_result",
            "tool_use_id": block.id,
            "content": output if isinstance(output, str) else json.dumps(output),
        }
        if is_error:
            result["is_error"] = True
        return result

    async def run(
        self,
        run: OrchestratorRun,
        user_message: str,
        *,
        system_prompt: str,
    ) -> AgentRunResult:
        """Run the tool-use loop until the model stops calling tools or the budget is spent."""
        messages: list[dict[str, Any]] = [{"role": "user", "content": user_message}]
        max_turns = run.step_budget + max(settings.step_error_allowance, 0) + 1
        final_text = ""

        for _ in range(max_turns):
            kwargs: dict[str, Any] = {
                "model": self.model,
                "max_tokens": settings.agent_max_tokens,
                "temperature": settings.agent_temperature,
                "system": system_prompt,
                "messages": messages,
            }
            if self.tools:
                kwargs["tools"] = self.tools
                if run.budget_exhausted:
                    kwargs["tool_choice"] = {"type": "none"}

            t0 = time.monotonic()
            response = await self._client().messages.create(**kwargs)
            log_response_usage(self.model, self.name, response, int((time.monotonic() - t0) * 1000))

            text = response_text(response)
            if text:
                final_text = text

            tool_use_blocks = [b for b in response.content if b.type == "tool_use"]
            if not tool_use_blocks:
                break

            messages.append({"role": "assistant", "content": response.content})

            # One at a time: each call finishes before the next starts.
            tool_results: list[dict[str, Any]] = []
            for block in tool_use_blocks:
                tool_results.append(await self._execute_tool_block(run, block))

            user_content: list[dict[str, Any]] = list(tool_results)
            if run.budget_exhausted:
                user_content.append(
                    {"type": "text", "text": render_prompt("agent.wrap_up_prompt")}
                )
            messages.append({"role": "user", "content": user_content})

        return AgentRunResult(
            text=final_text,
            tool_results=list(run.tool_results),
            steps_used=run.steps_used,
        )
