from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from extreme_search.models.events import ProgressEvent
from extreme_search.models.research import SearchResult, ToolCallRecord
from extreme_search.services.event_sink import EventSink


@dataclass
class OrchestratorRun:
    """State owned by a single research run.

    Mutated only from the run's sequential step loop.
    """

    step_budget: int
    sink: EventSink | None = None
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    sources: list[SearchResult] = field(default_factory=list)
    tool_results: list[ToolCallRecord] = field(default_factory=list)
    steps_used: int = 0

    @property
    def budget_exhausted(self) -> bool:
        return self.steps_used >= self.step_budget

    def consume_step(self) -> bool:
        """Claim one tool-call step; False once the budget is spent."""
        if self.budget_exhausted:
            return False
        self.steps_used += 1
        return True

    def emit(self, event: ProgressEvent) -> None:
        if self.sink is not None:
            self.sink.write(event)

    def record(self, record: ToolCallRecord) -> None:
        self.tool_results.append(record)
