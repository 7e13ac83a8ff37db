from __future__ import annotations

from typing import Any

from extreme_search.config import settings
from extreme_search.models.events import CodeStatus, EventKind, ProgressEvent, QueryStatus
from extreme_search.models.plan import ResearchPlan
from extreme_search.models.research import SearchResult

PLANNING_TITLE = "Planning research"
PLAN_READY_TITLE = "Research plan ready, starting up research agent"
RESEARCH_COMPLETED_TITLE = "Research completed"


def plan_status(title: str, plan: ResearchPlan | None = None) -> ProgressEvent:
    """Emit a plan status transition; the plan itself only rides on the ready event."""
    data: dict[str, Any] = {"status": {"title": title}}
    if plan is not None:
        data["plan"] = plan.to_list()
    return ProgressEvent(kind=EventKind.PLAN, data=data)


def planning_started() -> ProgressEvent:
    return plan_status(PLANNING_TITLE)


def plan_ready(plan: ResearchPlan) -> ProgressEvent:
    return plan_status(PLAN_READY_TITLE, plan)


def research_completed() -> ProgressEvent:
    return plan_status(RESEARCH_COMPLETED_TITLE)


def query(query_id: str, query_text: str, status: QueryStatus) -> ProgressEvent:
    return ProgressEvent(
        kind=EventKind.QUERY,
        data={"queryId": query_id, "query": query_text, "status": status.value},
    )


def source(query_id: str, result: SearchResult) -> ProgressEvent:
    return ProgressEvent(
        kind=EventKind.SOURCE,
        data={
            "queryId": query_id,
            "source": {
                "title": result.title,
                "url": result.url,
                "favicon": result.favicon,
            },
        },
    )


def content(query_id: str, result: SearchResult, preview_chars: int | None = None) -> ProgressEvent:
    limit = preview_chars if preview_chars is not None else settings.content_preview_chars
    return ProgressEvent(
        kind=EventKind.CONTENT,
        data={
            "queryId": query_id,
            "content": {
                "title": result.title or "",
                "url": result.url,
                "text": f"{(result.content or '')[:limit]}...",
                "favicon": result.favicon or "",
            },
        },
    )


def code(
    code_id: str,
    title: str,
    source_code: str,
    status: CodeStatus,
    *,
    result: Any = None,
    charts: list[Any] | None = None,
) -> ProgressEvent:
    data: dict[str, Any] = {
        "codeId": code_id,
        "title": title,
        "code": source_code,
        "status": status.value,
    }
    if result is not None:
        data["result"] = result
    if charts is not None:
        data["charts"] = charts
    return ProgressEvent(kind=EventKind.CODE, data=data)
