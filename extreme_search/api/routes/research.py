from __future__ import annotations

import asyncio
import json as _json

from fastapi import APIRouter, HTTPException
from sse_starlette.sse import EventSourceResponse

from extreme_search.agents.orchestrator import ResearchOrchestrator, research_topic
from extreme_search.exceptions import PlanSchemaError
from extreme_search.models.events import SSE_EVENT_NAME
from extreme_search.models.research import ResearchBundle
from extreme_search.models.schemas import ResearchRequest, ResearchResponse
from extreme_search.services import logger as log_service
from extreme_search.services.event_sink import QueueSink

router = APIRouter(prefix="/api/research", tags=["research"])

RESEARCH_FAILED = "research failed"


def _orchestrator(request: ResearchRequest) -> ResearchOrchestrator:
    return ResearchOrchestrator(model=request.model)


@router.post("", response_model=ResearchResponse)
async def run_research(request: ResearchRequest):
    """Run one research prompt to completion and return the bundle."""
    log_service.log_event(
        event_type="research_started",
        message="Research started",
        prompt=request.prompt[:100],
    )
    try:
        bundle = await research_topic(request.prompt, orchestrator=_orchestrator(request))
    except PlanSchemaError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=502, detail=RESEARCH_FAILED) from e
    return bundle.to_dict()


@router.post("/stream")
async def stream_research(request: ResearchRequest):
    """SSE endpoint streaming progress events, then the final bundle."""
    orchestrator = _orchestrator(request)

    async def event_generator():
        sink = QueueSink()

        async def produce() -> ResearchBundle:
            try:
                return await research_topic(request.prompt, sink, orchestrator=orchestrator)
            finally:
                sink.close()

        task = asyncio.create_task(produce())
        try:
            async for event in sink:
                yield {"event": SSE_EVENT_NAME, "data": _json.dumps(event.to_dict())}

            try:
                bundle = await task
            except Exception as e:
                log_service.log_event(
                    event_type="stream_error",
                    message="Unhandled error in research stream",
                    error=str(e),
                )
                yield {"event": "error", "data": _json.dumps({"message": RESEARCH_FAILED})}
                return

            yield {"event": "research_complete", "data": _json.dumps(bundle.to_dict())}
        finally:
            if not task.done():
                task.cancel()

    return EventSourceResponse(event_generator())
