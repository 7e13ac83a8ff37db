from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from extreme_search.config import settings
from extreme_search.models.events import QueryStatus
from extreme_search.models.research import SearchCategory, SearchResult
from extreme_search.models.run import OrchestratorRun
from extreme_search.services import streaming
from extreme_search.services.prompt_store import render_prompt
from extreme_search.tools import search_provider
from extreme_search.tools.content_retrieval import ContentRetrievalChain

logger = logging.getLogger(__name__)

TOOL_NAME = "web_search"


class WebSearchInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(min_length=1, max_length=settings.max_query_chars)
    category: SearchCategory | None = None
    include_domains: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices("include_domains", "includeDomains"),
    )


def merge_with_retrieved(
    results: list[SearchResult], retrieved: list[SearchResult]
) -> list[SearchResult]:
    """Prefer retrieved full text per URL, keeping the search snippet otherwise."""
    by_url = {r.url: r for r in retrieved}
    merged: list[SearchResult] = []
    for original in results:
        full = by_url.get(original.url)
        if full is None:
            merged.append(original)
            continue
        merged.append(
            SearchResult(
                title=full.title or original.title,
                url=original.url,
                content=full.content or original.content,
                published_date=full.published_date or original.published_date,
                favicon=full.favicon or original.favicon,
            )
        )
    return merged


class WebSearchTool:
    """Web search composed with full-text retrieval, exposed to the agent as one tool."""

    name = TOOL_NAME

    def __init__(self, retrieval: ContentRetrievalChain | None = None):
        self.retrieval = retrieval or ContentRetrievalChain()

    @staticmethod
    def definition() -> dict[str, Any]:
        return {
            "name": TOOL_NAME,
            "description": render_prompt("agent.web_search_description"),
            "input_schema": {
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "maxLength": settings.max_query_chars,
                        "description": "The search query to achieve the todo",
                    },
                    "category": {
                        "type": "string",
                        "enum": [c.value for c in SearchCategory],
                        "description": "The category of the search if relevant",
                    },
                    "include_domains": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "The domains to include in the search for results",
                    },
                },
                "required": ["query"],
            },
        }

    async def __call__(
        self,
        run: OrchestratorRun,
        tool_call_id: str,
        params: WebSearchInput,
    ) -> list[SearchResult]:
        query = params.query
        run.emit(streaming.query(tool_call_id, query, QueryStatus.STARTED))

        results: list[SearchResult] = []
        try:
            response = await search_provider.search(
                query,
                category=params.category,
                include_domains=params.include_domains,
            )
            results = response.results
            run.sources.extend(results)

            for result in results:
                run.emit(streaming.source(tool_call_id, result))

            if results:
                run.emit(streaming.query(tool_call_id, query, QueryStatus.READING_CONTENT))
                retrieved = await self.retrieval.retrieve([r.url for r in results])
                for page in retrieved:
                    run.emit(streaming.content(tool_call_id, page))
                run.sources.extend(retrieved)
                results = merge_with_retrieved(results, retrieved)
        except asyncio.CancelledError:
            # Run cancelled mid-step (wall-clock timeout); the query still gets a terminal status.
            run.emit(streaming.query(tool_call_id, query, QueryStatus.ERROR))
            raise
        except Exception as e:
            logger.warning("web_search step %s failed: %s", tool_call_id, e)
            run.emit(streaming.query(tool_call_id, query, QueryStatus.ERROR))
            return results

        run.emit(streaming.query(tool_call_id, query, QueryStatus.COMPLETED))
        return results
