from __future__ import annotations

import logging
from dataclasses import dataclass, field

from extreme_search.config import settings
from extreme_search.models.research import SearchCategory, SearchResult
from extreme_search.tools import exa_search

logger = logging.getLogger(__name__)


@dataclass
class SearchResponse:
    results: list[SearchResult] = field(default_factory=list)
    provider: str = "exa"
    error: str | None = None


async def search(
    query: str,
    *,
    category: SearchCategory | None = None,
    include_domains: list[str] | None = None,
    max_results: int | None = None,
) -> SearchResponse:
    """Run one web search. Provider failures yield an empty response, never an exception."""
    limit = max_results or settings.search_max_results
    try:
        results = await exa_search.search(
            query,
            num_results=limit,
            category=category,
            include_domains=include_domains,
        )
    except Exception as e:
        logger.warning("Search failed for %r: %s", query, e)
        return SearchResponse(results=[], error=str(e))
    return SearchResponse(results=results[:limit])
