from __future__ import annotations

from typing import Any

import httpx

from extreme_search.config import settings
from extreme_search.exceptions import ConfigurationError, ProviderError
from extreme_search.models.research import SearchCategory, SearchResult


def _headers() -> dict[str, str]:
    if not settings.exa_api_key:
        raise ConfigurationError("EXA_API_KEY is not configured")
    return {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "x-api-key": settings.exa_api_key,
    }


async def _post(path: str, payload: dict[str, Any]) -> dict[str, Any]:
    endpoint = settings.exa_base_url.rstrip("/") + path
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        response = await client.post(endpoint, json=payload, headers=_headers())
        response.raise_for_status()
        data = response.json()
    if not isinstance(data, dict):
        raise ProviderError("exa", f"unexpected response body from {path}")
    return data


async def search(
    query: str,
    *,
    num_results: int = 8,
    category: SearchCategory | None = None,
    include_domains: list[str] | None = None,
) -> list[SearchResult]:
    """Run an Exa search with page text included and normalize the results."""
    payload: dict[str, Any] = {
        "query": query,
        "numResults": num_results,
        "type": "auto",
        "contents": {"text": {"maxCharacters": settings.content_max_chars}},
    }
    if category:
        payload["category"] = category.provider_value
    if include_domains:
        payload["includeDomains"] = include_domains

    data = await _post("/search", payload)
    return [
        SearchResult(
            title=item.get("title") or "",
            url=item.get("url") or "",
            content=item.get("text") or "",
            published_date=item.get("publishedDate") or "",
            favicon=item.get("favicon") or "",
        )
        for item in data.get("results", [])
        if isinstance(item, dict) and item.get("url")
    ][:num_results]


async def get_contents(urls: list[str], *, max_characters: int) -> list[dict[str, Any]]:
    """Fetch full text for a batch of URLs; returns the raw per-URL result objects."""
    payload = {
        "urls": urls,
        "text": {"maxCharacters": max_characters, "includeHtmlTags": False},
        "livecrawl": "preferred",
    }
    data = await _post("/contents", payload)
    return [item for item in data.get("results", []) if isinstance(item, dict)]
