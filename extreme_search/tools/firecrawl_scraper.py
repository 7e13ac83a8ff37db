from __future__ import annotations

from dataclasses import dataclass

import httpx

from extreme_search.config import settings
from extreme_search.exceptions import ProviderError


@dataclass
class ScrapeResult:
    """Markdown scraped by Firecrawl for one URL."""
    url: str
    markdown: str
    title: str = ""
    published_date: str = ""


async def scrape(url: str) -> ScrapeResult:
    """Scrape a single URL to markdown, parsing PDFs when the page is one.

    API: POST <base>/v2/scrape
    """
    endpoint = settings.firecrawl_base_url.rstrip("/") + "/v2/scrape"
    headers = {"Content-Type": "application/json"}
    if settings.firecrawl_api_key:
        headers["Authorization"] = f"Bearer {settings.firecrawl_api_key}"

    payload = {
        "url": url,
        "formats": ["markdown"],
        "proxy": "auto",
        "storeInCache": True,
        "parsers": ["pdf"],
    }
    async with httpx.AsyncClient(
        timeout=settings.scrape_timeout_seconds,
        follow_redirects=True,
    ) as client:
        response = await client.post(endpoint, json=payload, headers=headers)
        response.raise_for_status()
        data = response.json()

    body = data.get("data", data) if isinstance(data, dict) else None
    if not isinstance(body, dict):
        raise ProviderError("firecrawl", f"unexpected response body for {url}")

    metadata = body.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}
    return ScrapeResult(
        url=url,
        markdown=str(body.get("markdown") or ""),
        title=str(metadata.get("title") or ""),
        published_date=str(metadata.get("publishedDate") or ""),
    )
