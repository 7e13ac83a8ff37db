"""Full-text retrieval for search result URLs.

Retrieval runs an ordered chain of providers. Each provider receives the URLs
the previous ones could not resolve and hands back what it still could not
resolve; URLs never move backwards through the chain.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from extreme_search.config import settings
from extreme_search.models.research import SearchResult
from extreme_search.tools import exa_search, firecrawl_scraper, web_utils

logger = logging.getLogger(__name__)


class ContentProvider(Protocol):
    name: str

    async def fetch(self, urls: list[str]) -> tuple[list[SearchResult], list[str]]:
        """Return (retrieved results, URLs left unresolved)."""
        ...


@dataclass
class RetrievalReport:
    results: list[SearchResult] = field(default_factory=list)
    attempted: dict[str, list[str]] = field(default_factory=dict)
    dropped: list[str] = field(default_factory=list)


class ExaContentsProvider:
    """Batched full-text extraction; one request for every URL."""

    name = "exa"

    def __init__(self, max_chars: int | None = None):
        self.max_chars = max_chars or settings.content_max_chars

    async def fetch(self, urls: list[str]) -> tuple[list[SearchResult], list[str]]:
        raw_results = await exa_search.get_contents(urls, max_characters=self.max_chars)

        results: list[SearchResult] = []
        unresolved: list[str] = []
        returned: set[str] = set()
        for item in raw_results:
            url = item.get("url") or ""
            if not url:
                continue
            returned.add(url)
            text = item.get("text") or ""
            if not text.strip():
                unresolved.append(url)
                continue
            results.append(
                SearchResult(
                    title=item.get("title") or web_utils.fallback_title(url),
                    url=url,
                    content=text,
                    published_date=item.get("publishedDate") or "",
                    favicon=item.get("favicon") or web_utils.favicon_url(url),
                )
            )

        unresolved.extend(url for url in urls if url not in returned)
        return results, unresolved


class FirecrawlScrapeProvider:
    """Per-URL scrape fallback, one request at a time to stay inside provider quota."""

    name = "firecrawl"

    def __init__(self, max_chars: int | None = None):
        self.max_chars = max_chars or settings.content_max_chars

    async def fetch(self, urls: list[str]) -> tuple[list[SearchResult], list[str]]:
        results: list[SearchResult] = []
        unresolved: list[str] = []
        for url in urls:
            try:
                scraped = await firecrawl_scraper.scrape(url)
            except Exception as e:
                logger.warning("Fallback scrape failed for %s: %s", url, e)
                unresolved.append(url)
                continue
            if not scraped.markdown:
                unresolved.append(url)
                continue
            results.append(
                SearchResult(
                    title=scraped.title or web_utils.fallback_title(url),
                    url=url,
                    content=web_utils.truncate(scraped.markdown, self.max_chars),
                    published_date=scraped.published_date,
                    favicon=web_utils.favicon_url(url),
                )
            )
        return results, unresolved


class ContentRetrievalChain:
    def __init__(self, providers: list[ContentProvider] | None = None):
        self.providers: list[ContentProvider] = (
            providers if providers is not None else [ExaContentsProvider(), FirecrawlScrapeProvider()]
        )

    async def retrieve_with_report(self, urls: list[str]) -> RetrievalReport:
        report = RetrievalReport()
        pending = list(dict.fromkeys(urls))
        for provider in self.providers:
            if not pending:
                break
            report.attempted[provider.name] = list(pending)
            try:
                found, pending = await provider.fetch(pending)
            except Exception as e:
                # Whole-provider failure: everything moves on to the next provider.
                logger.warning(
                    "Content provider %s failed for %d urls: %s", provider.name, len(pending), e
                )
                continue
            report.results.extend(found)
        report.dropped = pending
        if pending:
            logger.info(
                "Dropped %d urls with no retrievable content after %s",
                len(pending),
                ", ".join(report.attempted),
            )
        return report

    async def retrieve(self, urls: list[str]) -> list[SearchResult]:
        """Retrieve full text for urls. Never raises; unresolved URLs are omitted."""
        report = await self.retrieve_with_report(urls)
        return report.results
