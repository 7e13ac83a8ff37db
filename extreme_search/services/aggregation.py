from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from extreme_search.config import settings
from extreme_search.models.research import SearchResult, ToolCallRecord
from extreme_search.tools import web_utils

ELLIPSIS = "..."
CODE_TOOL_NAMES = frozenset({"code_runner", "codeRunner"})


def aggregate_sources(
    sources: Iterable[SearchResult],
    *,
    max_chars: int | None = None,
) -> list[SearchResult]:
    """Deduplicate sources by URL, keeping the last occurrence, and cap content length."""
    limit = max_chars if max_chars is not None else settings.content_max_chars
    by_url: dict[str, SearchResult] = {}
    for item in sources:
        by_url[item.url] = item
    return [
        item.with_content(web_utils.truncate(item.content or "", limit, ellipsis=ELLIPSIS))
        for item in by_url.values()
    ]


def extract_charts(tool_results: Iterable[ToolCallRecord]) -> list[Any]:
    """Flatten chart artifacts produced by code-execution tool calls, in call order."""
    charts: list[Any] = []
    for record in tool_results:
        if record.tool_name not in CODE_TOOL_NAMES:
            continue
        if not isinstance(record.output, Mapping) or "charts" not in record.output:
            continue
        charts.extend(record.output.get("charts") or [])
    return charts
