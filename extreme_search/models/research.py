from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class SearchCategory(str, Enum):
    NEWS = "news"
    COMPANY = "company"
    RESEARCH_PAPER = "research_paper"
    GITHUB = "github"
    FINANCIAL_REPORT = "financial_report"

    @property
    def provider_value(self) -> str:
        """Category spelling expected by the search provider."""
        return self.value.replace("_", " ")


@dataclass
class SearchResult:
    title: str
    url: str
    content: str
    published_date: str = ""
    favicon: str = ""

    def with_content(self, content: str) -> SearchResult:
        return replace(self, content=content)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "content": self.content,
            "publishedDate": self.published_date,
            "favicon": self.favicon,
        }

    def to_tool_output(self) -> dict[str, Any]:
        """Shape returned to the model for one search result."""
        return {
            "title": self.title,
            "url": self.url,
            "content": self.content,
            "publishedDate": self.published_date,
        }


def results_to_dicts(results: list[SearchResult]) -> list[dict[str, Any]]:
    """Convert SearchResult list to JSON-serializable dicts."""
    return [r.to_dict() for r in results]


@dataclass
class ToolCallRecord:
    """One tool invocation made by the agent, kept verbatim."""

    tool_call_id: str
    tool_name: str
    input: dict[str, Any]
    output: Any
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "toolCallId": self.tool_call_id,
            "toolName": self.tool_name,
            "input": self.input,
            "output": self.output,
            "isError": self.is_error,
        }


@dataclass
class AgentRunResult:
    text: str
    tool_results: list[ToolCallRecord] = field(default_factory=list)
    steps_used: int = 0


@dataclass
class ResearchBundle:
    text: str
    tool_results: list[ToolCallRecord] = field(default_factory=list)
    sources: list[SearchResult] = field(default_factory=list)
    charts: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "toolResults": [r.to_dict() for r in self.tool_results],
            "sources": results_to_dicts(self.sources),
            "charts": self.charts,
        }
