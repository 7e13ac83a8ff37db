from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from extreme_search.models.research import SearchResult


def text_block(text: str) -> SimpleNamespace:
    return SimpleNamespace(type="text", text=text)


def tool_block(block_id: str, name: str, tool_input: dict[str, Any]) -> SimpleNamespace:
    return SimpleNamespace(type="tool_use", id=block_id, name=name, input=tool_input)


def llm_response(*blocks: SimpleNamespace) -> SimpleNamespace:
    return SimpleNamespace(
        content=list(blocks),
        usage=SimpleNamespace(input_tokens=10, output_tokens=5),
    )


def fake_client(side_effect: Any) -> MagicMock:
    client = MagicMock()
    client.messages.create = AsyncMock(side_effect=side_effect)
    return client


def valid_plan_payload(topics: int = 3, todos: int = 4) -> dict[str, Any]:
    return {
        "plan": [
            {
                "title": f"Research topic number {i}",
                "todos": [f"todo {i}.{j}" for j in range(todos)],
            }
            for i in range(topics)
        ]
    }


def make_result(url: str, content: str = "snippet", title: str = "Title") -> SearchResult:
    return SearchResult(
        title=title,
        url=url,
        content=content,
        published_date="2024-09-01",
        favicon=f"{url}/favicon.ico",
    )


class FakeProvider:
    """Content provider double that records what it was asked for."""

    def __init__(self, name: str, resolved: dict[str, str] | None = None, error: Exception | None = None):
        self.name = name
        self.resolved = resolved or {}
        self.error = error
        self.calls: list[list[str]] = []

    async def fetch(self, urls: list[str]):
        self.calls.append(list(urls))
        if self.error is not None:
            raise self.error
        found = [make_result(u, self.resolved[u]) for u in urls if u in self.resolved]
        return found, [u for u in urls if u not in self.resolved]


@pytest.fixture
def helpers() -> SimpleNamespace:
    return SimpleNamespace(
        text_block=text_block,
        tool_block=tool_block,
        llm_response=llm_response,
        fake_client=fake_client,
        valid_plan_payload=valid_plan_payload,
        make_result=make_result,
        FakeProvider=FakeProvider,
    )
