from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from extreme_search.models.research import ResearchBundle
from extreme_search.tools.extreme_search_tool import (
    TOOL_NAME,
    execute_extreme_search_tool,
    extreme_search_tool_definition,
)


def test_definition_requires_prompt():
    definition = extreme_search_tool_definition()

    assert definition["name"] == TOOL_NAME
    assert definition["input_schema"]["required"] == ["prompt"]
    assert "exact prompt" in definition["input_schema"]["properties"]["prompt"]["description"]


@pytest.mark.asyncio
async def test_execute_wraps_bundle():
    research = AsyncMock(return_value=ResearchBundle(text="Report."))
    with patch("extreme_search.tools.extreme_search_tool.research_topic", new=research):
        output = await execute_extreme_search_tool({"prompt": "quantum error correction"})

    assert output == {
        "research": {"text": "Report.", "toolResults": [], "sources": [], "charts": []}
    }
    assert research.await_args.args[0] == "quantum error correction"


@pytest.mark.asyncio
async def test_execute_rejects_missing_prompt():
    with pytest.raises(ValidationError):
        await execute_extreme_search_tool({})
