"""Tests for plan generation."""
from datetime import date

import pytest

from extreme_search.agents.planner import PLAN_TOOL_NAME, Planner
from extreme_search.models.events import EventKind
from extreme_search.services import streaming
from extreme_search.services.event_sink import ListSink


@pytest.mark.asyncio
async def test_plan_emits_status_events_around_generation(helpers):
    payload = helpers.valid_plan_payload(topics=3, todos=4)
    client = helpers.fake_client([
        helpers.llm_response(helpers.tool_block("plan_1", PLAN_TOOL_NAME, payload))
    ])
    sink = ListSink()

    result = await Planner(model="test-model", client=client).plan(
        "Impact of interest rate changes on mortgage markets in 2024",
        sink=sink,
        today=date(2026, 10, 19),
    )

    assert result.ok
    assert result.plan.step_budget == 12
    assert [e.kind for e in sink.events] == [EventKind.PLAN, EventKind.PLAN]
    assert sink.events[0].data == {"status": {"title": streaming.PLANNING_TITLE}}
    assert sink.events[1].data["status"]["title"] == streaming.PLAN_READY_TITLE
    assert len(sink.events[1].data["plan"]) == 3


@pytest.mark.asyncio
async def test_plan_forces_structured_tool_and_grounds_date(helpers):
    client = helpers.fake_client([
        helpers.llm_response(
            helpers.tool_block("plan_1", PLAN_TOOL_NAME, helpers.valid_plan_payload())
        )
    ])

    await Planner(model="planner-model", client=client).plan("topic", today=date(2026, 10, 19))

    kwargs = client.messages.create.await_args.kwargs
    assert kwargs["model"] == "planner-model"
    assert kwargs["tool_choice"] == {"type": "tool", "name": PLAN_TOOL_NAME}
    assert kwargs["tools"][0]["input_schema"]["properties"]["plan"]["maxItems"] == 5
    user_prompt = kwargs["messages"][0]["content"]
    assert "Plan out the research for the following topic: topic." in user_prompt
    assert "Mon, Oct 19, 2026" in user_prompt


@pytest.mark.asyncio
async def test_plan_with_six_topics_is_a_violation(helpers):
    client = helpers.fake_client([
        helpers.llm_response(
            helpers.tool_block("plan_1", PLAN_TOOL_NAME, helpers.valid_plan_payload(topics=6))
        )
    ])
    sink = ListSink()

    result = await Planner(model="m", client=client).plan("topic", sink=sink)

    assert not result.ok
    assert result.violation is not None
    # Only the "planning" event; no plan-ready transition.
    assert len(sink.events) == 1
    client.messages.create.assert_awaited_once()


@pytest.mark.asyncio
async def test_plan_without_tool_call_is_a_violation(helpers):
    client = helpers.fake_client([helpers.llm_response(helpers.text_block("here is a plan"))])

    result = await Planner(model="m", client=client).plan("topic")

    assert not result.ok
    assert "no structured plan" in result.violation.message


@pytest.mark.asyncio
async def test_plan_transport_error_propagates(helpers):
    client = helpers.fake_client(ConnectionError("provider outage"))

    with pytest.raises(ConnectionError):
        await Planner(model="m", client=client).plan("topic")


def test_planner_uses_planner_model_override(monkeypatch):
    from extreme_search import llm_client

    monkeypatch.setattr(llm_client.settings, "planner_model", "openai/gpt-5-mini")

    assert Planner(client=object()).model == "openai/gpt-5-mini"
