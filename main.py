"""Extreme Search - autonomous research agent

Simple CLI for running research prompts.
"""

import argparse
import asyncio
import json

from extreme_search.agents.orchestrator import ResearchOrchestrator, research_topic
from extreme_search.models.events import EventKind, ProgressEvent
from extreme_search.services.event_sink import CallbackSink


def print_event(event: ProgressEvent) -> None:
    data = event.data

    if event.kind is EventKind.PLAN:
        print(f"\n[*] {data['status']['title']}")
        for i, topic in enumerate(data.get("plan", []), 1):
            print(f"  {i}. {topic['title']}")
            for todo in topic["todos"]:
                print(f"     - {todo}")

    elif event.kind is EventKind.QUERY:
        print(f"\n[~] {data['query']} ({data['status']})")

    elif event.kind is EventKind.SOURCE:
        print(f"  [+] {data['source']['url']}")

    elif event.kind is EventKind.CONTENT:
        print(f"  [=] read {data['content']['url']}")


async def run_research(prompt: str, model: str | None = None, as_json: bool = False):
    """Run research on the given prompt."""
    print(f"Research prompt: {prompt}")
    print("-" * 50)

    bundle = await research_topic(
        prompt,
        CallbackSink(print_event),
        orchestrator=ResearchOrchestrator(model=model),
    )

    if as_json:
        print(json.dumps(bundle.to_dict(), indent=2))
        return

    print(f"\n[*] Research Complete!")
    print(f"   Tool calls: {len(bundle.tool_results)}")
    print(f"   Sources: {len(bundle.sources)}")
    print(f"   Charts: {len(bundle.charts)}")
    print(f"\n{'='*50}")
    print("FINDINGS:")
    print(f"{'='*50}")
    print(bundle.text)


def main():
    parser = argparse.ArgumentParser(description="Extreme Search research agent")
    parser.add_argument("--prompt", "-p", required=True, help="Research prompt")
    parser.add_argument("--model", "-m", help="Model to use (default: from config)")
    parser.add_argument("--json", action="store_true", help="Print the full result bundle as JSON")

    args = parser.parse_args()

    asyncio.run(run_research(args.prompt, args.model, args.json))


if __name__ == "__main__":
    main()
