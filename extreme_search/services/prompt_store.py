"""Prompt catalog for the planner, the research agent and the tool wrapper.

Prompts live in prompts/prompts.json under dotted keys ("agent.system_prompt").
Long prompts are stored as a list of lines. Placeholders use string.Template
syntax ($today, $step_budget) and every placeholder must be supplied.
"""
from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from string import Template
from typing import Any


PROMPTS_PATH = Path(__file__).resolve().parents[1] / "prompts" / "prompts.json"
_catalog: dict[str, Any] | None = None
_catalog_mtime_ns: int | None = None


def _catalog_snapshot() -> dict[str, Any]:
    """Parsed catalog, re-read only when the file changes on disk."""
    global _catalog, _catalog_mtime_ns
    mtime_ns = PROMPTS_PATH.stat().st_mtime_ns
    if _catalog is None or _catalog_mtime_ns != mtime_ns:
        payload = json.loads(PROMPTS_PATH.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"{PROMPTS_PATH.name} must hold a JSON object")
        _catalog, _catalog_mtime_ns = payload, mtime_ns
    return _catalog


def _template_for(key: str) -> Template:
    node: Any = _catalog_snapshot()
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            raise KeyError(f"Prompt key not found: {key}")
        node = node[part]

    if isinstance(node, list) and all(isinstance(line, str) for line in node):
        return Template("\n".join(node))
    if isinstance(node, str):
        return Template(node)
    raise TypeError(f"Prompt {key} must be a string or a list of lines")


def render_prompt(key: str, **values: Any) -> str:
    template = _template_for(key)
    try:
        return template.substitute(**values)
    except KeyError as exc:
        raise KeyError(f"Missing template value '{exc.args[0]}' for prompt '{key}'") from exc


def format_today(today: date | None = None) -> str:
    """Date as the prompts show it, e.g. 'Mon, Oct 19, 2026'."""
    return (today or date.today()).strftime("%a, %b %d, %Y")
