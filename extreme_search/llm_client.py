"""LLM client factory for Anthropic and OpenRouter."""
from __future__ import annotations

from extreme_search.config import settings


def get_client():
    """Get an AsyncAnthropic client pointed at OpenRouter or Anthropic.

    If openrouter_model is set, uses OpenRouter's Anthropic-compatible API.
    Otherwise, uses the Anthropic API directly.
    """
    import anthropic

    if settings.openrouter_model and settings.openrouter_api_key:
        return anthropic.AsyncAnthropic(
            api_key=settings.openrouter_api_key,
            base_url=settings.openrouter_base_url,
        )
    return anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)


def get_model() -> str:
    """Get the active model based on config."""
    if settings.openrouter_model and settings.openrouter_api_key:
        return settings.openrouter_model
    return settings.default_model


def get_planner_model() -> str:
    override = settings.planner_model.strip()
    return override or get_model()
