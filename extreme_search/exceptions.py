"""Exceptions raised by the research engine."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from extreme_search.models.plan import PlanSchemaViolation


class ExtremeSearchError(Exception):
    """Base exception for research engine errors."""


class ConfigurationError(ExtremeSearchError):
    """Raised when a required provider setting is missing."""


class ProviderError(ExtremeSearchError):
    """Raised by a search or extraction provider client when a request fails."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class PlanSchemaError(ExtremeSearchError):
    """Raised when the generated research plan does not match the plan schema."""

    def __init__(self, violation: PlanSchemaViolation):
        super().__init__(f"Research plan violates schema: {violation.message}")
        self.violation = violation


class ResearchTimeoutError(ExtremeSearchError):
    """Raised when the agent run exceeds the wall-clock budget."""
