from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from extreme_search.exceptions import PlanSchemaError

MIN_TITLE_LEN = 10
MAX_TITLE_LEN = 70
TODOS_MIN = 3
TODOS_MAX = 5
PLAN_MIN = 1
PLAN_MAX = 5


class ResearchTopic(BaseModel):
    """One research topic with its ordered sub-tasks."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(
        min_length=MIN_TITLE_LEN,
        max_length=MAX_TITLE_LEN,
        description="A title for the research topic",
    )
    todos: tuple[str, ...] = Field(
        min_length=TODOS_MIN,
        max_length=TODOS_MAX,
        description="A list of what to research for the given title",
    )


class ResearchPlan(BaseModel):
    """Ordered, bounded list of research topics."""

    model_config = ConfigDict(frozen=True)

    plan: tuple[ResearchTopic, ...] = Field(min_length=PLAN_MIN, max_length=PLAN_MAX)

    @property
    def step_budget(self) -> int:
        """Total number of todos across all topics."""
        return sum(len(topic.todos) for topic in self.plan)

    def to_list(self) -> list[dict[str, Any]]:
        return [{"title": t.title, "todos": list(t.todos)} for t in self.plan]

    def to_json(self) -> str:
        return json.dumps(self.to_list())

    @classmethod
    def input_schema(cls) -> dict[str, Any]:
        """JSON schema used as the structured-output tool schema."""
        return {
            "type": "object",
            "properties": {
                "plan": {
                    "type": "array",
                    "minItems": PLAN_MIN,
                    "maxItems": PLAN_MAX,
                    "items": {
                        "type": "object",
                        "properties": {
                            "title": {
                                "type": "string",
                                "minLength": MIN_TITLE_LEN,
                                "maxLength": MAX_TITLE_LEN,
                                "description": "A title for the research topic",
                            },
                            "todos": {
                                "type": "array",
                                "items": {"type": "string"},
                                "minItems": TODOS_MIN,
                                "maxItems": TODOS_MAX,
                                "description": "A list of what to research for the given title",
                            },
                        },
                        "required": ["title", "todos"],
                    },
                }
            },
            "required": ["plan"],
        }


@dataclass
class PlanSchemaViolation:
    """Why a generated plan was rejected."""

    message: str
    errors: list[dict[str, Any]] = field(default_factory=list)
    raw: Any = None

    @classmethod
    def from_validation_error(cls, exc: ValidationError, raw: Any) -> PlanSchemaViolation:
        return cls(
            message=f"{exc.error_count()} validation error(s)",
            errors=[
                {"loc": list(err["loc"]), "type": err["type"], "msg": err["msg"]}
                for err in exc.errors()
            ],
            raw=raw,
        )


@dataclass
class PlanResult:
    """Tagged result of plan generation: exactly one of plan/violation is set."""

    plan: ResearchPlan | None = None
    violation: PlanSchemaViolation | None = None

    @property
    def ok(self) -> bool:
        return self.plan is not None

    def unwrap(self) -> ResearchPlan:
        if self.plan is None:
            raise PlanSchemaError(
                self.violation or PlanSchemaViolation(message="no plan generated")
            )
        return self.plan


def parse_plan(raw: Any) -> PlanResult:
    """Validate raw structured output into a plan result."""
    try:
        return PlanResult(plan=ResearchPlan.model_validate(raw))
    except ValidationError as exc:
        return PlanResult(violation=PlanSchemaViolation.from_validation_error(exc, raw))
