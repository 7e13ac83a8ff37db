from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

SSE_EVENT_NAME = "extreme_search"


class EventKind(str, Enum):
    PLAN = "plan"
    QUERY = "query"
    SOURCE = "source"
    CONTENT = "content"
    CODE = "code"


class QueryStatus(str, Enum):
    STARTED = "started"
    READING_CONTENT = "reading_content"
    COMPLETED = "completed"
    ERROR = "error"


class CodeStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class ProgressEvent:
    kind: EventKind
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def query_id(self) -> str | None:
        return self.data.get("queryId")

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, **self.data}
