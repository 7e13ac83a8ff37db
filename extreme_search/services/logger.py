"""Logging setup for research runs.

Importing this module configures the root logger once (file under
settings.log_dir plus console). The helpers below write one JSON line per
model call, agent step or run-level event so a run can be traced by run_id.
"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from extreme_search.config import settings

LOG_DIR = Path(settings.log_dir)
LOG_DIR.mkdir(parents=True, exist_ok=True)

APP_LOG_LEVEL = getattr(logging, settings.app_log_level.upper(), logging.INFO)
NOISY_LOG_LEVEL = getattr(logging, settings.noisy_log_level.upper(), logging.WARNING)

logging.basicConfig(
    level=APP_LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.FileHandler(LOG_DIR / "extreme_search.log"),
        logging.StreamHandler(),
    ],
)

# HTTP clients and the server log every request at INFO.
for noisy in (
    "uvicorn.access",
    "sse_starlette.sse",
    "httpx",
    "httpcore",
    "anthropic._base_client",
):
    logging.getLogger(noisy).setLevel(NOISY_LOG_LEVEL)

logger = logging.getLogger("extreme_search")


def _emit(tag: str, payload: dict[str, Any]) -> None:
    payload = {"timestamp": datetime.now(timezone.utc).isoformat(), **payload}
    logger.info(f"{tag}: {json.dumps(payload, default=str)}")


def log_llm_call(
    model: str,
    caller: str,
    input_tokens: int = 0,
    output_tokens: int = 0,
    duration_ms: int = 0,
    status: str = "success",
    error: Optional[str] = None,
) -> None:
    """Token usage and latency of one planner or agent generation."""
    _emit(
        "LLM_CALL",
        {
            "model": model,
            "caller": caller,
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": input_tokens + output_tokens,
            "duration_ms": duration_ms,
            "status": status,
            "error": error,
        },
    )


def log_research_step(
    run_id: str,
    step_type: str,
    status: str,
    data: Optional[dict[str, Any]] = None,
) -> None:
    """One agent step (a tool call or the agent pass itself) within a run."""
    _emit(
        "RESEARCH_STEP",
        {"run_id": run_id, "step_type": step_type, "status": status, "data": data},
    )


def log_event(event_type: str, message: str, **kwargs: Any) -> None:
    _emit("EVENT", {"event_type": event_type, "message": message, **kwargs})
