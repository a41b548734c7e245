"""Shared tool-layer helpers."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from portfolio_lens.runtime.monitoring import ServerMetrics, log_tool_event
from portfolio_lens.runtime.response import error_response, success_response

LOGGER = logging.getLogger(__name__)


def run_tool(
    tool: str,
    asset_count: int | None,
    call: Callable[[], dict[str, Any] | str],
    metrics: ServerMetrics | None = None,
) -> str:
    """Invoke a service call, shape its JSON response and record the event."""
    started = time.perf_counter()
    success = False
    try:
        result = call()
        if isinstance(result, str):
            output = result
            success = True
        else:
            output = success_response(result)
            success = bool(result.get("ok", True))
    except Exception:
        LOGGER.exception("tool failed: %s", tool)
        output = error_response("ANALYSIS_FAILED", f"{tool} failed.")
    latency_ms = (time.perf_counter() - started) * 1000.0
    warning = None if success else "validation_or_runtime_error"
    log_tool_event(tool=tool, asset_count=asset_count, latency_ms=latency_ms, success=success, warning=warning)
    if metrics is not None:
        metrics.record(tool, latency_ms=latency_ms, success=success)
    return output
