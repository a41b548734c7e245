"""Structured tool-event logging and in-process request metrics."""

from __future__ import annotations

import json
import sys
import threading
import time
from dataclasses import dataclass, field
from typing import Any


@dataclass
class HealthSnapshot:
    uptime_seconds: float
    total_requests: int
    error_rate: float
    avg_latency_ms: float
    calls_by_tool: dict[str, int] = field(default_factory=dict)


class ServerMetrics:
    def __init__(self, started_at: float | None = None) -> None:
        self.started_at = started_at or time.time()
        self._lock = threading.Lock()
        self.total_requests = 0
        self.error_requests = 0
        self.total_latency_ms = 0.0
        self.calls_by_tool: dict[str, int] = {}

    def record(self, tool: str, latency_ms: float, success: bool) -> None:
        with self._lock:
            self.total_requests += 1
            if not success:
                self.error_requests += 1
            self.total_latency_ms += max(0.0, latency_ms)
            self.calls_by_tool[tool] = self.calls_by_tool.get(tool, 0) + 1

    def snapshot(self) -> HealthSnapshot:
        with self._lock:
            requests = self.total_requests
            avg_latency = (self.total_latency_ms / requests) if requests else 0.0
            error_rate = (self.error_requests / requests) if requests else 0.0
            calls = dict(self.calls_by_tool)
        return HealthSnapshot(
            uptime_seconds=max(0.0, time.time() - self.started_at),
            total_requests=requests,
            error_rate=error_rate,
            avg_latency_ms=avg_latency,
            calls_by_tool=calls,
        )


def log_tool_event(
    tool: str,
    asset_count: int | None,
    latency_ms: float,
    success: bool,
    warning: str | None = None,
) -> None:
    payload: dict[str, Any] = {
        "tool": tool,
        "asset_count": asset_count,
        "latency_ms": round(latency_ms, 3),
        "success": success,
        "timestamp": int(time.time()),
    }
    if warning:
        payload["warning"] = warning
    print(json.dumps(payload, ensure_ascii=True), file=sys.stderr)
