"""Response shaping helpers for MCP tools."""

from __future__ import annotations

import json
import time
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any

DISCLAIMER = "Analytics are for informational purposes only and do not constitute financial advice."


def convert_data(data: Any) -> Any:
    if is_dataclass(data) and not isinstance(data, type):
        return convert_data(asdict(data))
    if isinstance(data, Enum):
        return data.value
    if isinstance(data, (list, tuple)):
        return [convert_data(item) for item in data]
    if isinstance(data, dict):
        return {convert_data(key): convert_data(value) for key, value in data.items()}
    return data


def success_response(payload: dict[str, Any]) -> str:
    body = dict(convert_data(payload))
    body.setdefault("disclaimer", DISCLAIMER)
    body["timestamp"] = int(time.time())
    return json.dumps(body, ensure_ascii=True)


def error_response(code: str, message: str) -> str:
    return json.dumps(
        {
            "ok": False,
            "error": True,
            "code": code,
            "message": message,
            "timestamp": int(time.time()),
        },
        ensure_ascii=True,
    )
