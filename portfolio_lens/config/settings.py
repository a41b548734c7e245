"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from portfolio_lens.portfolio.constants import ValidationLimits


@dataclass(frozen=True)
class Settings:
    """Runtime settings for local/stdin and HTTP-hosted modes."""

    app_name: str = "portfolio-lens"
    app_version: str = "1.0.0"
    transport_mode: str = "auto"
    http_transport: str = "sse"
    host: str = "0.0.0.0"
    port: int = 8000
    mcp_path: str = "/mcp"
    health_path: str = "/health"
    log_level: str = "INFO"
    max_assets: int = 50
    min_assets: int = 1
    max_single_asset_allocation: float = 80.0
    max_cash_allocation: float = 50.0
    allocation_tolerance: float = 0.01
    dollar_tolerance: float = 0.01

    def validation_limits(self) -> ValidationLimits:
        return ValidationLimits(
            max_assets=self.max_assets,
            min_assets=self.min_assets,
            max_single_asset_allocation=self.max_single_asset_allocation,
            max_cash_allocation=self.max_cash_allocation,
            allocation_tolerance=self.allocation_tolerance,
            dollar_tolerance=self.dollar_tolerance,
        )


def _as_int(value: str | None, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _as_float(value: str | None, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def get_settings() -> Settings:
    """Load runtime settings from environment variables."""
    load_dotenv()

    return Settings(
        app_name=os.getenv("APP_NAME", "portfolio-lens"),
        transport_mode=os.getenv("TRANSPORT_MODE", "auto").strip().lower(),
        http_transport=os.getenv("HTTP_TRANSPORT", "sse").strip().lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_as_int(os.getenv("PORT"), 8000),
        mcp_path=os.getenv("MCP_PATH", "/mcp"),
        health_path=os.getenv("HEALTH_PATH", "/health"),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        max_assets=_as_int(os.getenv("PORTFOLIO_MAX_ASSETS"), 50),
        min_assets=_as_int(os.getenv("PORTFOLIO_MIN_ASSETS"), 1),
        max_single_asset_allocation=_as_float(os.getenv("PORTFOLIO_MAX_SINGLE_ALLOCATION"), 80.0),
        max_cash_allocation=_as_float(os.getenv("PORTFOLIO_MAX_CASH_ALLOCATION"), 50.0),
        allocation_tolerance=_as_float(os.getenv("PORTFOLIO_ALLOCATION_TOLERANCE"), 0.01),
        dollar_tolerance=_as_float(os.getenv("PORTFOLIO_DOLLAR_TOLERANCE"), 0.01),
    )
